"""
Response body decoding.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any

from nylas_client.errors import DecodeError


class ResponseFormat(str, Enum):
    """How a response body is decoded."""

    JSON = "json"
    TEXT = "text"


class ResponseDecoder:
    """Decodes raw response bodies into payloads."""

    def decode(self, text: str, fmt: ResponseFormat = ResponseFormat.JSON) -> Any:
        """Decode a response body.

        Empty bodies decode to None regardless of format.

        Args:
            text: Raw body text
            fmt: Expected body format

        Returns:
            Decoded payload

        Raises:
            DecodeError: If a JSON body is malformed
        """
        if not text.strip():
            return None
        if fmt is ResponseFormat.TEXT:
            return text
        try:
            return json.loads(text)
        except ValueError as e:
            raise DecodeError(
                f"Response body is not valid JSON: {e}",
                body=text,
                expected=fmt.value,
            ) from e

    def try_decode_json(self, text: str) -> Any:
        """Decode JSON, returning None instead of raising."""
        try:
            return self.decode(text, ResponseFormat.JSON)
        except DecodeError:
            return None
