"""
Transport layer - HTTP client for API communication.

Provides httpx-based transport with:
- Shared connection pooling
- Timeout management
- Response decoding
"""

from nylas_client.transport.decode import ResponseDecoder, ResponseFormat
from nylas_client.transport.http import HttpTransport, RawResponse

__all__ = [
    "HttpTransport",
    "RawResponse",
    "ResponseDecoder",
    "ResponseFormat",
]
