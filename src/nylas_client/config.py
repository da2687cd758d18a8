"""
Client configuration.

ClientOptions holds process-wide settings fixed at client construction:
server base URL, credentials, timeouts, default batch concurrency and the
default decode mode. PoolConfig derives the httpx connection limits and
timeouts from it.
"""

from __future__ import annotations

import os
from contextlib import suppress
from typing import Any

import httpx
import pydantic
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from nylas_client.batch.outcome import DecodeMode
from nylas_client.endpoints import DEFAULT_SERVER
from nylas_client.validation import to_validation_error

_DEFAULT_TIMEOUT = 30.0
_DEFAULT_CONNECT_TIMEOUT = 10.0
_DEFAULT_MAX_CONCURRENCY = 10

_TRUE_VALUES = {"1", "true", "yes", "on"}


class ClientOptions(BaseModel):
    """Validated client options."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    client_id: str | None = Field(default=None, description="Application client ID")
    client_secret: str | None = Field(default=None, description="Application client secret")
    access_token: str | None = Field(default=None, description="Account access token")
    account_id: str | None = Field(default=None, description="Account ID")

    server: str = Field(default=DEFAULT_SERVER, description="API base URL")
    timeout: float = Field(
        default=_DEFAULT_TIMEOUT, gt=0, description="Per-request timeout in seconds"
    )
    connect_timeout: float = Field(
        default=_DEFAULT_CONNECT_TIMEOUT, gt=0, description="Connect timeout in seconds"
    )

    max_concurrency: int = Field(
        default=_DEFAULT_MAX_CONCURRENCY, ge=1, description="Default in-flight limit per batch"
    )
    max_connections: int = Field(default=100, ge=1, description="Connection pool size")
    max_keepalive_connections: int = Field(default=20, ge=0, description="Idle connections kept")

    decode_mode: DecodeMode = Field(
        default=DecodeMode.STRICT, description="Default decode mode for batch calls"
    )
    debug: bool = Field(default=False, description="Enable debug logging")
    log_file: str | None = Field(default=None, description="Append debug logs to this file")

    @field_validator(
        "client_id", "client_secret", "access_token", "account_id", "log_file", "server"
    )
    @classmethod
    def _not_empty(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("must not be empty")
        return value

    @field_validator("server")
    @classmethod
    def _strip_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @model_validator(mode="after")
    def _check_secret_pair(self) -> ClientOptions:
        if (self.client_id is None) != (self.client_secret is None):
            raise ValueError("client_id and client_secret must be set together")
        return self

    @classmethod
    def create(cls, **values: Any) -> ClientOptions:
        """Build options, converting pydantic failures to ValidationError."""
        try:
            return cls(**values)
        except pydantic.ValidationError as e:
            raise to_validation_error(e) from e

    @classmethod
    def from_env(cls, **overrides: Any) -> ClientOptions:
        """Build options from NYLAS_* environment variables.

        Explicit overrides take precedence over the environment.
        """
        values: dict[str, Any] = {}
        env_map = {
            "client_id": "NYLAS_CLIENT_ID",
            "client_secret": "NYLAS_CLIENT_SECRET",
            "access_token": "NYLAS_ACCESS_TOKEN",
            "account_id": "NYLAS_ACCOUNT_ID",
            "server": "NYLAS_SERVER",
            "log_file": "NYLAS_LOG_FILE",
        }
        for key, env_var in env_map.items():
            value = os.getenv(env_var)
            if value:
                values[key] = value

        env_timeout = os.getenv("NYLAS_TIMEOUT_SECS")
        if env_timeout:
            with suppress(ValueError):
                values["timeout"] = float(env_timeout)

        env_concurrency = os.getenv("NYLAS_MAX_CONCURRENCY")
        if env_concurrency:
            with suppress(ValueError):
                values["max_concurrency"] = int(env_concurrency)

        if os.getenv("NYLAS_OFF_DECODE_ERROR", "").lower() in _TRUE_VALUES:
            values["decode_mode"] = DecodeMode.PASS_THROUGH_RAW
        if os.getenv("NYLAS_DEBUG", "").lower() in _TRUE_VALUES:
            values["debug"] = True

        values.update(overrides)
        return cls.create(**values)

    def with_updates(self, **changes: Any) -> ClientOptions:
        """Return a validated copy with some fields replaced."""
        return self.create(**{**self.model_dump(), **changes})

    def pool_config(self) -> PoolConfig:
        """Derive the connection pool configuration."""
        return PoolConfig(
            max_connections=max(self.max_connections, self.max_concurrency),
            max_keepalive_connections=min(
                self.max_keepalive_connections, self.max_connections
            ),
            connect_timeout=self.connect_timeout,
            read_timeout=self.timeout,
            write_timeout=self.timeout,
            pool_timeout=self.timeout,
        )


class PoolConfig(BaseModel):
    """Connection pool limits and timeouts for the shared httpx client.

    Attributes:
        max_connections: Maximum total connections
        max_keepalive_connections: Maximum idle connections to keep
        keepalive_expiry: Seconds before idle connection expires
        connect_timeout: Connection timeout in seconds
        read_timeout: Read timeout in seconds
        write_timeout: Write timeout in seconds
        pool_timeout: Timeout waiting for a free connection
    """

    model_config = ConfigDict(frozen=True)

    max_connections: int = 100
    max_keepalive_connections: int = 20
    keepalive_expiry: float = 30.0
    connect_timeout: float = _DEFAULT_CONNECT_TIMEOUT
    read_timeout: float = _DEFAULT_TIMEOUT
    write_timeout: float = _DEFAULT_TIMEOUT
    pool_timeout: float = _DEFAULT_TIMEOUT

    def to_httpx_limits(self) -> httpx.Limits:
        """Convert to httpx Limits."""
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive_connections,
            keepalive_expiry=self.keepalive_expiry,
        )

    def to_httpx_timeout(self) -> httpx.Timeout:
        """Convert to httpx Timeout."""
        return httpx.Timeout(
            connect=self.connect_timeout,
            read=self.read_timeout,
            write=self.write_timeout,
            pool=self.pool_timeout,
        )

