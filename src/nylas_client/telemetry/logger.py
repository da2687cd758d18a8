"""
Structured logging for nylas-client.

Provides context-aware logging with sensitive data masking.
"""

from __future__ import annotations

import json
import logging
import re
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar

# Context variable for batch-scoped logging context
_log_context: ContextVar[dict[str, Any] | None] = ContextVar("log_context", default=None)


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


@dataclass
class LogContext:
    """Batch-scoped logging context.

    Attributes:
        batch_id: Identifier of the batch being executed
        request_id: Client-side request identifier
        account_id: Account the requests act on
        extra: Additional context fields
    """

    batch_id: str | None = None
    request_id: str | None = None
    account_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result: dict[str, Any] = {}
        if self.batch_id:
            result["batch_id"] = self.batch_id
        if self.request_id:
            result["request_id"] = self.request_id
        if self.account_id:
            result["account_id"] = self.account_id
        result.update(self.extra)
        return result


def get_log_context() -> LogContext:
    """Get current logging context."""
    data = _log_context.get()
    if not data:
        return LogContext()
    known = {k: data[k] for k in ("batch_id", "request_id", "account_id") if k in data}
    extra = {k: v for k, v in data.items() if k not in known}
    return LogContext(**known, extra=extra)


def set_log_context(context: LogContext) -> None:
    """Set logging context for current async context."""
    _log_context.set(context.to_dict())


def clear_log_context() -> None:
    """Clear logging context."""
    _log_context.set(None)


@contextmanager
def bind_log_context(**fields: Any) -> Iterator[LogContext]:
    """Add fields to the logging context for the duration of a block."""
    current = _log_context.get() or {}
    token = _log_context.set({**current, **fields})
    try:
        yield get_log_context()
    finally:
        _log_context.reset(token)


class SensitiveDataMasker:
    """Masks sensitive data in log messages."""

    DEFAULT_PATTERNS: ClassVar[list[tuple[str, str]]] = [
        # Bearer tokens
        (r"(Bearer\s+)([^\s]+)", r"\1***REDACTED***"),
        # Basic auth (access token as username)
        (r"(Basic\s+)([^\s]+)", r"\1***REDACTED***"),
        # Authorization headers
        (r"(Authorization[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1***REDACTED***"),
        # Token and secret assignments
        (r"(access[_-]?token[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1***REDACTED***"),
        (r"(client[_-]?secret[\"']?\s*[:=]\s*[\"']?)([^\"'\s]+)", r"\1***REDACTED***"),
        # Environment variable patterns
        (r"(NYLAS_ACCESS_TOKEN=)([^\s]+)", r"\1***REDACTED***"),
        (r"(NYLAS_CLIENT_SECRET=)([^\s]+)", r"\1***REDACTED***"),
    ]

    def __init__(self, patterns: list[tuple[str, str]] | None = None) -> None:
        """Initialize masker with patterns.

        Args:
            patterns: List of (pattern, replacement) tuples
        """
        self._patterns = [
            (re.compile(p, re.IGNORECASE), r)
            for p, r in (patterns or self.DEFAULT_PATTERNS)
        ]

    def mask(self, text: str) -> str:
        """Mask sensitive data in text."""
        result = text
        for pattern, replacement in self._patterns:
            result = pattern.sub(replacement, result)
        return result

    def mask_dict(self, data: dict[str, Any]) -> dict[str, Any]:
        """Mask sensitive data in dictionary.

        Args:
            data: Dictionary to mask

        Returns:
            Masked dictionary
        """
        result: dict[str, Any] = {}
        for key, value in data.items():
            key_lower = key.lower()
            if any(
                sensitive in key_lower
                for sensitive in ["token", "secret", "password", "authorization"]
            ):
                result[key] = "***REDACTED***"
            elif isinstance(value, str):
                result[key] = self.mask(value)
            elif isinstance(value, dict):
                result[key] = self.mask_dict(value)
            elif isinstance(value, list):
                result[key] = [
                    self.mask_dict(v) if isinstance(v, dict) else v for v in value
                ]
            else:
                result[key] = value
        return result


class JsonFormatter(logging.Formatter):
    """JSON log formatter."""

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        include_timestamp: bool = True,
    ) -> None:
        super().__init__()
        self._masker = masker or SensitiveDataMasker()
        self._include_timestamp = include_timestamp

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": self._masker.mask(record.getMessage()),
        }

        if self._include_timestamp:
            log_data["timestamp"] = time.strftime(
                "%Y-%m-%dT%H:%M:%S", time.gmtime(record.created)
            ) + f".{int(record.msecs):03d}Z"

        context = get_log_context()
        if context_dict := context.to_dict():
            log_data["context"] = context_dict

        if hasattr(record, "extra_fields"):
            log_data.update(self._masker.mask_dict(record.extra_fields))

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable text formatter."""

    def __init__(
        self,
        masker: SensitiveDataMasker | None = None,
        include_context: bool = True,
    ) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        self._masker = masker or SensitiveDataMasker()
        self._include_context = include_context

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as text."""
        original_msg = record.msg
        record.msg = self._masker.mask(str(record.msg))

        result = super().format(record)

        record.msg = original_msg

        fields: dict[str, Any] = {}
        if self._include_context:
            fields.update(get_log_context().to_dict())
        if hasattr(record, "extra_fields"):
            fields.update(self._masker.mask_dict(record.extra_fields))
        if fields:
            result = f"{result} | " + " ".join(f"{k}={v}" for k, v in fields.items())

        return result


class NylasLogger:
    """Logger for nylas-client with structured logging support.

    Example:
        >>> logger = NylasLogger.get_logger("nylas_client.batch")
        >>> logger.info("Batch finished", size=3, failed=1)
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.WARNING
    _handlers: ClassVar[list[logging.Handler]] = []

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.INFO,
        format: str = "text",
        stream: Any = None,
        log_file: str | None = None,
        masker: SensitiveDataMasker | None = None,
    ) -> None:
        """Configure global logging settings.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
            log_file: Append log records to this file as well
            masker: Sensitive data masker
        """
        cls._level = level

        formatter: logging.Formatter
        if format == "json":
            formatter = JsonFormatter(masker=masker)
        else:
            formatter = TextFormatter(masker=masker)

        for handler in cls._handlers:
            handler.close()

        handlers: list[logging.Handler] = [logging.StreamHandler(stream or sys.stderr)]
        if log_file:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        for handler in handlers:
            handler.setFormatter(formatter)
            handler.setLevel(level.to_logging_level())
        cls._handlers = handlers

        for logger in cls._loggers.values():
            cls._attach(logger)

    @classmethod
    def _attach(cls, logger: logging.Logger) -> None:
        logger.handlers.clear()
        for handler in cls._handlers:
            logger.addHandler(handler)
        logger.setLevel(cls._level.to_logging_level())
        logger.propagate = False

    @classmethod
    def get_logger(cls, name: str) -> NylasLogger:
        """Get or create a logger.

        Args:
            name: Logger name

        Returns:
            Logger instance
        """
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            if cls._handlers:
                cls._attach(logger)
            else:
                # Library default: defer to the application's logging config
                logger.addHandler(logging.NullHandler())
            cls._loggers[name] = logger

        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        """Initialize with underlying logger."""
        self._logger = logger

    def _log(
        self, level: int, msg: str, exc_info: bool = False, **kwargs: Any
    ) -> None:
        """Internal log method."""
        extra = {"extra_fields": kwargs} if kwargs else {}
        self._logger.log(level, msg, exc_info=exc_info, extra=extra)

    def is_enabled_for(self, level: LogLevel) -> bool:
        """Check whether records at this level would be emitted."""
        return self._logger.isEnabledFor(level.to_logging_level())

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log debug message."""
        self._log(logging.DEBUG, msg, **kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log info message."""
        self._log(logging.INFO, msg, **kwargs)

    def warning(self, msg: str, **kwargs: Any) -> None:
        """Log warning message."""
        self._log(logging.WARNING, msg, **kwargs)

    def error(self, msg: str, exc_info: bool = False, **kwargs: Any) -> None:
        """Log error message."""
        self._log(logging.ERROR, msg, exc_info=exc_info, **kwargs)

    def exception(self, msg: str, **kwargs: Any) -> None:
        """Log exception with traceback."""
        self._log(logging.ERROR, msg, exc_info=True, **kwargs)


def get_logger(name: str) -> NylasLogger:
    """Get a logger instance."""
    return NylasLogger.get_logger(name)
