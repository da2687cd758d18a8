"""
Telemetry module for nylas-client.

Provides structured logging with sensitive data masking.
"""

from nylas_client.telemetry.logger import (
    JsonFormatter,
    LogContext,
    LogLevel,
    NylasLogger,
    SensitiveDataMasker,
    TextFormatter,
    bind_log_context,
    clear_log_context,
    get_log_context,
    get_logger,
    set_log_context,
)

__all__ = [
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "NylasLogger",
    "SensitiveDataMasker",
    "TextFormatter",
    "bind_log_context",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "set_log_context",
]
