"""
Structured logging helpers.

Render arbitrary values into short, log-safe strings and keep caller
credentials (Authorization, apikey) out of log records.

Dependencies: logging (stdlib), pydantic
System role: Logging helper functions for proxy and background paths
"""

import logging
from typing import Any, Mapping

from pydantic import SecretStr

REDACTED = "***"

SENSITIVE_HEADERS = frozenset({"authorization", "apikey", "cookie", "x-api-key"})


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value for a log record without dumping payloads.

    Containers and binary data are summarized by size; secrets are masked;
    long strings are cut at ``max_length``.

    Args:
        value: Anything passed as log context
        max_length: Longest string emitted before truncation

    Returns:
        str: Printable summary of ``value``
    """
    if value is None:
        return "None"
    if isinstance(value, SecretStr):
        return REDACTED
    if isinstance(value, (bytes, bytearray)):
        return f"bytes({len(value)})"
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, Mapping):
        return f"dict({len(value)} keys)"

    try:
        text = value if isinstance(value, str) else str(value)
    except Exception as e:
        return f"<unprintable {type(value).__name__}: {type(e).__name__}>"

    if len(text) > max_length:
        return f"{text[:max_length]}... (truncated, {len(text)} total)"
    return text


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Copy of ``headers`` with credential values masked."""
    return {
        name: REDACTED if name.lower() in SENSITIVE_HEADERS else value
        for name, value in headers.items()
    }


def log_exception_with_context(
    logger: logging.Logger,
    message: str,
    exc: Exception,
    **context,
) -> None:
    """
    Log an error with its traceback and flattened context.

    Args:
        logger: Module logger
        message: Fixed event message (no interpolation)
        exc: Exception being reported
        **context: Extra fields, each passed through safe_log_value
    """
    extra = {key: safe_log_value(val) for key, val in context.items()}
    extra["error_type"] = type(exc).__name__
    extra["error_msg"] = safe_log_value(str(exc))
    logger.error(message, exc_info=exc, extra=extra)
