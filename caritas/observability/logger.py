"""
Logging setup.

One stdout handler on the root logger; every record carries the current
correlation ID.

Dependencies: logging (stdlib)
System role: Centralized logging configuration
"""

import logging
import sys

from caritas.observability.correlation import CorrelationIdFilter

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"
DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"

QUIET_LOGGERS = ("urllib3", "botocore", "boto3", "s3transfer", "httpx", "httpcore")


def configure_logging(level: str = "INFO") -> None:
    """
    Install the stdout handler, replacing whatever the root logger had.

    Safe to call more than once; the last call wins.

    Args:
        level: Root level name; unknown names fall back to INFO
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
