"""
jsonscrub_core.logging
~~~~~~~~~~~~~~~~~~~~~~
Structured JSON logging configuration for jsonscrub.

Provides consistent JSON-formatted logs with:
- Standard fields: level, logger, message, service, timestamp
- Extra context fields from logger.info(..., extra={...})
- Masking of string values under sensitive field names, done by the
  transcoder itself on the serialised record
- Automatic exception formatting

Logs go to stderr by default: stdout is reserved for transcoded documents.

Usage::

    from jsonscrub_core.logging import configure_logging

    configure_logging(level="DEBUG", service_name="jsonscrub")
"""

from __future__ import annotations

import json
import logging
import re
import sys
from typing import IO, Any

from jsonscrub_core.emitter import SeparatorStyle
from jsonscrub_core.policy import FieldSetPolicy
from jsonscrub_core.transcoder import transcode_bytes

# Field names whose string values should never be logged verbatim.
SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "api_key",
        "apikey",
        "credential",
        "authorization",
        "x-api-key",
        "private_key",
        "client_secret",
    }
)

_SENSITIVE_POLICY = FieldSetPolicy(
    pattern=re.compile(
        "^(?:" + "|".join(re.escape(key) for key in sorted(SENSITIVE_KEYS)) + ")$",
        re.IGNORECASE,
    )
)


class JsonFormatter(logging.Formatter):
    """JSON log formatter for structured logging.

    Outputs one JSON object per line with standard fields plus
    any extra context provided via logger.info(..., extra={...}).
    """

    # Standard LogRecord attributes to exclude from extra fields
    _EXCLUDE_ATTRS = frozenset(
        {
            "args",
            "asctime",
            "created",
            "exc_info",
            "exc_text",
            "filename",
            "funcName",
            "levelname",
            "levelno",
            "lineno",
            "message",
            "module",
            "msecs",
            "msg",
            "name",
            "pathname",
            "process",
            "processName",
            "relativeCreated",
            "stack_info",
            "thread",
            "threadName",
            "taskName",  # asyncio task name
        }
    )

    def __init__(self, service_name: str = "jsonscrub") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as a JSON string."""
        payload: dict[str, Any] = {
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "timestamp": self.formatTime(record),
        }

        for key, val in record.__dict__.items():
            if key not in self._EXCLUDE_ATTRS:
                payload[key] = val

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        encoded = json.dumps(payload, default=str).encode("utf-8")
        return transcode_bytes(encoded, _SENSITIVE_POLICY, SeparatorStyle.SPACED).decode("utf-8")


def configure_logging(
    level: str = "WARNING",
    service_name: str = "jsonscrub",
    *,
    stream: IO[str] | None = None,
) -> None:
    """Configure structured JSON logging on the root logger.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        service_name: Service name to include in all log entries.
        stream: Destination; defaults to ``sys.stderr``.
    """
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(JsonFormatter(service_name=service_name))

    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.WARNING))
    root.handlers = [handler]
