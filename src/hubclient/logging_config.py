"""Structured logging configuration for hubclient.

Loggers live under the ``hubclient`` namespace (hubclient.client,
hubclient.pagination, hubclient.cli). Events are logged as short snake_case
messages with details passed through ``extra=``:

    logger.warning("github_response_error",
                   extra={"method": "GET", "url": url, "status_code": 404})

The JSON formatter groups method/url/status_code under ``http`` and the
remaining extras under ``context``. Credentials are redacted both as extra
keys and as query parameters inside logged URLs.

The library never calls configure_logging() on import; applications
(and the bundled CLI) opt in. HUBCLIENT_LOG_LEVEL and HUBCLIENT_LOG_FORMAT
are read when no explicit values are given.
"""

import json
import logging
import os
from datetime import datetime, timezone
from typing import Any, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

ROOT_LOGGER = "hubclient"

REDACTED = "[REDACTED]"

# Extra keys whose values are never written out
SENSITIVE_KEYS = {"token", "authorization", "password", "secret", "bearer"}

# Query parameters GitHub accepts as credentials
CREDENTIAL_PARAMS = {"access_token", "client_secret"}

HTTP_FIELDS = ("method", "url", "status_code")

_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


def scrub_url(url: str) -> str:
    """Replace credential query parameters in url with REDACTED."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    if not any(key in CREDENTIAL_PARAMS for key, _ in pairs):
        return url
    query = urlencode(
        [(key, REDACTED if key in CREDENTIAL_PARAMS else value) for key, value in pairs]
    )
    return urlunsplit(parts._replace(query=query))


def record_extras(record: logging.LogRecord) -> dict[str, Any]:
    """Collect the ``extra=`` fields of a record with redaction applied."""
    extras = {}
    for key, value in record.__dict__.items():
        if key in _RECORD_FIELDS or key.startswith("_"):
            continue
        if key.lower() in SENSITIVE_KEYS:
            value = REDACTED
        elif key == "url" and isinstance(value, str):
            value = scrub_url(value)
        extras[key] = value
    return extras


class StructuredFormatter(logging.Formatter):
    """JSON formatter, one object per line.

    Keys: timestamp (record creation time, UTC, 'Z' suffix), level, logger,
    message, plus ``http`` and ``context`` when the record carries extras and
    ``exception`` when it carries exc_info.
    """

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, timezone.utc)
        log_data: dict[str, Any] = {
            "timestamp": created.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        extras = record_extras(record)
        http = {key: extras.pop(key) for key in HTTP_FIELDS if key in extras}
        if http:
            log_data["http"] = http
        if extras:
            log_data["context"] = extras

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Single-line text for terminals: extras are appended as key=value."""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        extras = record_extras(record)
        if not extras:
            return line
        suffix = " ".join(f"{key}={value}" for key, value in extras.items())
        head, sep, tail = line.partition("\n")
        return f"{head} {suffix}{sep}{tail}"


def configure_logging(
    level: Optional[str] = None, log_format: Optional[str] = None
) -> None:
    """Install one stderr handler on the hubclient logger.

    Calling again replaces the level and formatter without adding handlers.

    Args:
        level: Log level name. Falls back to HUBCLIENT_LOG_LEVEL (default INFO).
        log_format: "json" or "text". Falls back to HUBCLIENT_LOG_FORMAT
            (default json).
    """
    if level is None:
        level = os.getenv("HUBCLIENT_LOG_LEVEL", "INFO")
    if log_format is None:
        log_format = os.getenv("HUBCLIENT_LOG_FORMAT", "json")

    formatter: logging.Formatter = (
        TextFormatter() if log_format.lower() == "text" else StructuredFormatter()
    )

    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    if not logger.handlers:
        logger.addHandler(logging.StreamHandler())
    for handler in logger.handlers:
        handler.setFormatter(formatter)
    logger.propagate = False
