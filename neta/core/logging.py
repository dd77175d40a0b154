import json
import logging
import os
import re
import sys
import traceback
from datetime import UTC, datetime
from functools import lru_cache
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

from neta.core.settings import get_settings

_SENSITIVE_KEYS = {
    "authorization",
    "x-api-key",
    "api-key",
    "api_key",
    "apikey",
    "x-goog-api-key",
    "token",
    "secret",
}

_BEARER_RE = re.compile(r"(?i)\bbearer\s+[a-z0-9\-._~+/]+=*")
# NewsData passes the key as a query parameter
_APIKEY_PARAM_RE = re.compile(r"(?i)([?&]apikey=)[^&\s'\"]+")
_KEY_HEADER_RE = re.compile(
    r"(?i)((?:x-api-key|x-goog-api-key|authorization)['\"]?\s*[:=]\s*['\"])([^'\"]+)(['\"])"
)


def _redact_value(value: Any) -> Any:
    if isinstance(value, dict):
        return {
            str(k): "<redacted>"
            if any(part in str(k).lower() for part in _SENSITIVE_KEYS)
            else _redact_value(v)
            for k, v in value.items()
        }

    if isinstance(value, (list, tuple)):
        return type(value)(_redact_value(v) for v in value)

    if isinstance(value, str):
        redacted = _BEARER_RE.sub("Bearer <redacted>", value)
        redacted = _APIKEY_PARAM_RE.sub(r"\1<redacted>", redacted)
        return _KEY_HEADER_RE.sub(r"\1<redacted>\3", redacted)

    return value


class RedactingFilter(logging.Filter):
    """Scrub secrets from the rendered message before any handler emits it.

    Third-party loggers (httpx logs every request URL at INFO) format their
    own messages, so redaction has to run on the record, not in our helpers.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = _redact_value(message)
        if redacted != message:
            record.msg = redacted
            record.args = None

        if record.exc_info and not record.exc_text:
            record.exc_text = _redact_value(
                "".join(traceback.format_exception(*record.exc_info)).rstrip("\n")
            )
        return True


def _build_error_json_payload(record: logging.LogRecord) -> dict[str, Any]:
    message = _redact_value(record.getMessage())

    exc_type, exc_value, exc_tb = record.exc_info or (None, None, None)
    stack_trace = None
    if exc_type and exc_value and exc_tb:
        stack_trace = _redact_value(
            "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
        )

    error_type = getattr(record, "error_type", None) or (
        exc_type.__name__ if exc_type else "LogError"
    )
    error_message = getattr(record, "error_message", None) or (
        str(exc_value) if exc_value else message
    )

    payload: dict[str, Any] = {
        "timestamp": datetime.now(UTC).isoformat(),
        "level": record.levelname,
        "logger": record.name,
        "component": getattr(record, "component", None) or record.name,
        "operation": getattr(record, "operation", None),
        "error_type": error_type,
        "error_message": _redact_value(error_message),
        "stack_trace": stack_trace,
        "message": message,
        "context_data": _redact_value(getattr(record, "context_data", None)),
        "http_details": _redact_value(getattr(record, "http_details", None)),
        "item_id": getattr(record, "item_id", None),
        "source_file": record.filename,
        "source_line": record.lineno,
    }

    return {k: v for k, v in payload.items() if v is not None}


class _JsonLineErrorFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(_build_error_json_payload(record), ensure_ascii=False, default=str)


def _create_error_jsonl_handler(*, errors_dir: Path, logger_name: str) -> logging.Handler:
    errors_dir.mkdir(parents=True, exist_ok=True)
    prefix = re.sub(r"[^a-zA-Z0-9._-]+", "_", logger_name.strip().lower()).strip("._-") or "neta"

    handler = TimedRotatingFileHandler(
        filename=str(errors_dir / f"{prefix}_errors_{os.getpid()}.jsonl"),
        when="D",
        backupCount=7,
        encoding="utf-8",
        delay=True,
        utc=True,
    )
    handler.setLevel(logging.ERROR)
    handler.setFormatter(_JsonLineErrorFormatter())
    return handler


@lru_cache
def setup_logging(name: str | None = None, level: str | None = None) -> logging.Logger:
    """
    Set up logging for the API and the CLI.

    Console output goes to stderr; ERROR records also land as JSON lines under
    ``logs_dir/errors``. Both handlers redact secrets.

    Args:
        name: Logger name (defaults to app name from settings)
        level: Log level (defaults to settings.log_level)
    """
    settings = get_settings()
    logger_name = name or settings.app_name
    log_level = getattr(logging, (level or settings.log_level).upper())

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    root_logger.handlers.clear()

    redacting_filter = RedactingFilter()

    # stdout is reserved for the CLI payload
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    console_handler.addFilter(redacting_filter)
    root_logger.addHandler(console_handler)

    error_handler = _create_error_jsonl_handler(
        errors_dir=settings.logs_dir / "errors",
        logger_name=logger_name,
    )
    error_handler.addFilter(redacting_filter)
    root_logger.addHandler(error_handler)

    app_logger = logging.getLogger(logger_name)
    app_logger.setLevel(log_level)
    return app_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)
