"""structlog setup for the watcher.

Every event passes through the same chain: context bound with
``bound_contextvars`` (the feed being polled), commit fields folded into a
single-line form, secrets masked, then a timestamp and a renderer.
``LOG_LEVEL`` and ``LOG_FORMAT`` provide the defaults when
``configure_logging`` is called without arguments.
"""

from __future__ import annotations

import os
import re
from typing import TYPE_CHECKING, Any, cast

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping

# webhook URLs are the only credentials the watcher handles
_SECRET_KEY_PATTERN = re.compile(r"(webhook|authorization|token|secret)", re.IGNORECASE)
_WEBHOOK_PATTERN = re.compile(r"(hooks\.slack\.com/services)/[^\s>\"']+")
_CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f]")
_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
_FORMATS = ("json", "console")
_MAX_VALUE_LENGTH = 4000
_LOG_LINES_SEPARATOR = " | "
_SHORT_REVISION_LENGTH = 7


def _escape(match: re.Match[str]) -> str:
    char = match.group(0)
    return _ESCAPES.get(char, f"\\x{ord(char):02x}")


def sanitize_value(value: object) -> object:
    """Make a log value single-line and free of webhook secrets."""
    if isinstance(value, str):
        cleaned = _WEBHOOK_PATTERN.sub(r"\1/***", _CONTROL_CHARS_PATTERN.sub(_escape, value))
        if len(cleaned) > _MAX_VALUE_LENGTH:
            return cleaned[:_MAX_VALUE_LENGTH] + "..."
        return cleaned
    if value is None or isinstance(value, (bool, int, float)):
        return value
    # named tuples such as Destination render through their own __str__
    if isinstance(value, tuple) and hasattr(value, "_fields"):
        return sanitize_value(str(value))
    if isinstance(value, dict):
        return {key: sanitize_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [sanitize_value(item) for item in value]
    return sanitize_value(str(value))


def sanitize_event(_: object, __: object, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    sanitized: dict[str, Any] = {}
    for key, value in event_dict.items():
        if key == "exc_info":
            sanitized[key] = value
        elif _SECRET_KEY_PATTERN.search(key):
            sanitized[key] = "***"
        else:
            sanitized[key] = sanitize_value(value)
    return sanitized


def fold_commit_fields(_: object, __: object, event_dict: MutableMapping[str, Any]) -> MutableMapping[str, Any]:
    """Shorten full revisions and join commit log lines into one field."""
    revision = event_dict.get("revision")
    if isinstance(revision, str) and len(revision) == 40:
        event_dict["revision"] = revision[:_SHORT_REVISION_LENGTH]
    log_lines = event_dict.get("log_lines")
    if isinstance(log_lines, (list, tuple)):
        event_dict["log_lines"] = _LOG_LINES_SEPARATOR.join(str(line) for line in log_lines)
    return event_dict


def parse_level(value: str | None = None) -> str:
    level = (value if value is not None else os.environ.get("LOG_LEVEL", "INFO")).upper()
    return level if level in _LEVELS else "INFO"


def parse_format(value: str | None = None) -> str:
    fmt = (value if value is not None else os.environ.get("LOG_FORMAT", "json")).lower()
    return fmt if fmt in _FORMATS else "json"


def build_processors(fmt: str) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        fold_commit_fields,
        sanitize_event,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
    ]
    if fmt == "console":
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer(ensure_ascii=False))
    return processors


def configure_logging(*, level: str | None = None, fmt: str | None = None) -> structlog.BoundLogger:
    structlog.configure(
        processors=build_processors(parse_format(fmt)),
        wrapper_class=structlog.make_filtering_bound_logger(parse_level(level)),
        cache_logger_on_first_use=True,
    )
    return cast("structlog.BoundLogger", structlog.get_logger())


def get_logger(name: str) -> structlog.BoundLogger:
    return cast("structlog.BoundLogger", structlog.get_logger(name))
