"""Logging configuration using structlog.

One line per event on stderr, with an aligned 3-letter level and the bound
context (backend, attempt, ...) rendered as key=value pairs:
    12:30:45 INF extraction succeeded backend=gemini attempts=1 chars=42
    12:30:46 WRN retrying after transient failure backend=openai delay_s=1.0
    12:30:47 DBG backend request backend=anthropic url=https://api.anthropic.com/v1/messages

Credential-like fields (``api_key``, ``authorization``, ...) are masked before
rendering.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

import structlog

LEVEL_NAMES = {
    "debug": "DBG",
    "info": "INF",
    "warning": "WRN",
    "error": "ERR",
    "critical": "CRT",
}

SECRET_KEYS = frozenset(
    {"api_key", "authorization", "credential", "key", "password", "secret", "x-api-key"}
)
_MASK = "***"

_debug_enabled = False


def _redact_secrets(logger, method_name, event_dict):
    """Mask the values of credential-like fields."""
    for key in event_dict:
        if key.lower() in SECRET_KEYS:
            event_dict[key] = _MASK
    return event_dict


def _level_to_3letter(logger, method_name, event_dict):
    level = event_dict.get("level", method_name)
    event_dict["level"] = LEVEL_NAMES.get(level, level.upper()[:3])
    return event_dict


def _format_timestamp(logger, method_name, event_dict):
    event_dict["timestamp"] = datetime.now().strftime("%H:%M:%S")
    return event_dict


def _format_value(value) -> str:
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(str(item) for item in value)
    return str(value)


def _render_kv_pairs(logger, method_name, event_dict):
    """Render 'timestamp LEVEL event key=value ...', quoting values with spaces.

    Keys starting with an underscore are internal and skipped.
    """
    timestamp = event_dict.pop("timestamp", "")
    level = event_dict.pop("level", "???")
    event = event_dict.pop("event", "")

    kv_parts = []
    for key, value in event_dict.items():
        if key.startswith("_"):
            continue
        rendered = _format_value(value)
        if " " in rendered:
            kv_parts.append(f'{key}="{rendered}"')
        else:
            kv_parts.append(f"{key}={rendered}")

    line = f"{timestamp} {level} {event}"
    if kv_parts:
        line = f"{line} {' '.join(kv_parts)}"
    return line


def configure(level: str = "INFO", debug: bool = False) -> None:
    """Configure structlog for stderr console output.

    stdout is left to the CLI, which prints extracted text there.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR); unknown names fall back to INFO.
        debug: Force DEBUG regardless of ``level`` (``--debug`` / ``DEBUG_LOGGING``).
    """
    global _debug_enabled
    if debug:
        level = "DEBUG"
    _debug_enabled = level.upper() == "DEBUG"

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            _redact_secrets,
            _format_timestamp,
            _level_to_3letter,
            _render_kv_pairs,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None, **context) -> structlog.BoundLogger:
    """Return a logger, optionally bound to a component name and fixed context.

    Adapters bind their backend once, e.g. ``get_logger(backend="gemini")``,
    so every event they log carries it.
    """
    logger = structlog.get_logger()
    if name:
        context = {"logger": name, **context}
    if context:
        return logger.bind(**context)
    return logger


def is_debug_enabled() -> bool:
    return _debug_enabled
