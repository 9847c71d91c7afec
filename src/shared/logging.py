"""Structured logging setup for the game engine, built on structlog.

The engine modules only call ``structlog.get_logger()``; the host application
calls :func:`setup_logging` once at startup to decide where events go.

Environment variables:
- LOG_FORMAT: "json" for machine-readable lines, "console" or unset for
  human-readable output.
- LOG_LEVEL: DEBUG, INFO (default), WARNING, ERROR or CRITICAL.
"""

from __future__ import annotations

import logging
import os
import sys
from datetime import UTC, datetime
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import MutableMapping
    from typing import Any

    from rapidtype.logic.settings import EngineSettings

LOG_FILE_TIMESTAMP_FORMAT = "%Y-%m-%d_%H-%M-%S"

_LOG_FORMATS = {"json", "console", ""}
_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def enum_values(
    _logger: object,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Render Enum members (modes, statuses, ranks) as their plain values."""
    for key, value in event_dict.items():
        if isinstance(value, Enum):
            event_dict[key] = value.value
    return event_dict


def structlog_processors() -> list[Any]:
    """Processor chain shared by the app and the test suite."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        enum_values,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _running_under_pytest() -> bool:
    return "pytest" in sys.modules


def _json_output() -> bool:
    value = os.environ.get("LOG_FORMAT", "").lower()
    if value not in _LOG_FORMATS:
        msg = f"Invalid LOG_FORMAT={value!r}. Must be 'json', 'console', or unset."
        raise ValueError(msg)
    return value == "json"


def _level_from_env() -> int:
    value = os.environ.get("LOG_LEVEL", "INFO").upper()
    if value not in _LOG_LEVELS:
        msg = f"Invalid LOG_LEVEL={value!r}. Must be one of {', '.join(sorted(_LOG_LEVELS))}."
        raise ValueError(msg)
    return getattr(logging, value)


def _formatter(*, json_output: bool, colors: bool) -> logging.Formatter:
    renderer = structlog.processors.JSONRenderer() if json_output else structlog.dev.ConsoleRenderer(colors=colors)
    return structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.format_exc_info,
            renderer,
        ],
    )


def setup_logging(log_dir: Path | str | None = None, level: int | None = None) -> Path | None:
    """Route structlog events through the stdlib root logger.

    Always logs to stdout. When log_dir is given (and not under pytest), also
    writes to a timestamped file in that directory and returns its path.
    """
    json_output = _json_output()
    if level is None:
        level = _level_from_env()

    structlog.configure(
        processors=structlog_processors(),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()

    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setFormatter(_formatter(json_output=json_output, colors=sys.stdout.isatty()))
    root.addHandler(stdout_handler)

    if log_dir is None or _running_under_pytest():
        return None

    directory = Path(log_dir)
    directory.mkdir(parents=True, exist_ok=True)
    file_path = directory / f"{datetime.now(tz=UTC).strftime(LOG_FILE_TIMESTAMP_FORMAT)}.log"
    file_handler = logging.FileHandler(file_path, encoding="utf-8")
    file_handler.setFormatter(_formatter(json_output=json_output, colors=False))
    root.addHandler(file_handler)
    return file_path


def setup_logging_from_settings(settings: EngineSettings) -> Path | None:
    """Configure logging with the log directory from EngineSettings."""
    return setup_logging(log_dir=settings.log_dir)
