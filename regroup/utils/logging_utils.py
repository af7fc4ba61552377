"""Utility helpers for configuring package-wide logging.

Library modules only create ``logging.getLogger(__name__)`` loggers.
Applications (and tests) that want to see what the binder is doing call
:func:`configure_logging` once, e.g. ``configure_logging("trace")`` to log
every bound field.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Mapping

from rich.logging import RichHandler
from rich.traceback import install as install_rich_traceback

TRACE_LEVEL = 5
logging.addLevelName(TRACE_LEVEL, "TRACE")


def _trace(self, message, *args, **kwargs):
    if self.isEnabledFor(TRACE_LEVEL):
        self._log(TRACE_LEVEL, message, args, **kwargs)


logging.Logger.trace = _trace  # type: ignore[attr-defined]

_LEVELS: Mapping[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
    "trace": TRACE_LEVEL,
}

PACKAGE_LOGGER = "regroup"


class JSONFormatter(logging.Formatter):
    """Formatter that outputs JSON lines."""

    def format(self, record: logging.LogRecord) -> str:
        data: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(
                record.created, timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
            "module": record.module,
            "line": record.lineno,
        }

        if hasattr(record, "extra"):
            data.update(record.extra)  # type: ignore

        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)

        return json.dumps(data, default=str)


_CURRENT_LOG_FORMAT = "human"


def get_log_format() -> str:
    """Get the currently configured log format."""
    return _CURRENT_LOG_FORMAT


def resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    return _LEVELS.get(level.lower(), logging.INFO)


def configure_logging(
    level: str | int = "info",
    log_format: str = "human",
    log_file: str | None = None,
) -> None:
    """Configure the ``regroup`` logger.

    Args:
        level: Logging level (trace, debug, info, warning, error, critical)
        log_format: "human" (Rich) or "json"
        log_file: Optional path to write logs to
    """
    global _CURRENT_LOG_FORMAT
    _CURRENT_LOG_FORMAT = log_format

    handlers: list[logging.Handler] = []

    if log_format == "json":
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setFormatter(JSONFormatter())
        handlers.append(console_handler)
    else:
        install_rich_traceback()
        handlers.append(
            RichHandler(
                rich_tracebacks=True,
                markup=False,
                keywords=["Bound", "Compiled", "Registered"],
            )
        )

    if log_file:
        file_handler = logging.FileHandler(log_file)
        if log_format == "json":
            file_handler.setFormatter(JSONFormatter())
        else:
            file_handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
            )
        handlers.append(file_handler)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(resolve_level(level))
    package_logger.propagate = False


__all__ = [
    "configure_logging",
    "get_log_format",
    "resolve_level",
    "TRACE_LEVEL",
    "PACKAGE_LOGGER",
    "JSONFormatter",
]
