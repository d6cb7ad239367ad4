"""
Logging setup for facetsearch.

The engine logs through a single ``SearchLogger`` wrapper around the
``facetsearch`` stdlib logger. Event helpers (search start/complete, filter
changes, catalogue loads) attach their fields as ``extra`` attributes so the
JSON and structured formatters can emit them as key/value pairs.

Library use is quiet by default: only warnings and above reach stderr until
``configure_logging()`` is called (the CLI does this from its global options).
"""

from __future__ import annotations

import json
import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def numeric(self) -> int:
        return logging.getLevelName(self.value)


class LogFormat(str, Enum):
    SIMPLE = "simple"
    DETAILED = "detailed"
    JSON = "json"
    STRUCTURED = "structured"


# Attributes every LogRecord carries; anything else was passed as an event field
_STANDARD_ATTRS = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}


def event_fields(record: logging.LogRecord) -> dict[str, Any]:
    """Fields attached to a record through ``extra``."""
    return {k: v for k, v in vars(record).items() if k not in _STANDARD_ATTRS}


class JsonFormatter(logging.Formatter):
    """One JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.lineno}",
        }
        entry.update(event_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str, ensure_ascii=False)


class StructuredFormatter(logging.Formatter):
    """Human-readable line followed by ``key=value`` event fields."""

    def format(self, record: logging.LogRecord) -> str:
        line = (
            f"{self.formatTime(record, self.datefmt)} [{record.levelname}] "
            f"{record.name}: {record.getMessage()}"
        )
        fields = event_fields(record)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def build_formatter(format_type: LogFormat) -> logging.Formatter:
    if format_type == LogFormat.JSON:
        return JsonFormatter()
    if format_type == LogFormat.STRUCTURED:
        return StructuredFormatter()
    if format_type == LogFormat.DETAILED:
        return logging.Formatter(
            "%(asctime)s %(name)s %(levelname)s %(module)s:%(lineno)d %(message)s"
        )
    return logging.Formatter("%(levelname)s: %(message)s")


class SearchLogger:
    """
    Wrapper around the ``facetsearch`` logger.

    Creating a SearchLogger replaces the handlers of the underlying stdlib
    logger, so the most recent configuration wins.
    """

    def __init__(
        self,
        name: str = "facetsearch",
        level: LogLevel = LogLevel.WARNING,
        format_type: LogFormat = LogFormat.SIMPLE,
        log_file: Path | None = None,
        max_file_size: int = 2 * 1024 * 1024,
        backup_count: int = 2,
        enable_console: bool = True,
        enable_file: bool = False,
    ):
        self.name = name
        self.level = level
        self.format_type = format_type
        self.log_file = log_file

        self.logger = logging.getLogger(name)
        self.logger.propagate = False
        for handler in list(self.logger.handlers):
            self.logger.removeHandler(handler)
            handler.close()

        if enable_console:
            self._attach(logging.StreamHandler(sys.stderr))
        if enable_file and log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._attach(
                logging.handlers.RotatingFileHandler(
                    log_file, maxBytes=max_file_size, backupCount=backup_count, encoding="utf-8"
                )
            )
        self.set_level(level)

    def _attach(self, handler: logging.Handler) -> None:
        handler.setFormatter(build_formatter(self.format_type))
        self.logger.addHandler(handler)

    def set_level(self, level: LogLevel) -> None:
        self.level = level
        self.logger.setLevel(level.numeric)
        for handler in self.logger.handlers:
            handler.setLevel(level.numeric)

    def debug(self, message: str, **fields: Any) -> None:
        self.logger.debug(message, extra=fields)

    def info(self, message: str, **fields: Any) -> None:
        self.logger.info(message, extra=fields)

    def warning(self, message: str, **fields: Any) -> None:
        self.logger.warning(message, extra=fields)

    def error(self, message: str, **fields: Any) -> None:
        self.logger.error(message, extra=fields)

    def exception(self, message: str, **fields: Any) -> None:
        self.logger.exception(message, extra=fields)

    # Engine events

    def log_search_start(self, query: str, candidates: int) -> None:
        self.debug(
            f"Searching '{query}' over {candidates} candidates",
            operation="search_start",
            query=query,
            candidates=candidates,
        )

    def log_search_complete(self, query: str, results_count: int, elapsed_ms: float) -> None:
        self.debug(
            f"Search '{query}' done: results={results_count}, time={elapsed_ms:.2f}ms",
            operation="search_complete",
            query=query,
            results_count=results_count,
            elapsed_ms=elapsed_ms,
        )

    def log_filter_change(self, dimension: str, is_active: bool) -> None:
        self.debug(
            f"Filter '{dimension}' updated (active={is_active})",
            operation="filter_change",
            dimension=dimension,
            is_active=is_active,
        )

    def log_catalogue_loaded(self, source: str, records: int, skipped: int = 0) -> None:
        message = f"Catalogue loaded: source={source}, records={records}"
        if skipped:
            message += f", skipped={skipped}"
        self.info(
            message, operation="catalogue_loaded", source=source, records=records, skipped=skipped
        )


_global_logger: SearchLogger | None = None


def get_logger() -> SearchLogger:
    """Return the process-wide SearchLogger, creating a quiet default on first use."""
    global _global_logger
    if _global_logger is None:
        _global_logger = SearchLogger()
    return _global_logger


def configure_logging(
    level: LogLevel = LogLevel.INFO,
    format_type: LogFormat = LogFormat.SIMPLE,
    log_file: Path | None = None,
    enable_console: bool = True,
    enable_file: bool = False,
    **kwargs: Any,
) -> SearchLogger:
    """Replace the process-wide logger with a newly configured one."""
    global _global_logger
    _global_logger = SearchLogger(
        level=level,
        format_type=format_type,
        log_file=log_file,
        enable_console=enable_console,
        enable_file=enable_file,
        **kwargs,
    )
    return _global_logger


def disable_logging() -> None:
    get_logger().logger.setLevel(logging.CRITICAL + 1)


def enable_debug_logging() -> None:
    get_logger().set_level(LogLevel.DEBUG)
