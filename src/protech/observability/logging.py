"""Structured JSON logging with async-safe correlation IDs.

The API logs one JSON object per line with the correlation_id of the
request that produced it. The audit CLI logs plain text, optionally with
the level name coloured by severity.
"""

import json
import logging
from contextvars import ContextVar
from datetime import datetime, timezone

# Propagates through await chains automatically
correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")

TEXT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

_EXTRA_FIELDS = ("url", "location_id", "slug", "step", "duration_ms")
_QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def get_correlation_id() -> str:
    """Return the current correlation ID, or empty string if not set."""
    return correlation_id.get()


class JSONFormatter(logging.Formatter):
    """One JSON object per line: timestamp, level, logger, message, plus
    the request's correlation id and any whitelisted ``extra`` fields."""

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        entry: dict[str, object] = {
            "timestamp": created.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        request_id = get_correlation_id()
        if request_id:
            entry["correlation_id"] = request_id
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)

        # logger.info("msg", extra={"slug": ...})
        entry.update(
            (name, getattr(record, name))
            for name in _EXTRA_FIELDS
            if getattr(record, name, None) is not None
        )
        return json.dumps(entry, default=str)


LEVEL_COLORS = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;31m",
}
RESET = "\033[0m"


def colorize(text: str, level: int) -> str:
    """Wrap ``text`` in the ANSI colour for a logging level; unchanged for unknown levels."""
    color = LEVEL_COLORS.get(level)
    return f"{color}{text}{RESET}" if color else text


class ColorFormatter(logging.Formatter):
    """Text formatter that colours the level name with ANSI escapes."""

    def __init__(self, fmt: str = TEXT_FORMAT) -> None:
        super().__init__(fmt)

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        record.levelname = colorize(original, record.levelno)
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(json_format: bool = True, level: str = "INFO", color: bool = False) -> None:
    """Replace the root logger's handlers with a single stderr handler.

    Args:
        json_format: JSONFormatter output, as the API runs it.
        level: Level name, case-insensitive; unknown names fall back to INFO.
        color: In text mode, colour the level name (audit console).
    """
    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    elif color:
        formatter = ColorFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    name = level.upper()
    root.setLevel(name if name in _LEVELS else logging.INFO)

    for noisy in _QUIET_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)
