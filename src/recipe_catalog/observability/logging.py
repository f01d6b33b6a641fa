"""Loguru setup for the service.

Production writes one JSON object per line to stdout; development gets a
coloured single-line format. Fields bound with ``bind_context`` (the request
middleware binds ``request_id``, ``method`` and ``path``) are added to every
entry written from the same async context. Records emitted through the
standard library, by uvicorn and asyncpg among others, are routed into
Loguru as well.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING

import orjson
from loguru import logger


if TYPE_CHECKING:
    from typing import Any


_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})

# Raised to WARNING so that access lines do not duplicate LoggingMiddleware.
_QUIETED_LOGGERS = ("uvicorn", "uvicorn.access", "uvicorn.error", "asyncpg", "asyncio")


def _escape(text: str) -> str:
    """Loguru parses format output as a template; literal braces must double."""
    return text.replace("{", "{{").replace("}", "}}")


class InterceptHandler(logging.Handler):
    """``logging`` handler that re-emits each record through Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Skip frames inside the logging package so the caller is reported.
        frame, depth = logging.currentframe(), 2
        while frame is not None and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _format_json(record: dict[str, Any]) -> str:
    # Work on a copy: the record is shared with every other sink.
    extra = {**record["extra"], **_log_context.get()}

    entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": extra.pop("name", record["name"]),
        "function": record["function"],
        "line": record["line"],
    }
    entry.update(extra)

    if (exc := record["exception"]) is not None:
        entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return _escape(orjson.dumps(entry, default=str).decode()) + "\n"


def _format_text(record: dict[str, Any]) -> str:
    fields = _log_context.get() | record["extra"]
    fields.pop("name", None)
    suffix = ""
    if fields:
        suffix = " | " + _escape(" ".join(f"{key}={value}" for key, value in fields.items()))

    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> "
        "<level>{level: <8}</level> "
        "<cyan>{name}:{function}:{line}</cyan>"
        f"{suffix} - <level>{{message}}</level>\n{{exception}}"
    )


def setup_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    *,
    is_development: bool = False,
) -> None:
    """Replace every Loguru sink with a single stdout sink.

    ``log_format`` is ``"json"`` or ``"text"``; development always uses text.
    Calling this again reconfigures logging from scratch.
    """
    use_json = log_format == "json" and not is_development

    logger.remove()
    logger.add(
        sys.stdout,
        level=log_level.upper(),
        format=_format_json if use_json else _format_text,
        colorize=not use_json,
        backtrace=not use_json,
        diagnose=not use_json,
    )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Module logger; ``name`` ends up as the ``logger`` field of JSON entries."""
    return logger.bind(name=name)


def bind_context(**fields: Any) -> None:
    """Add ``fields`` to every entry logged from the current async context."""
    _log_context.set(_log_context.get() | fields)


def clear_context() -> None:
    _log_context.set({})


def get_context() -> dict[str, Any]:
    """Snapshot of the fields currently bound."""
    return dict(_log_context.get())


__all__ = [
    "InterceptHandler",
    "bind_context",
    "clear_context",
    "get_context",
    "get_logger",
    "logger",
    "setup_logging",
]
