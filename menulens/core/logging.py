"""
Logging for MenuLens.

Every module logs through structlog with ``logger = get_logger(__name__)``.
Events are written to stderr: the CLI owns stdout for its screens, prompts
and scan result tables, and log lines must not land in the middle of them.

Rendering follows ``Config.log_format``: ``console`` for rich colored lines,
``json`` for one object per line, ``auto`` to pick console only on a TTY.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config

APP_NAME = "menulens"


def _tag_app(_logger: Any, _method: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("app", APP_NAME)
    return event_dict


def wants_json(log_format: str, stream: Any = None) -> bool:
    """Decide between JSON and console rendering.

    Args:
        log_format: ``json``, ``console`` or ``auto``.
        stream: Stream checked for a TTY under ``auto``. Defaults to stderr.

    Returns:
        True for JSON output.
    """
    if log_format == "json":
        return True
    if log_format == "console":
        return False
    stream = stream if stream is not None else sys.stderr
    isatty = getattr(stream, "isatty", None)
    return not (isatty and isatty())


def build_processors(json_output: bool) -> list[structlog.types.Processor]:
    """Processor chain for session events, ending in the chosen renderer.

    Context bound with ``bind_context`` (the session id) is merged first, so
    every event from a session carries it.
    """
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        _tag_app,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if json_output:
        processors += [structlog.processors.dict_tracebacks, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def _configure_stdlib(level: int, debug: bool) -> None:
    # Library loggers (asyncio, aiofiles) share the rich handler on stderr.
    handler = RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def setup_logging(config: Config | None = None, json_output: bool | None = None) -> None:
    """Configure logging for a MenuLens process.

    Args:
        config: Supplies ``log_level`` and ``log_format``. Defaults to INFO
            with automatic format selection.
        json_output: Overrides the configured format when given.
    """
    log_level = config.log_level if config else "INFO"
    log_format = config.log_format if config else "auto"
    level = logging.getLevelName(log_level)
    if not isinstance(level, int):
        level = logging.INFO

    _configure_stdlib(level, debug=log_level == "DEBUG")

    if json_output is None:
        json_output = wants_json(log_format)

    structlog.configure(
        processors=build_processors(json_output),
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Attach key-value context (e.g. ``session_id``) to later events."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    structlog.contextvars.clear_contextvars()
