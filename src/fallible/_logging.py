"""Structured logging for fallible.

Library loggers are structlog loggers wrapping stdlib loggers in the
``fallible`` namespace, so nothing is emitted until that namespace is enabled,
either by the host application's own logging setup or by
``configure_logging``. The root logger and the global structlog configuration
belong to the host and are never modified here.
"""

from __future__ import annotations

import contextlib
import logging
import sys
from typing import IO, TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = [
    'PACKAGE_LOGGER',
    'add_log_hook',
    'clear_log_hooks',
    'configure_logging',
    'get_logger',
    'remove_log_hook',
]

PACKAGE_LOGGER = 'fallible'

type LogHook = Callable[[dict[str, Any]], None]

_log_hooks: list[LogHook] = []

# Handler installed by the last configure_logging() call.
_handler: logging.Handler | None = None


def add_log_hook(hook: LogHook) -> None:
    """Register a hook to be called for each fallible log entry.

    Hooks receive a copy of the event dict after level filtering, so they only
    see entries the ``fallible`` loggers actually emit.

    Args:
        hook: Callable that receives the event dict.
    """
    _log_hooks.append(hook)


def remove_log_hook(hook: LogHook) -> None:
    """Remove a previously registered log hook."""
    if hook in _log_hooks:
        _log_hooks.remove(hook)


def clear_log_hooks() -> None:
    """Remove all registered log hooks."""
    _log_hooks.clear()


def _run_log_hooks(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    for hook in _log_hooks:
        # A failing hook never breaks the caller's operation.
        with contextlib.suppress(Exception):
            hook(event_dict.copy())
    return event_dict


def _event_processors() -> list[Any]:
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        _run_log_hooks,
        structlog.processors.StackInfoRenderer(),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]


def _build_formatter(json_output: bool) -> structlog.stdlib.ProcessorFormatter:
    if json_output:
        renderer: Any = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt='iso'),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Render fallible's log events to a stream.

    Installs one structlog ``ProcessorFormatter`` handler on the ``fallible``
    logger and sets that logger's level. Calling it again replaces the handler
    from the previous call. Events rendered here do not propagate to the root
    logger; hosts that prefer their own handlers should set the ``fallible``
    logger's level themselves instead of calling this.

    Args:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL").
        json_output: If True, emit JSON lines. If False, use console output.
        stream: Destination stream. Defaults to sys.stderr.

    Returns:
        The configured ``fallible`` stdlib logger.
    """
    global _handler  # noqa: PLW0603

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _handler is not None:
        package_logger.removeHandler(_handler)

    _handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    _handler.setFormatter(_build_formatter(json_output))
    package_logger.addHandler(_handler)
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.propagate = False
    return package_logger


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger backed by the stdlib logger ``name``.

    The logger does not depend on ``structlog.configure`` having been called:
    it always proxies to stdlib logging and drops records below the
    effective stdlib level.

    Args:
        name: Logger name. Defaults to the package logger.

    Returns:
        A structlog BoundLogger.
    """
    return structlog.wrap_logger(
        logging.getLogger(name or PACKAGE_LOGGER),
        processors=_event_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
    )
