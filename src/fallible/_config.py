"""Process-wide configuration: ErrorConfig and initialization."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fallible._logging import configure_logging

__all__ = [
    'ErrorConfig',
    'get_config',
    'init',
    'reset_config',
]

STACK_TRACE_ENV = 'FALLIBLE_WITH_STACK_TRACE'

_TRUTHY = frozenset({'1', 'true', 'yes', 'on'})
_FALSY = frozenset({'', '0', 'false', 'no', 'off'})


@dataclass(frozen=True)
class ErrorConfig:
    """Diagnostics attached to unsafe-unwrap failures.

    Attributes:
        with_stack_trace: Capture the call stack into ``UnwrapError.stack``
            when ``_unsafe_unwrap``/``_unsafe_unwrap_err`` is called on the
            wrong variant.
    """

    with_stack_trace: bool = False


# Global configuration (set by init())
_config: ErrorConfig | None = None


def _detect_with_stack_trace() -> bool:
    """Read FALLIBLE_WITH_STACK_TRACE from the environment."""
    raw = os.environ.get(STACK_TRACE_ENV, '').strip().lower()
    if raw in _TRUTHY:
        return True
    if raw not in _FALSY:
        logging.warning("Unknown %s value '%s', defaulting to off", STACK_TRACE_ENV, raw)
    return False


def init(
    *,
    with_stack_trace: bool | None = None,
    log_level: str | None = None,
) -> ErrorConfig:
    """Initialize the process-wide configuration.

    Args:
        with_stack_trace: Attach captured stacks to unwrap failures.
            Read from FALLIBLE_WITH_STACK_TRACE if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). None leaves
            logging untouched.

    Returns:
        The ErrorConfig that was set.

    Example:
        ```python
        import fallible

        fallible.init(with_stack_trace=True, log_level='DEBUG')
        fallible.err('boom')._unsafe_unwrap()
        # UnwrapError with .stack populated
        ```
    """
    global _config  # noqa: PLW0603

    if with_stack_trace is None:
        with_stack_trace = _detect_with_stack_trace()

    _config = ErrorConfig(with_stack_trace=with_stack_trace)

    if log_level is not None:
        configure_logging(log_level)

    return _config


def get_config() -> ErrorConfig:
    """Get the process-wide configuration.

    Detects it from the environment on first use if init() was never called.
    """
    global _config  # noqa: PLW0603

    if _config is None:
        _config = ErrorConfig(with_stack_trace=_detect_with_stack_trace())
    return _config


def reset_config() -> None:
    """Forget the process-wide configuration."""
    global _config  # noqa: PLW0603
    _config = None
