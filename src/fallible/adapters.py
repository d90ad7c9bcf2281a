"""Boundary adapters: turn raising code into Results.

- from_throwable: wrap a function that may raise
- from_promise: wrap an awaitable that may raise
- from_safe_promise: wrap an awaitable that is not expected to raise
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, overload

import wrapt

from fallible._logging import get_logger
from fallible.async_.result import AsyncResult
from fallible.result import Err, Ok

__all__ = ['from_promise', 'from_safe_promise', 'from_throwable']

logger = get_logger(__name__)


@overload
def from_throwable[**P, T](
    fn: Callable[P, T],
    error_fn: None = None,
) -> Callable[P, Ok[T] | Err[Exception]]: ...


@overload
def from_throwable[**P, T, E](
    fn: Callable[P, T],
    error_fn: Callable[[Exception], E],
) -> Callable[P, Ok[T] | Err[E]]: ...


@overload
def from_throwable[E](
    fn: None = None,
    *,
    error_fn: Callable[[Exception], E] | None = None,
) -> Callable[[Callable[..., Any]], Callable[..., Ok[Any] | Err[E]]]: ...


def from_throwable(
    fn: Callable[..., Any] | None = None,
    error_fn: Callable[[Exception], Any] | None = None,
) -> Any:
    """Wrap a function so it returns a Result instead of raising.

    The wrapper takes the same arguments as fn and keeps its metadata. It
    returns Ok(return value) on success and Err(...) if fn raises an
    Exception subclass: error_fn(exc) if given, the exception itself if not.

    Can be called directly or used as a decorator, with or without arguments:
        safe_loads = from_throwable(json.loads, lambda e: 'bad json')

        @from_throwable
        def risky(): ...

        @from_throwable(error_fn=str)
        def described(): ...

    Args:
        fn: The function to wrap (omit when decorating with arguments).
        error_fn: Maps a raised exception to the error value.

    Returns:
        A wrapped function that returns Result[T, E] instead of T.

    Example:
        ```python
        divide = from_throwable(lambda a, b: a / b, lambda e: type(e).__name__)
        divide(10, 2)
        # Ok(value=5.0)
        divide(10, 0)
        # Err(error='ZeroDivisionError')
        ```
    """
    if fn is None:
        return lambda func: from_throwable(func, error_fn)

    @wrapt.decorator
    def wrapper(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Ok[Any] | Err[Any]:
        try:
            return Ok(wrapped(*args, **kwargs))
        except Exception as exc:
            logger.debug('throwable_caught', function=getattr(wrapped, '__qualname__', repr(wrapped)), error=repr(exc))
            return Err(error_fn(exc) if error_fn is not None else exc)

    return wrapper(fn)


def from_promise[T, E](
    awaitable: Awaitable[T],
    error_fn: Callable[[Exception], E] | None = None,
) -> AsyncResult[T, E]:
    """Wrap an awaitable that may raise; see ``AsyncResult.from_promise``."""
    return AsyncResult.from_promise(awaitable, error_fn)


def from_safe_promise[T, E](awaitable: Awaitable[T]) -> AsyncResult[T, E]:
    """Wrap an awaitable that is not expected to raise; see ``AsyncResult.from_safe_promise``."""
    return AsyncResult.from_safe_promise(awaitable)
