"""Result type: Ok[T] | Err[E] for explicit error handling.

Example:
    ```python
    from fallible import Err, Ok, Result

    def parse_port(raw: str) -> Result[int, str]:
        if not raw.isdigit():
            return Err(f'not a number: {raw!r}')
        return Ok(int(raw))

    parse_port('8080').map(lambda p: p + 1)
    # Ok(value=8081)
    parse_port('http').unwrap_or(80)
    # 80
    ```
"""

from __future__ import annotations

import traceback
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Literal, NoReturn, TypeIs, overload

import msgspec

from fallible._config import ErrorConfig, get_config
from fallible._logging import get_logger
from fallible.errors import ErrorData, UnwrapError

if TYPE_CHECKING:
    from fallible.async_.result import AsyncResult

__all__ = ['Err', 'Ok', 'Result', 'err', 'ok']

logger = get_logger(__name__)


def _violation(message: str, kind: Literal['Ok', 'Err'], value: Any, config: ErrorConfig | None) -> UnwrapError:
    """Build the UnwrapError for an unsafe unwrap on the wrong variant."""
    if config is None:
        config = get_config()
    # Drop this helper's own frame.
    stack = ''.join(traceback.format_stack()[:-1]) if config.with_stack_trace else None
    logger.debug('unsafe_unwrap_violation', kind=kind, value=repr(value))
    return ErrorData(kind=kind, value=value).to_exception(message, stack)


class Ok[T](msgspec.Struct, frozen=True, gc=False):
    """Success variant of Result containing a value of type T.

    Examples:
        >>> ok = Ok(42)
        >>> ok.unwrap_or(0)
        42
        >>> ok.map(lambda x: x * 2)
        Ok(value=84)
    """

    value: T

    def is_ok(self) -> TypeIs[Ok[T]]:
        """Return True if the result is Ok.

        This method provides type narrowing - after checking is_ok(),
        the type checker knows the result is Ok[T].
        """
        return True

    def is_err(self) -> TypeIs[Err[Any]]:
        """Return False since this is Ok."""
        return False

    def map[U](self, f: Callable[[T], U]) -> Ok[U]:
        """Apply a function to the contained value.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            Ok containing the result of applying f to the value.
        """
        return Ok(f(self.value))

    def map_err(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    @overload
    def and_then[U, F](self, f: Callable[[T], AsyncResult[U, F]]) -> AsyncResult[U, F]: ...

    @overload
    def and_then[U, F](self, f: Callable[[T], Ok[U] | Err[F]]) -> Ok[U] | Err[F]: ...

    def and_then(self, f: Callable[[T], Any]) -> Any:
        """Apply a function that returns a Result to the contained value.

        Also known as flatmap or bind. Whatever f returns becomes the
        outcome, so a nested Result is flattened by one level and an
        AsyncResult lifts the chain into the async world.

        Args:
            f: Function that takes T and returns a Result or an AsyncResult.

        Returns:
            The value returned by f.
        """
        return f(self.value)

    def or_else(self, f: Callable[[Any], Any]) -> Ok[T]:  # noqa: ARG002
        """Return self unchanged since this is Ok."""
        return self

    def async_map[U, E](self, f: Callable[[T], Awaitable[U]]) -> AsyncResult[U, E]:
        """Apply an async function to the contained value.

        Args:
            f: Async function to apply to the Ok value.

        Returns:
            AsyncResult settling to Ok(await f(value)).
        """
        from fallible.async_.result import AsyncResult

        async def _mapped() -> Ok[U]:
            return Ok(await f(self.value))

        return AsyncResult.defer(_mapped)

    def async_and_then[U, F](
        self, f: Callable[[T], AsyncResult[U, F] | Awaitable[Ok[U] | Err[F]]]
    ) -> AsyncResult[U, F]:
        """Chain with a function returning an AsyncResult.

        Args:
            f: Function that takes T and returns an AsyncResult, or any
                awaitable producing a Result.

        Returns:
            The AsyncResult returned by f.
        """
        from fallible.async_.result import AsyncResult

        chained = f(self.value)
        if isinstance(chained, AsyncResult):
            return chained
        return AsyncResult(chained)

    def unwrap_or(self, default: object) -> T:  # noqa: ARG002
        """Return the contained Ok value, ignoring the default."""
        return self.value

    def match[A](self, on_ok: Callable[[T], A], on_err: Callable[[Any], A]) -> A:  # noqa: ARG002
        """Call on_ok with the contained value and return its result."""
        return on_ok(self.value)

    def _unsafe_unwrap(self, config: ErrorConfig | None = None) -> T:  # noqa: ARG002
        """Return the contained value. Intended for tests only."""
        return self.value

    def _unsafe_unwrap_err(self, config: ErrorConfig | None = None) -> NoReturn:
        """Raise since this is Ok. Intended for tests only.

        Args:
            config: Diagnostics to attach. Defaults to the process-wide config.

        Raises:
            UnwrapError: Always, carrying this Ok's value.
        """
        raise _violation('Called _unsafe_unwrap_err on an Ok', 'Ok', self.value, config)


class Err[E](msgspec.Struct, frozen=True, gc=False):
    """Error variant of Result containing an error of type E.

    Err is a value, not an exception: it is returned, transformed and
    recovered from, never raised.

    Examples:
        >>> err = Err('something went wrong')
        >>> err.is_err()
        True
        >>> err.unwrap_or(0)
        0
    """

    error: E

    def is_ok(self) -> TypeIs[Ok[Any]]:
        """Return False since this is Err."""
        return False

    def is_err(self) -> TypeIs[Err[E]]:
        """Return True if the result is Err.

        This method provides type narrowing - after checking is_err(),
        the type checker knows the result is Err[E].
        """
        return True

    def map(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    def map_err[F](self, f: Callable[[E], F]) -> Err[F]:
        """Apply a function to the contained error.

        Args:
            f: Function to apply to the error value.

        Returns:
            Err containing the transformed error.
        """
        return Err(f(self.error))

    def and_then(self, f: Callable[[Any], Any]) -> Err[E]:  # noqa: ARG002
        """Return self unchanged since this is Err."""
        return self

    @overload
    def or_else[T, F](self, f: Callable[[E], AsyncResult[T, F]]) -> AsyncResult[T, F]: ...

    @overload
    def or_else[T, F](self, f: Callable[[E], Ok[T] | Err[F]]) -> Ok[T] | Err[F]: ...

    def or_else(self, f: Callable[[E], Any]) -> Any:
        """Apply a recovery function to the error.

        Args:
            f: Function that takes the error and returns a new Result or
                AsyncResult.

        Returns:
            The value returned by f.
        """
        return f(self.error)

    def async_map[T](self, f: Callable[[Any], Awaitable[Any]]) -> AsyncResult[T, E]:  # noqa: ARG002
        """Lift into an already-settled AsyncResult holding this Err."""
        from fallible.async_.result import AsyncResult

        return AsyncResult.from_result(self)

    def async_and_then[T](self, f: Callable[[Any], Any]) -> AsyncResult[T, E]:  # noqa: ARG002
        """Lift into an already-settled AsyncResult holding this Err."""
        from fallible.async_.result import AsyncResult

        return AsyncResult.from_result(self)

    def unwrap_or[T](self, default: T) -> T:
        """Return the default value since this is Err."""
        return default

    def match[A](self, on_ok: Callable[[Any], A], on_err: Callable[[E], A]) -> A:  # noqa: ARG002
        """Call on_err with the contained error and return its result."""
        return on_err(self.error)

    def _unsafe_unwrap(self, config: ErrorConfig | None = None) -> NoReturn:
        """Raise since this is Err. Intended for tests only.

        Args:
            config: Diagnostics to attach. Defaults to the process-wide config.

        Raises:
            UnwrapError: Always, carrying this Err's error.
        """
        raise _violation('Called _unsafe_unwrap on an Err', 'Err', self.error, config)

    def _unsafe_unwrap_err(self, config: ErrorConfig | None = None) -> E:  # noqa: ARG002
        """Return the contained error. Intended for tests only."""
        return self.error


type Result[T, E] = Ok[T] | Err[E]


def ok[T](value: T) -> Ok[T]:
    """Construct an Ok holding value."""
    return Ok(value)


def err[E](error: E) -> Err[E]:
    """Construct an Err holding error."""
    return Err(error)
