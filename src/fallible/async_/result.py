"""AsyncResult type for async-aware Result operations.

AsyncResult wraps an Awaitable[Result[T, E]] and re-exposes the Result
combinators so a chain can cross await boundaries without awaiting at
every step.

Example:
    ```python
    async def fetch_user(id: int) -> Result[User, Error]:
        ...

    # Chain async operations
    result = await (
        AsyncResult(fetch_user(1))
        .and_then(validate_user)
        .map(format_response)
    )
    ```
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable, Coroutine, Generator
from typing import Any, Final

import anyio

from fallible._logging import get_logger
from fallible.result import Err, Ok, Result

__all__ = ['AsyncResult', 'err_async', 'ok_async']

logger = get_logger(__name__)

_PENDING: Final = object()


async def _resolve(value: Any) -> Any:
    """Await value if it is awaitable, else return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


class AsyncResult[T, E]:
    """Async-aware Result wrapper for composing async Result operations.

    AsyncResult holds an Awaitable[Result[T, E]] and provides the same
    transformation methods as Result. Each method returns a new AsyncResult
    describing one more stage; nothing runs until the chain is awaited, and
    each stage runs only once the previous one has settled.

    An AsyncResult settles at most once. The settled Result is cached, so
    awaiting the same instance again, or from several tasks at once, returns
    the same Result without re-running the computation.

    Attributes:
        _source: Zero-argument callable producing the underlying awaitable,
            or None once consumed or for pre-settled instances.
        _rerunnable: Whether _source may be called again. Deferred stages are
            handed back when the awaiter running them is cancelled; a wrapped
            awaitable is consumed by its first run.

    Example:
        ```python
        async def get_data() -> Result[int, str]:
            return Ok(42)

        async def main():
            result = await AsyncResult(get_data()).map(lambda x: x * 2)
            assert result == Ok(84)

        anyio.run(main)
        ```
    """

    __slots__ = ('_failure', '_rerunnable', '_result', '_settled', '_source')

    def __init__(self, awaitable: Awaitable[Result[T, E]]) -> None:
        """Create an AsyncResult from an awaitable.

        Args:
            awaitable: An awaitable that produces a Result[T, E].
        """
        self._source: Callable[[], Awaitable[Result[T, E]]] | None = lambda: awaitable
        self._result: Any = _PENDING
        self._failure: BaseException | None = None
        self._settled: anyio.Event | None = None
        self._rerunnable = False

    def __await__(self) -> Generator[Any, Any, Result[T, E]]:
        """Support await syntax to get the underlying Result.

        Returns:
            The Result[T, E] produced by the awaitable.
        """
        return self._settle().__await__()

    async def _settle(self) -> Result[T, E]:
        while self._result is _PENDING:
            if self._settled is not None:
                # Another awaiter is running the computation. If its run is
                # cancelled, the stage is handed back and this loop takes over.
                await self._settled.wait()
                if self._failure is not None:
                    raise self._failure
                continue
            await self._run()
        return self._result

    async def _run(self) -> None:
        source, self._source = self._source, None
        settled = self._settled = anyio.Event()
        try:
            self._result = await source()  # type: ignore[misc]
        except anyio.get_cancelled_exc_class():
            if self._rerunnable:
                self._source = source
                self._settled = None
            else:
                self._failure = RuntimeError('AsyncResult was cancelled before its awaitable settled')
            raise
        except BaseException as exc:
            self._failure = exc
            raise
        finally:
            settled.set()

    @classmethod
    def defer(cls, factory: Callable[[], Awaitable[Result[T, E]]]) -> AsyncResult[T, E]:
        """Create an AsyncResult whose awaitable is only built on first await.

        Args:
            factory: Zero-argument callable, typically an async function,
                returning an awaitable that produces a Result[T, E].

        Returns:
            AsyncResult that calls factory when first awaited.
        """
        deferred = cls.__new__(cls)
        deferred._source = factory
        deferred._result = _PENDING
        deferred._failure = None
        deferred._settled = None
        deferred._rerunnable = True
        return deferred

    @classmethod
    def from_result(cls, result: Result[T, E]) -> AsyncResult[T, E]:
        """Create an already-settled AsyncResult from a synchronous Result.

        Args:
            result: A Result[T, E] value.

        Returns:
            AsyncResult that resolves to result without suspending.
        """
        settled = cls.__new__(cls)
        settled._source = None
        settled._result = result
        settled._failure = None
        settled._settled = None
        settled._rerunnable = False
        return settled

    @classmethod
    def from_ok(cls, value: T) -> AsyncResult[T, E]:
        """Create an AsyncResult containing Ok(value)."""
        return cls.from_result(Ok(value))

    @classmethod
    def from_err(cls, error: E) -> AsyncResult[T, E]:
        """Create an AsyncResult containing Err(error)."""
        return cls.from_result(Err(error))

    @classmethod
    def from_safe_promise(cls, awaitable: Awaitable[T]) -> AsyncResult[T, E]:
        """Wrap an awaitable that is not expected to raise.

        The produced value becomes Ok. An exception raised by the awaitable is
        not converted: it propagates to whoever awaits the chain.

        Args:
            awaitable: An awaitable producing the success value.

        Returns:
            AsyncResult settling to Ok(await awaitable).
        """

        async def _wrapped() -> Result[T, E]:
            return Ok(await awaitable)

        return cls.defer(_wrapped)

    @classmethod
    def from_promise(
        cls,
        awaitable: Awaitable[T],
        error_fn: Callable[[Exception], E] | None = None,
    ) -> AsyncResult[T, E]:
        """Wrap an awaitable that may raise.

        Args:
            awaitable: An awaitable producing the success value.
            error_fn: Maps a raised exception to the error value. If None,
                the exception itself becomes the error.

        Returns:
            AsyncResult settling to Ok(value), or Err(error_fn(exc)) if the
            awaitable raised.

        Example:
            ```python
            async def example():
                result = await AsyncResult.from_promise(client.get(url), lambda e: str(e))
            ```
        """

        async def _caught() -> Result[T, E]:
            try:
                return Ok(await awaitable)
            except Exception as exc:
                logger.debug('promise_rejected', error=repr(exc))
                return Err(error_fn(exc) if error_fn is not None else exc)  # type: ignore[arg-type]

        return cls.defer(_caught)

    def map[U](self, f: Callable[[T], U | Awaitable[U]]) -> AsyncResult[U, E]:
        """Apply a sync or async function to the Ok value.

        If the underlying Result is Ok, applies f to the value, awaiting the
        outcome if f returned an awaitable. If Err, returns the Err unchanged.

        Args:
            f: Function to apply to the Ok value.

        Returns:
            New AsyncResult with the transformed value.

        Example:
            ```python
            async def example():
                result = await AsyncResult.from_ok(5).map(lambda x: x * 2)
                assert result == Ok(10)
            ```
        """

        async def _mapped() -> Result[U, E]:
            result = await self
            if isinstance(result, Ok):
                return Ok(await _resolve(f(result.value)))
            return result

        return AsyncResult.defer(_mapped)

    def map_err[F](self, f: Callable[[E], F | Awaitable[F]]) -> AsyncResult[T, F]:
        """Apply a sync or async function to the Err value.

        If the underlying Result is Err, applies f to the error.
        If Ok, returns the Ok unchanged.

        Args:
            f: Function to apply to the Err value.

        Returns:
            New AsyncResult with the transformed error.
        """

        async def _mapped() -> Result[T, F]:
            result = await self
            if isinstance(result, Err):
                return Err(await _resolve(f(result.error)))
            return result

        return AsyncResult.defer(_mapped)

    def and_then[U, F](
        self, f: Callable[[T], Result[U, F] | AsyncResult[U, F] | Awaitable[Result[U, F]]]
    ) -> AsyncResult[U, E | F]:
        """Chain with a function returning a Result or an AsyncResult.

        If Ok, calls f(value) and settles to the Result it produces.
        If Err, returns the Err unchanged.

        Args:
            f: Function that takes T and returns a Result, an AsyncResult or
                any awaitable producing a Result.

        Returns:
            New AsyncResult with the chained result.

        Example:
            ```python
            def validate(x: int) -> Result[int, str]:
                return Ok(x) if x > 0 else Err('not positive')

            async def example():
                result = await AsyncResult.from_ok(5).and_then(validate)
                assert result == Ok(5)
            ```
        """

        async def _chained() -> Result[U, E | F]:
            result = await self
            if isinstance(result, Ok):
                return await _resolve(f(result.value))
            return result

        return AsyncResult.defer(_chained)

    def or_else[F](
        self, f: Callable[[E], Result[T, F] | AsyncResult[T, F] | Awaitable[Result[T, F]]]
    ) -> AsyncResult[T, F]:
        """Recover from an Err with a function returning a Result or AsyncResult.

        If Err, calls f(error) and settles to the Result it produces.
        If Ok, returns the Ok unchanged.
        """

        async def _recovered() -> Result[T, F]:
            result = await self
            if isinstance(result, Err):
                return await _resolve(f(result.error))
            return result

        return AsyncResult.defer(_recovered)

    def match[A](
        self,
        on_ok: Callable[[T], A | Awaitable[A]],
        on_err: Callable[[E], A | Awaitable[A]],
    ) -> Coroutine[Any, Any, A]:
        """Fold the settled Result into a plain value.

        Returns:
            Coroutine that produces on_ok(value) or on_err(error).
        """

        async def _matched() -> A:
            result = await self
            if isinstance(result, Ok):
                return await _resolve(on_ok(result.value))
            return await _resolve(on_err(result.error))

        return _matched()

    def unwrap_or[A](self, default: A) -> Coroutine[Any, Any, T | A]:
        """Unwrap with a default value.

        Returns:
            Coroutine that produces the Ok value or the default.
        """

        async def _unwrap() -> T | A:
            result = await self
            if isinstance(result, Ok):
                return result.value
            return default

        return _unwrap()

    def __repr__(self) -> str:
        if self._result is not _PENDING:
            return f'AsyncResult({self._result!r})'
        return 'AsyncResult(<pending>)'


def ok_async[T](value: T) -> AsyncResult[T, Any]:
    """Construct an already-settled AsyncResult holding Ok(value)."""
    return AsyncResult.from_ok(value)


def err_async[E](error: E) -> AsyncResult[Any, E]:
    """Construct an already-settled AsyncResult holding Err(error)."""
    return AsyncResult.from_err(error)

