"""Concurrent aggregation of AsyncResults.

Every element is started at once inside an anyio task group. The fold over
the settled Results then runs in input order, so the aggregate never depends
on which element finished first.

Example:
    ```python
    async def fetch(id: int) -> Result[dict, str]:
        ...

    async def example():
        users = await combine_async([AsyncResult(fetch(i)) for i in range(3)])
    ```
"""

from __future__ import annotations

from collections.abc import Awaitable, Iterable

import anyio

from fallible.async_.result import AsyncResult
from fallible.combine import combine, combine_with_all_errors
from fallible.result import Result

__all__ = ['combine_async', 'combine_with_all_errors_async', 'settle_all']


async def settle_all[T, E](awaitables: Iterable[Awaitable[Result[T, E]]]) -> list[Result[T, E]]:
    """Await every element concurrently and return the Results in input order.

    Note:
        The iterable is materialized into a list before anything starts.

    Args:
        awaitables: AsyncResults, or any awaitables producing Results.

    Returns:
        The settled Results, in the order they were given.
    """
    awaitable_list = list(awaitables)
    results: list[Result[T, E] | None] = [None] * len(awaitable_list)

    async with anyio.create_task_group() as tg:

        async def run_one(i: int, aw: Awaitable[Result[T, E]]) -> None:
            results[i] = await aw

        for i, aw in enumerate(awaitable_list):
            tg.start_soon(run_one, i, aw)

    return results  # type: ignore[return-value]


def combine_async[T, E](async_results: Iterable[Awaitable[Result[T, E]]]) -> AsyncResult[list[T], E]:
    """Concurrent counterpart of ``combine``.

    Args:
        async_results: AsyncResults, or any awaitables producing Results.

    Returns:
        AsyncResult settling to Ok(list[T]) in input order, or to the first
        Err by input position.
    """
    pending = list(async_results)

    async def _combined() -> Result[list[T], E]:
        return combine(await settle_all(pending))

    return AsyncResult.defer(_combined)


def combine_with_all_errors_async[T, E](
    async_results: Iterable[Awaitable[Result[T, E]]],
) -> AsyncResult[list[T], list[E]]:
    """Concurrent counterpart of ``combine_with_all_errors``.

    Args:
        async_results: AsyncResults, or any awaitables producing Results.

    Returns:
        AsyncResult settling to Ok(list[T]), or to Err(list[E]) holding every
        error in input order.
    """
    pending = list(async_results)

    async def _combined() -> Result[list[T], list[E]]:
        return combine_with_all_errors(await settle_all(pending))

    return AsyncResult.defer(_combined)
