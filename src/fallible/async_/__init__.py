"""Async utilities: AsyncResult and concurrent aggregation.

This module provides async-aware Result operations:
- AsyncResult: Wrapper for composing async Result operations
- ok_async / err_async: Already-settled AsyncResults
- combine_async / combine_with_all_errors_async: Concurrent aggregation

Examples:
    >>> from fallible.async_ import AsyncResult, combine_async
    >>>
    >>> async def fetch(id: int) -> Result[dict, str]:
    ...     return Ok({'id': id})
    >>>
    >>> async def main():
    ...     # Use AsyncResult for chaining
    ...     result = await AsyncResult(fetch(1)).map(lambda d: d['id'])
    ...
    ...     # Combine multiple async results
    ...     results = await combine_async([AsyncResult(fetch(i)) for i in (1, 2, 3)])
"""

from fallible.async_.combine import combine_async, combine_with_all_errors_async, settle_all
from fallible.async_.result import AsyncResult, err_async, ok_async

__all__ = [
    'AsyncResult',
    'combine_async',
    'combine_with_all_errors_async',
    'err_async',
    'ok_async',
    'settle_all',
]
