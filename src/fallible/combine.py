"""Fold a sequence of Results into a single Result."""

from __future__ import annotations

from collections.abc import Iterable

from fallible.result import Err, Ok

__all__ = ['combine', 'combine_with_all_errors']


def combine[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[E]:
    """Collect an iterable of Results into a Result of list.

    Short-circuits on the first Err encountered.

    Args:
        results: An iterable of Result values.

    Returns:
        Ok(list[T]) with every value in input order if all results are Ok,
        otherwise the first Err.

    Examples:
        >>> combine([Ok(1), Ok(2), Ok(3)])
        Ok(value=[1, 2, 3])
        >>> combine([Ok(1), Err('a'), Ok(3), Err('b')])
        Err(error='a')
    """
    values: list[T] = []
    for result in results:
        if isinstance(result, Err):
            return result
        values.append(result.value)
    return Ok(values)


def combine_with_all_errors[T, E](results: Iterable[Ok[T] | Err[E]]) -> Ok[list[T]] | Err[list[E]]:
    """Collect an iterable of Results, keeping every error.

    Never short-circuits. Ok values are dropped as soon as one Err is seen.

    Args:
        results: An iterable of Result values.

    Returns:
        Ok(list[T]) if all results are Ok, otherwise Err(list[E]) holding
        every error in input order.

    Examples:
        >>> combine_with_all_errors([Ok(1), Err('a'), Ok(3), Err('b')])
        Err(error=['a', 'b'])
        >>> combine_with_all_errors([Ok(1), Ok(2)])
        Ok(value=[1, 2])
    """
    values: list[T] = []
    errors: list[E] = []
    for result in results:
        if isinstance(result, Err):
            errors.append(result.error)
        elif not errors:
            values.append(result.value)
    if errors:
        return Err(errors)
    return Ok(values)
