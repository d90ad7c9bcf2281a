"""Contract-violation errors: dual struct+exception for unsafe unwraps."""

from __future__ import annotations

from typing import Any, Literal

import msgspec

__all__ = [
    'ErrorData',
    'UnwrapError',
]


class ErrorData(msgspec.Struct, frozen=True, gc=False):
    """The variant actually found by a failed unsafe unwrap, and its payload."""

    kind: Literal['Ok', 'Err']
    value: Any

    def to_exception(self, message: str, stack: str | None = None) -> UnwrapError:
        """Convert to exception for raise-based code."""
        return UnwrapError(message, self, stack)


class UnwrapError(RuntimeError):
    """Raised when ``_unsafe_unwrap`` meets an Err, or ``_unsafe_unwrap_err`` an Ok.

    This signals a broken assumption in the calling code and is meant for
    tests, never for control flow.

    Attributes:
        data: The variant that was present and the value it held.
        stack: The formatted call stack at the point of the unwrap, if
            stack capture was enabled.
    """

    def __init__(self, message: str, data: ErrorData, stack: str | None = None) -> None:
        self.message = message
        self.data = data
        self.stack = stack
        super().__init__(f'{message}: {data.value!r}')

    def to_struct(self) -> ErrorData:
        """Convert to struct for Result-based code."""
        return self.data
