"""fallible: Typed Result values and their async counterpart.

Ok/Err replace exceptions for expected failures; AsyncResult carries the
same vocabulary across await boundaries; combine folds many Results into one.

Flat imports (preferred):
    from fallible import Result, Ok, Err, ok, err
    from fallible import AsyncResult, ok_async, err_async
    from fallible import from_throwable, from_promise, from_safe_promise
    from fallible import combine, combine_with_all_errors

Submodule imports (for organization):
    from fallible.result import Ok, Err, Result
    from fallible.async_ import AsyncResult, combine_async
    from fallible.adapters import from_throwable
"""

# Configuration
from fallible._config import ErrorConfig, get_config, init, reset_config

# Adapters
from fallible.adapters import from_promise, from_safe_promise, from_throwable

# Async
from fallible.async_ import (
    AsyncResult,
    combine_async,
    combine_with_all_errors_async,
    err_async,
    ok_async,
)

# Aggregation
from fallible.combine import combine, combine_with_all_errors

# Errors
from fallible.errors import ErrorData, UnwrapError

# Result types
from fallible.result import Err, Ok, Result, err, ok

__all__ = [
    # Async
    'AsyncResult',
    # Result types
    'Err',
    # Configuration
    'ErrorConfig',
    # Errors
    'ErrorData',
    'Ok',
    'Result',
    'UnwrapError',
    # Aggregation
    'combine',
    'combine_async',
    'combine_with_all_errors',
    'combine_with_all_errors_async',
    'err',
    'err_async',
    # Adapters
    'from_promise',
    'from_safe_promise',
    'from_throwable',
    'get_config',
    'init',
    'ok',
    'ok_async',
    'reset_config',
]
