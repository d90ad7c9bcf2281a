"""Tests for Result type (Ok and Err)."""

import pytest
from fallible import AsyncResult, Err, ErrorConfig, ErrorData, Ok, UnwrapError, err, init, ok, ok_async
from hypothesis import given

from tests.strategies import int_functions, integers, payloads, results


class TestConstruction:
    """Tests for Ok/Err instantiation and basic properties."""

    def test_ok_creation(self):
        """Ok wraps a value."""
        assert Ok(42).value == 42

    def test_ok_with_none(self):
        """Ok can wrap None."""
        assert Ok(None).value is None

    def test_err_with_exception(self):
        """Err can wrap exception objects."""
        exc = ValueError('something went wrong')
        assert Err(exc).error is exc

    def test_constructor_functions(self):
        """ok() and err() build the matching variants."""
        assert ok(1) == Ok(1)
        assert err('e') == Err('e')

    def test_ok_is_frozen(self):
        """Ok instances are immutable."""
        result = Ok(42)
        with pytest.raises(AttributeError):
            result.value = 100  # type: ignore[misc]

    def test_err_is_frozen(self):
        """Err instances are immutable."""
        result = Err('error')
        with pytest.raises(AttributeError):
            result.error = 'new error'  # type: ignore[misc]


class TestResultEquality:
    """Tests for Result equality and hashing."""

    def test_same_variant_same_payload_equal(self):
        assert Ok(1) == Ok(1)
        assert Err('a') == Err('a')

    def test_variants_never_equal(self):
        """Ok and Err with the same payload are different values."""
        assert Ok(1) != Err(1)

    def test_hashable_with_hashable_payload(self):
        assert hash(Ok(1)) == hash(Ok(1))
        assert len({Err('a'), Err('a'), Ok('a')}) == 2


class TestDiscriminant:
    """Tests for is_ok/is_err."""

    def test_ok(self, sample_ok):
        assert sample_ok.is_ok()
        assert not sample_ok.is_err()

    def test_err(self, sample_err):
        assert sample_err.is_err()
        assert not sample_err.is_ok()


class TestMap:
    """Tests for map and map_err."""

    def test_map_ok(self):
        assert Ok(5).map(lambda x: x * 2) == Ok(10)

    def test_map_err_passthrough(self):
        """map leaves an Err untouched and never calls f."""
        calls = []
        assert Err('e').map(calls.append) == Err('e')
        assert calls == []

    def test_map_err_on_err(self):
        assert Err('error').map_err(str.upper) == Err('ERROR')

    def test_map_err_on_ok_passthrough(self):
        calls = []
        assert Ok(1).map_err(calls.append) == Ok(1)
        assert calls == []

    @given(payloads)
    def test_identity_law(self, x):
        """map(id) is a no-op on both variants."""
        assert Ok(x).map(lambda v: v) == Ok(x)
        assert Err(x).map(lambda v: v) == Err(x)

    @given(integers, int_functions, int_functions)
    def test_composition_law(self, x, f, g):
        """map(f).map(g) == map(g . f)."""
        assert Ok(x).map(f).map(g) == Ok(x).map(lambda v: g(f(v)))
        assert Err(x).map(f).map(g) == Err(x)


class TestAndThen:
    """Tests for and_then and or_else."""

    def test_and_then_ok(self):
        assert Ok(5).and_then(lambda x: Ok(x + 1)) == Ok(6)

    def test_and_then_ok_to_err(self):
        """An Err returned by f becomes the outcome."""
        assert Ok(5).and_then(lambda x: Err('too big')) == Err('too big')

    def test_and_then_err_passthrough(self):
        calls = []
        assert Err('e').and_then(lambda x: calls.append(x) or Ok(x)) == Err('e')
        assert calls == []

    def test_and_then_flattens_nested(self):
        """and_then with identity flattens Ok(Ok(x)) by one level."""
        assert Ok(Ok(1)).and_then(lambda inner: inner) == Ok(1)
        assert Ok(Err('inner')).and_then(lambda inner: inner) == Err('inner')

    def test_and_then_lifts_into_async(self):
        """A callback returning AsyncResult lifts the chain."""
        assert isinstance(Ok(1).and_then(ok_async), AsyncResult)

    def test_or_else_err(self):
        assert Err('e').or_else(lambda e: Ok(len(e))) == Ok(1)

    def test_or_else_err_to_err(self):
        assert Err('e').or_else(lambda e: Err(e * 2)) == Err('ee')

    def test_or_else_ok_passthrough(self):
        calls = []
        assert Ok(1).or_else(lambda e: calls.append(e) or Ok(0)) == Ok(1)
        assert calls == []

    @given(results)
    def test_and_then_law(self, result):
        """Ok(x).and_then(f) == f(x); Err(e).and_then(f) == Err(e)."""

        def f(v):
            return Err(('f', v))

        expected = f(result.value) if result.is_ok() else result
        assert result.and_then(f) == expected

    @given(results)
    def test_or_else_law(self, result):
        """Err(e).or_else(f) == f(e); Ok(x).or_else(f) == Ok(x)."""

        def f(e):
            return Ok(('recovered', e))

        expected = f(result.error) if result.is_err() else result
        assert result.or_else(f) == expected


class TestAsyncLift:
    """Tests for async_map and async_and_then on sync Results."""

    async def test_async_map_ok(self):
        async def double(x: int) -> int:
            return x * 2

        assert await Ok(5).async_map(double) == Ok(10)

    async def test_async_map_err(self):
        async def double(x: int) -> int:
            return x * 2

        lifted = Err('e').async_map(double)
        assert isinstance(lifted, AsyncResult)
        assert await lifted == Err('e')

    async def test_async_and_then_ok(self):
        assert await Ok(1).async_and_then(lambda x: ok_async(x + 1)) == Ok(2)

    async def test_async_and_then_wraps_coroutine(self):
        async def fetch(x: int):
            return Err(f'missing {x}')

        lifted = Ok(7).async_and_then(fetch)
        assert isinstance(lifted, AsyncResult)
        assert await lifted == Err('missing 7')

    async def test_async_and_then_err(self):
        calls = []
        lifted = Err('e').async_and_then(lambda x: calls.append(x) or ok_async(x))
        assert await lifted == Err('e')
        assert calls == []


class TestUnwrapAndMatch:
    """Tests for unwrap_or and match."""

    @given(payloads, payloads)
    def test_unwrap_or(self, x, d):
        assert Ok(x).unwrap_or(d) == x
        assert Err(x).unwrap_or(d) is d

    @given(payloads)
    def test_match(self, x):
        """Ok(x).match(f, g) == f(x); Err(e).match(f, g) == g(e)."""

        def f(v):
            return ('ok', v)

        def g(e):
            return ('err', e)

        assert Ok(x).match(f, g) == f(x)
        assert Err(x).match(f, g) == g(x)


class TestUnsafeUnwrap:
    """Tests for _unsafe_unwrap and _unsafe_unwrap_err."""

    def test_unwrap_ok(self):
        assert Ok(1)._unsafe_unwrap() == 1

    def test_unwrap_err_on_err(self):
        assert Err('e')._unsafe_unwrap_err() == 'e'

    def test_unwrap_on_err_raises(self):
        with pytest.raises(UnwrapError, match='Called _unsafe_unwrap on an Err') as exc_info:
            Err('boom')._unsafe_unwrap()
        assert exc_info.value.data == ErrorData(kind='Err', value='boom')
        assert exc_info.value.to_struct() is exc_info.value.data
        assert exc_info.value.stack is None

    def test_unwrap_err_on_ok_raises(self):
        with pytest.raises(UnwrapError, match='Called _unsafe_unwrap_err on an Ok') as exc_info:
            Ok(3)._unsafe_unwrap_err()
        assert exc_info.value.data == ErrorData(kind='Ok', value=3)

    def test_unwrap_error_is_runtime_error(self):
        with pytest.raises(RuntimeError):
            Err('boom')._unsafe_unwrap()

    def test_stack_trace_from_explicit_config(self):
        """A per-call config attaches the captured call stack."""
        with pytest.raises(UnwrapError) as exc_info:
            Err('boom')._unsafe_unwrap(ErrorConfig(with_stack_trace=True))
        stack = exc_info.value.stack
        assert stack is not None
        assert 'test_stack_trace_from_explicit_config' in stack

    def test_stack_trace_from_global_config(self):
        init(with_stack_trace=True)
        with pytest.raises(UnwrapError) as exc_info:
            Ok(1)._unsafe_unwrap_err()
        assert exc_info.value.stack is not None

    def test_explicit_config_overrides_global(self):
        init(with_stack_trace=True)
        with pytest.raises(UnwrapError) as exc_info:
            Err('boom')._unsafe_unwrap(ErrorConfig(with_stack_trace=False))
        assert exc_info.value.stack is None

    def test_error_data_to_exception(self):
        exc = ErrorData(kind='Err', value=1).to_exception('custom')
        assert isinstance(exc, UnwrapError)
        assert str(exc) == 'custom: 1'
