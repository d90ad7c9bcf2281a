"""Pytest configuration and shared fixtures for fallible tests."""

from __future__ import annotations

import logging
from collections.abc import Generator

import pytest
from fallible import Err, Ok, reset_config
from fallible._config import STACK_TRACE_ENV
from fallible._logging import PACKAGE_LOGGER, clear_log_hooks


@pytest.fixture(autouse=True)
def clean_config(monkeypatch: pytest.MonkeyPatch) -> Generator[None]:
    """Start every test from an unconfigured process with no env override."""
    monkeypatch.delenv(STACK_TRACE_ENV, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def restore_root_logger() -> Generator[logging.Logger]:
    """Undo logging changes made by a test to the root and fallible loggers."""
    root = logging.getLogger()
    package = logging.getLogger(PACKAGE_LOGGER)
    saved = [(lg, lg.handlers[:], lg.level, lg.propagate) for lg in (root, package)]
    clear_log_hooks()
    yield root
    clear_log_hooks()
    for lg, handlers, level, propagate in saved:
        lg.handlers[:] = handlers
        lg.setLevel(level)
        lg.propagate = propagate


@pytest.fixture
def sample_ok():
    """Sample Ok value for testing."""
    return Ok(42)


@pytest.fixture
def sample_err():
    """Sample Err value for testing."""
    return Err(ValueError('test error'))
