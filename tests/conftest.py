"""Shared fixtures for the Lispy test suite."""

import pytest

from lispy.config import ENV_VARS
from lispy.grammar import Grammar
from lispy.operators import OperatorRegistry, register_builtin_operators


@pytest.fixture(autouse=True)
def setup_operators():
    """Register built-in operators before each test."""
    OperatorRegistry.clear()
    register_builtin_operators()
    yield
    OperatorRegistry.clear()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the developer's LISPY_* settings out of the tests."""
    monkeypatch.delenv("LISPY_CONFIG", raising=False)
    for var in ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(scope="session")
def grammar():
    return Grammar()
