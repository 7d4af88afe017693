"""
Shared pytest fixtures for txtrace tests.
"""

import pytest

from txtrace.core.transaction_tracer import TransactionTracer


@pytest.fixture
def tracer():
    """A fresh recorder, as created per traced transaction."""
    return TransactionTracer()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TXTRACE_RPC_URL", "TXTRACE_TIMEOUT", "TXTRACE_PRECOMPILES"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture(autouse=True)
def no_colors(monkeypatch):
    monkeypatch.setattr("txtrace.utils.colors.SUPPORTS_COLOR", False)
