import pytest

from txtrace.core.trace_api import trace_transaction
from txtrace.core.trace_entry import CallKind
from txtrace.utils.exceptions import TraceProtocolError, TransactionNotFoundError

from trace_helpers import (
    ADDR_A, ADDR_B, ADDR_C, ECRECOVER, TX_HASH,
    FakeSource, end, enter, exit_, start,
)


def test_trace_transaction_returns_visible_calls():
    source = FakeSource([
        start(ADDR_A, ADDR_B),
        enter(CallKind.CALL, ADDR_B, ECRECOVER, precompile=True),
        exit_(),
        enter(CallKind.CALL, ADDR_B, ADDR_C),
        exit_(b"\x01"),
        end(),
    ])

    entries = trace_transaction(TX_HASH, source)

    assert source.requested == [TX_HASH]
    assert [(e.to_addr, e.depth) for e in entries] == [(ADDR_B, 0), (ADDR_C, 1)]


def test_each_lookup_uses_a_fresh_recorder():
    source = FakeSource([start(ADDR_A, ADDR_B), end()])

    first = trace_transaction(TX_HASH, source)
    second = trace_transaction(TX_HASH, source)

    assert len(first) == len(second) == 1
    assert first is not second


def test_unbalanced_stream_is_reported():
    source = FakeSource([start(ADDR_A, ADDR_B), enter(CallKind.CALL, ADDR_B, ADDR_C), exit_()])

    with pytest.raises(TraceProtocolError):
        trace_transaction(TX_HASH, source)


def test_source_errors_propagate():
    source = FakeSource(error=TransactionNotFoundError(TX_HASH))

    with pytest.raises(TransactionNotFoundError):
        trace_transaction(TX_HASH, source)
