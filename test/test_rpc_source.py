from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from web3.exceptions import TransactionNotFound, Web3RPCError

from txtrace.core.rpc_source import RPCCallTraceSource, is_precompile, replay_call_frame
from txtrace.core.trace_entry import CallKind
from txtrace.core.transaction_tracer import TransactionTracer
from txtrace.utils.exceptions import (
    DebugTraceUnavailableError,
    RPCConnectionError,
    TransactionError,
    TransactionNotFoundError,
)

from trace_helpers import ADDR_A, ADDR_B, ADDR_C, ECRECOVER, TX_HASH, RecordingTracer

FRAME = {
    "type": "CALL",
    "from": ADDR_A.lower(),
    "to": ADDR_B.lower(),
    "value": "0x0",
    "gas": "0x5208",
    "gasUsed": "0x5208",
    "input": "0x",
    "output": "0x",
    "calls": [
        {
            "type": "STATICCALL",
            "from": ADDR_B.lower(),
            "to": "0x0000000000000000000000000000000000000001",
            "gas": "0x100",
            "gasUsed": "0xbb8",
            "input": "0xdead",
            "output": "0x" + "00" * 32,
        },
        {
            "type": "DELEGATECALL",
            "from": ADDR_B.lower(),
            "to": ADDR_C.lower(),
            "gas": "0x100",
            "gasUsed": "0x10",
            "input": "0x1234",
            "output": "0xbeef",
            "calls": [
                {
                    "type": "SELFDESTRUCT",
                    "from": ADDR_B.lower(),
                    "to": ADDR_A.lower(),
                    "value": "0x10",
                },
            ],
        },
    ],
}


def test_is_precompile():
    assert is_precompile(ECRECOVER)
    assert is_precompile("0x000000000000000000000000000000000000000a")
    assert not is_precompile("0x000000000000000000000000000000000000000b")
    assert not is_precompile(ADDR_A)
    assert not is_precompile(None)


def test_replay_emits_notifications_depth_first():
    recorder = RecordingTracer()
    replay_call_frame(FRAME, recorder)

    kinds = [event[0] if event[0] != "enter" else event[1] for event in recorder.events]
    assert kinds == ["start", "STATICCALL", "exit", "DELEGATECALL", "SELFDESTRUCT", "exit", "end"]

    start = recorder.events[0]
    assert start[3] is False
    assert start[5] == 0
    static = recorder.events[1]
    assert static[4] is True
    assert static[5] == b"\xde\xad"
    assert recorder.events[2][2] == 0xbb8


def test_replay_into_recorder_builds_trace():
    tracer = TransactionTracer()
    replay_call_frame(FRAME, tracer)

    results = tracer.finish()
    assert [(e.type, e.depth) for e in results] == [
        (CallKind.CALL, 0),
        (CallKind.DELEGATECALL, 1),
        (CallKind.SELFDESTRUCT, 2),
    ]
    assert results[1].output == b"\xbe\xef"
    assert results[1].value is None
    assert results[2].value == 16


def test_replay_respects_custom_precompiles():
    tracer = TransactionTracer()
    replay_call_frame(FRAME, tracer, precompiles=frozenset([ADDR_C]))

    to_addrs = [e.to_addr for e in tracer.finish()]
    assert ECRECOVER in to_addrs
    assert ADDR_C not in to_addrs


def test_replay_handles_deep_nesting():
    frame = {"type": "CALL", "from": ADDR_A, "to": ADDR_B, "value": "0x0", "input": "0x", "output": "0x"}
    leaf = frame
    for _ in range(1100):
        child = {"type": "CALL", "from": ADDR_B, "to": ADDR_B, "value": "0x0", "input": "0x", "output": "0x01"}
        leaf["calls"] = [child]
        leaf = child

    tracer = TransactionTracer()
    replay_call_frame(frame, tracer)

    results = tracer.finish()
    assert len(results) == 1101
    assert results[-1].depth == 1100


def _fake_w3(frame=None, tx_error=None, trace_error=None):
    w3 = MagicMock()
    w3.eth.block_number = 1
    if tx_error is not None:
        w3.eth.get_transaction.side_effect = tx_error
    if trace_error is not None:
        w3.manager.request_blocking.side_effect = trace_error
    else:
        w3.manager.request_blocking.return_value = frame
    return w3


def test_source_runs_tracer_from_node_frames():
    w3 = _fake_w3(frame=FRAME)
    source = RPCCallTraceSource(w3=w3)

    tracer = TransactionTracer()
    source.run_tracer(TX_HASH[2:], tracer)

    assert len(tracer.finish()) == 3
    w3.manager.request_blocking.assert_called_once_with(
        "debug_traceTransaction", [TX_HASH, {"tracer": "callTracer"}]
    )


def test_source_unknown_transaction():
    source = RPCCallTraceSource(w3=_fake_w3(tx_error=TransactionNotFound("missing")))

    with pytest.raises(TransactionNotFoundError) as excinfo:
        source.run_tracer(TX_HASH, TransactionTracer())
    assert excinfo.value.details["tx_hash"] == TX_HASH


def test_source_debug_namespace_unavailable():
    source = RPCCallTraceSource(w3=_fake_w3(trace_error=ValueError("method not found")))

    with pytest.raises(DebugTraceUnavailableError) as excinfo:
        source.run_tracer(TX_HASH, TransactionTracer())
    assert "method not found" in excinfo.value.message


def test_source_empty_trace_response():
    source = RPCCallTraceSource(w3=_fake_w3(frame=None))

    with pytest.raises(DebugTraceUnavailableError):
        source.fetch_call_frame(TX_HASH)


class _UnreachableEth:
    @property
    def block_number(self):
        raise ConnectionError("connection refused")


def test_source_connection_failure():
    with pytest.raises(RPCConnectionError) as excinfo:
        RPCCallTraceSource("http://127.0.0.1:1", w3=SimpleNamespace(eth=_UnreachableEth()))
    assert excinfo.value.details["rpc_url"] == "http://127.0.0.1:1"


def test_source_node_error_on_lookup():
    source = RPCCallTraceSource(
        w3=_fake_w3(tx_error=Web3RPCError("invalid argument 0: hex string has length 4"))
    )

    with pytest.raises(TransactionError) as excinfo:
        source.run_tracer("0xabcd", TransactionTracer())
    assert type(excinfo.value) is TransactionError
    assert "hex string has length 4" in excinfo.value.message
    assert excinfo.value.details["tx_hash"] == "0xabcd"
