"""
Core module for txtrace.

- TransactionTracer: rebuilds a call trace from engine notifications
- RPCCallTraceSource: replays transactions from a node's callTracer output
- TraceSerializer: JSON and text output
"""

from .trace_entry import CallKind, TraceEntry
from .transaction_tracer import CallTracer, TransactionTracer
from .serializer import TraceSerializer
from .rpc_source import RPCCallTraceSource, replay_call_frame, is_precompile
from .trace_api import CallTraceSource, trace_transaction

__all__ = [
    'CallKind',
    'TraceEntry',
    'CallTracer',
    'TransactionTracer',
    'TraceSerializer',
    'RPCCallTraceSource',
    'replay_call_frame',
    'is_precompile',
    'CallTraceSource',
    'trace_transaction',
]
