"""
Trace lookup entry point.

Equivalent of the ``ots_traceTransaction`` style endpoint: find a
transaction, replay it through a fresh recorder and hand back the calls.
"""

from typing import List, Protocol

from ..utils.logging import get_logger
from .trace_entry import TraceEntry
from .transaction_tracer import CallTracer, TransactionTracer

logger = get_logger('api')


class CallTraceSource(Protocol):
    """Anything able to replay a transaction into a CallTracer."""

    def run_tracer(self, tx_hash: str, tracer: CallTracer) -> None:
        ...


def trace_transaction(tx_hash: str, source: CallTraceSource) -> List[TraceEntry]:
    """
    Return the ordered list of calls made by ``tx_hash``.

    Errors from the source (unknown transaction, unavailable trace) and
    protocol violations from the recorder propagate unchanged.
    """
    tracer = TransactionTracer()
    source.run_tracer(tx_hash, tracer)
    entries = tracer.finish()
    logger.debug("Traced %s: %d call(s)", tx_hash, len(entries))
    return entries
