"""
Transaction call tracer.

Reconstructs the ordered list of inter-contract calls made by a single
transaction from the lifecycle notifications an execution engine emits
while interpreting it (start, enter, exit, end).
"""

from typing import List, Optional, Tuple, Union

from eth_utils import to_checksum_address

from ..utils.exceptions import MissingValueError, TraceProtocolError
from ..utils.logging import TRACE, get_logger
from .trace_entry import CallKind, TraceEntry

logger = get_logger('tracer')

Address = Union[str, bytes]


class CallTracer:
    """
    Instrumentation interface driven by an execution engine.

    ``on_start``/``on_end`` bracket the top-level call and are invoked exactly
    once per transaction. Every nested call produces an ``on_enter`` followed
    later by an ``on_exit``, strictly nested. All methods are no-ops here so
    subclasses only override what they need.
    """

    def on_start(self, from_addr: Address, to_addr: Address, precompile: bool,
                 create: bool, input: bytes, gas: int, value: Optional[int],
                 code: Optional[bytes] = None) -> None:
        pass

    def on_enter(self, kind, from_addr: Address, to_addr: Address, precompile: bool,
                 create: bool, input: bytes, gas: int, value: Optional[int],
                 code: Optional[bytes] = None) -> None:
        pass

    def on_exit(self, output: bytes, used_gas: int, err: Optional[Union[Exception, str]]) -> None:
        pass

    def on_end(self, output: bytes, used_gas: int, err: Optional[Union[Exception, str]]) -> None:
        pass


class TransactionTracer(CallTracer):
    """
    Records the call trace of one transaction.

    Depth is not supplied by the engine; it is derived from how many enter
    notifications are still open. Precompiled calls are kept on the pending
    stack so exits stay paired, but never reach ``results``. Self-destructs
    are leaf events with no matching exit.

    Use a fresh instance per transaction and call ``finish()`` once the
    engine is done.
    """

    def __init__(self):
        self.results: List[TraceEntry] = []
        self._depth = 0
        self._started = False
        # (index into results, entry); index is None for precompiled calls
        self._pending: List[Tuple[Optional[int], TraceEntry]] = []

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def pending_depth(self) -> int:
        return len(self._pending)

    def on_start(self, from_addr, to_addr, precompile, create, input, gas, value, code=None):
        logger.log(TRACE, "start %s -> %s precompile=%s gas=%s", from_addr, to_addr, precompile, gas)
        self._depth = 0
        self._started = True
        self._open_call(CallKind.CALL, from_addr, to_addr, precompile, input, value)

    def on_enter(self, kind, from_addr, to_addr, precompile, create, input, gas, value, code=None):
        kind = CallKind.from_opcode(kind)
        logger.log(TRACE, "enter %s %s -> %s precompile=%s gas=%s",
                   kind.value, from_addr, to_addr, precompile, gas)
        if kind is CallKind.SELFDESTRUCT:
            self._record_selfdestruct(from_addr, to_addr, value)
            return
        self._depth += 1
        self._open_call(kind, from_addr, to_addr, precompile, input, value)

    def on_exit(self, output, used_gas, err):
        self._close_call(output, used_gas, err)

    def on_end(self, output, used_gas, err):
        self._close_call(output, used_gas, err)

    def finish(self) -> List[TraceEntry]:
        """
        Return the finished trace.

        Raises:
            TraceProtocolError: if the stream never started or left calls open
        """
        if not self._started:
            raise TraceProtocolError("No start notification was received")
        if self._pending:
            raise TraceProtocolError(
                f"Notification stream ended with {len(self._pending)} open call(s)",
                open_calls=len(self._pending),
            )
        return self.results

    def _open_call(self, kind: CallKind, from_addr, to_addr, precompile: bool,
                   input, value: Optional[int]) -> None:
        if value is None and kind.requires_value:
            raise MissingValueError(kind.value, depth=self._depth)

        entry = TraceEntry(
            type=kind,
            depth=self._depth,
            from_addr=to_checksum_address(from_addr),
            to_addr=to_checksum_address(to_addr),
            value=int(value) if value is not None and kind.carries_value else None,
            input=bytes(input or b""),
        )

        index = None
        if not precompile:
            index = len(self.results)
            self.results.append(entry)

        self._pending.append((index, entry))

    def _record_selfdestruct(self, from_addr, to_addr, value: Optional[int]) -> None:
        if value is None:
            raise MissingValueError(CallKind.SELFDESTRUCT.value, depth=self._depth)
        if not self.results:
            raise TraceProtocolError("Self-destruct reported before any visible call")

        # Attributed to the most recent visible call, which is not necessarily
        # the true parent when that parent is a precompile or already closed.
        parent = self.results[-1]
        self.results.append(TraceEntry(
            type=CallKind.SELFDESTRUCT,
            depth=parent.depth + 1,
            from_addr=to_checksum_address(from_addr),
            to_addr=to_checksum_address(to_addr),
            value=int(value),
        ))

    def _close_call(self, output, used_gas: int, err: Optional[Union[Exception, str]]) -> None:
        if not self._pending:
            raise TraceProtocolError(
                "Exit notification received with no open call",
                depth=self._depth,
            )
        self._depth -= 1
        index, entry = self._pending.pop()
        logger.log(TRACE, "exit %s depth=%d used_gas=%s err=%s",
                   entry.type.value, entry.depth, used_gas, err)

        if index is not None:
            self.results[index].output = bytes(output or b"")
