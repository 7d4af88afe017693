"""
JSON-RPC call trace source.

Drives a CallTracer from the nested call frames a node returns for
``debug_traceTransaction`` with the built-in ``callTracer``. The node does
the execution; this module only turns its frame tree back into the start,
enter, exit and end notifications the recorder consumes.
"""

from typing import Any, Dict, FrozenSet, Iterable, Iterator, List, Mapping, Optional

from eth_utils import to_bytes, to_checksum_address, to_int
from web3 import Web3
from web3.exceptions import TransactionNotFound

from ..config import DEFAULT_PRECOMPILES, DEFAULT_TIMEOUT, DEFAULT_RPC_URL
from ..utils.exceptions import (
    DebugTraceUnavailableError,
    RPCConnectionError,
    TransactionError,
    TransactionNotFoundError,
)
from ..utils.logging import get_logger
from .trace_entry import CallKind
from .transaction_tracer import CallTracer

logger = get_logger('rpc')

ZERO_ADDRESS = "0x" + "00" * 20

CALL_TRACER_OPTIONS = {"tracer": "callTracer"}


def is_precompile(address: Optional[str], precompiles: Iterable[str] = DEFAULT_PRECOMPILES) -> bool:
    if not address:
        return False
    return to_checksum_address(address) in precompiles


def _quantity(raw: Any) -> Optional[int]:
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    return to_int(hexstr=raw)


def _data(raw: Any) -> bytes:
    if raw is None:
        return b""
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw)
    return to_bytes(hexstr=raw)


def _children(frame: Mapping[str, Any]) -> List[Mapping[str, Any]]:
    return list(frame.get("calls") or [])


def replay_call_frame(
    frame: Mapping[str, Any],
    tracer: CallTracer,
    precompiles: FrozenSet[str] = DEFAULT_PRECOMPILES,
) -> None:
    """
    Replay a callTracer frame tree as lifecycle notifications.

    The root frame opens with ``on_start`` and closes with ``on_end``; every
    nested frame is reported depth first as ``on_enter``/``on_exit``.
    SELFDESTRUCT frames are one-shot events and get no ``on_exit``.
    Iterative so that call stacks near the EVM limit of 1024 are fine.
    """
    def notify_open(current: Mapping[str, Any], kind: Optional[CallKind]) -> None:
        to_addr = current.get("to") or ZERO_ADDRESS
        args = dict(
            from_addr=current.get("from") or ZERO_ADDRESS,
            to_addr=to_addr,
            precompile=is_precompile(to_addr, precompiles),
            create=kind in (CallKind.CREATE, CallKind.CREATE2),
            input=_data(current.get("input")),
            gas=_quantity(current.get("gas")) or 0,
            value=_quantity(current.get("value")),
        )
        if kind is None:
            tracer.on_start(**args)
        else:
            tracer.on_enter(kind, **args)

    def notify_close(current: Mapping[str, Any], is_root: bool) -> None:
        output = _data(current.get("output"))
        used_gas = _quantity(current.get("gasUsed")) or 0
        err = current.get("error")
        if is_root:
            tracer.on_end(output, used_gas, err)
        else:
            tracer.on_exit(output, used_gas, err)

    notify_open(frame, None)
    frames: List[Mapping[str, Any]] = [frame]
    pending: List[Iterator[Mapping[str, Any]]] = [iter(_children(frame))]

    while pending:
        child = next(pending[-1], None)
        if child is None:
            pending.pop()
            notify_close(frames.pop(), is_root=not frames)
            continue

        kind = CallKind.from_opcode(child.get("type"))
        notify_open(child, kind)
        if kind is CallKind.SELFDESTRUCT:
            continue
        frames.append(child)
        pending.append(iter(_children(child)))


class RPCCallTraceSource:
    """
    Replays transactions through a node's debug_traceTransaction.

    Requires the node to expose the ``debug`` namespace (geth, erigon, reth,
    anvil, hardhat).
    """

    def __init__(
        self,
        rpc_url: str = DEFAULT_RPC_URL,
        timeout: int = DEFAULT_TIMEOUT,
        precompiles: FrozenSet[str] = DEFAULT_PRECOMPILES,
        w3: Optional[Web3] = None,
    ):
        self.rpc_url = rpc_url
        self.precompiles = precompiles
        self.w3 = w3 or Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

        try:
            # A direct call is more reliable than is_connected()
            self.w3.eth.block_number
        except Exception as e:
            raise RPCConnectionError(
                f"Failed to connect to {rpc_url}: {e}", rpc_url=rpc_url
            ) from e
        logger.debug("Connected to %s", rpc_url)

    def fetch_call_frame(self, tx_hash: str) -> Dict[str, Any]:
        """Fetch the callTracer frame tree for a transaction."""
        if not tx_hash.startswith("0x"):
            tx_hash = "0x" + tx_hash

        try:
            self.w3.eth.get_transaction(tx_hash)
        except TransactionNotFound as e:
            raise TransactionNotFoundError(tx_hash, rpc_url=self.rpc_url) from e
        except Exception as e:
            raise TransactionError(str(e), tx_hash=tx_hash, rpc_url=self.rpc_url) from e

        logger.debug("Requesting callTracer frames for %s", tx_hash)
        try:
            frame = self.w3.manager.request_blocking(
                "debug_traceTransaction", [tx_hash, CALL_TRACER_OPTIONS]
            )
        except Exception as e:
            raise DebugTraceUnavailableError(tx_hash, reason=str(e), rpc_url=self.rpc_url) from e

        if not frame:
            raise DebugTraceUnavailableError(tx_hash, reason="empty response", rpc_url=self.rpc_url)
        return dict(frame)

    def run_tracer(self, tx_hash: str, tracer: CallTracer) -> None:
        """Drive ``tracer`` with the notification stream of ``tx_hash``."""
        replay_call_frame(self.fetch_call_frame(tx_hash), tracer, self.precompiles)
