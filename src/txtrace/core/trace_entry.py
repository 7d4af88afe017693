"""
Call entry data model.

A TraceEntry is one inter-contract call observed while a transaction
executes. The recorder produces them in chronological order; the JSON-RPC
layer serializes them with ``to_dict``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Union

from eth_utils import to_hex


class CallKind(str, Enum):
    """Kind of call-like operation recorded in a trace."""
    CALL = "CALL"
    STATICCALL = "STATICCALL"
    DELEGATECALL = "DELEGATECALL"
    CALLCODE = "CALLCODE"
    CREATE = "CREATE"
    CREATE2 = "CREATE2"
    SELFDESTRUCT = "SELFDESTRUCT"
    UNKNOWN = "UNKNOWN"

    @property
    def carries_value(self) -> bool:
        return self not in (CallKind.STATICCALL, CallKind.DELEGATECALL)

    @property
    def requires_value(self) -> bool:
        return self in (CallKind.CREATE, CallKind.CREATE2, CallKind.SELFDESTRUCT)

    @classmethod
    def from_opcode(cls, op: Union["CallKind", str, int, None]) -> "CallKind":
        """
        Map an engine-supplied call type to a CallKind.

        Accepts a CallKind, a mnemonic such as ``"delegatecall"`` or a raw
        opcode byte. Anything unrecognised becomes UNKNOWN so that new
        call-like opcodes never break enter/exit pairing.
        """
        if isinstance(op, CallKind):
            return op
        if isinstance(op, int):
            return _OPCODE_BYTES.get(op, cls.UNKNOWN)
        if isinstance(op, str):
            try:
                return cls(op.strip().upper())
            except ValueError:
                return cls.UNKNOWN
        return cls.UNKNOWN


_OPCODE_BYTES = {
    0xF0: CallKind.CREATE,
    0xF1: CallKind.CALL,
    0xF2: CallKind.CALLCODE,
    0xF4: CallKind.DELEGATECALL,
    0xF5: CallKind.CREATE2,
    0xFA: CallKind.STATICCALL,
    0xFF: CallKind.SELFDESTRUCT,
}


@dataclass
class TraceEntry:
    """One call in the reconstructed trace."""
    type: CallKind
    depth: int
    from_addr: str  # checksum address
    to_addr: str
    value: Optional[int] = None  # wei; None for STATICCALL/DELEGATECALL
    input: Optional[bytes] = None  # None only for SELFDESTRUCT
    output: Optional[bytes] = None  # set when the matching exit arrives

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire record returned by the trace API."""
        return {
            "type": self.type.value,
            "depth": self.depth,
            "from": self.from_addr,
            "to": self.to_addr,
            "value": to_hex(self.value) if self.value is not None else None,
            "input": to_hex(self.input) if self.input is not None else None,
            "output": to_hex(self.output) if self.output is not None else None,
        }
