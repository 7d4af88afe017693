"""
Serialization of recorded call traces.

JSON output mirrors the records returned by the trace API; text output is
an indented tree for terminal use.
"""

import json
from typing import Any, Dict, List, Sequence

from ..utils.colors import address, call_type, dim, number
from .trace_entry import TraceEntry


class TraceSerializer:
    """Serializes trace entries to JSON or human readable text."""

    def __init__(self, indent_width: int = 2):
        self.indent_width = indent_width

    def serialize_entries(self, entries: Sequence[TraceEntry]) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in entries]

    def to_json(self, entries: Sequence[TraceEntry], indent: int = 2) -> str:
        return json.dumps(self.serialize_entries(entries), indent=indent)

    def format_entry(self, entry: TraceEntry) -> str:
        """Format a single entry as one line, indented by its depth."""
        pad = " " * (entry.depth * self.indent_width)
        parts = [
            f"{pad}{call_type(entry.type.value)}",
            f"{address(entry.from_addr)} -> {address(entry.to_addr)}",
        ]
        if entry.value:
            parts.append(f"value={number(entry.value)}")
        if entry.input is not None:
            parts.append(dim(f"input={len(entry.input)}B"))
        if entry.output is not None:
            parts.append(dim(f"output={len(entry.output)}B"))
        return " ".join(parts)

    def format_text(self, entries: Sequence[TraceEntry]) -> str:
        if not entries:
            return dim("(no calls)")
        return "\n".join(self.format_entry(entry) for entry in entries)
