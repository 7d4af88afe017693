"""
Custom exceptions for txtrace.

Every error the CLI can report derives from TxtraceError, so a single
``except TxtraceError`` turns node failures, bad configuration and broken
notification streams into an exit code and a JSON error record.
"""

import json
from typing import Any, Dict, Optional


class TxtraceError(Exception):
    """
    Base exception for all txtrace errors.

    Attributes:
        message: Human-readable error message
        details: Context merged into the JSON error record (tx_hash, rpc_url, ...)
        error_code: Value of the record's "type" field
    """

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None
    ):
        self.message = message
        self.details = details or {}
        self.error_code = error_code or self.__class__.__name__
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return format_error_json(self.message, self.error_code, **self.details)

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class ConfigError(TxtraceError):
    """Raised when a TXTRACE_* environment variable holds an unusable value."""

    def __init__(self, variable: str, value: str, reason: str):
        super().__init__(
            f"Invalid {variable}={value!r}: {reason}",
            {"variable": variable, "value": value},
            "ConfigError"
        )


# ============================================================================
# Node Errors
# ============================================================================

class RPCConnectionError(TxtraceError):
    """The node did not answer the initial block number request."""

    def __init__(self, message: str, rpc_url: Optional[str] = None, **kwargs):
        details = {"rpc_url": rpc_url} if rpc_url else {}
        details.update(kwargs)
        super().__init__(message, details, "RPCConnectionError")


class TransactionError(TxtraceError):
    """
    The node failed while looking up or replaying a transaction, for
    instance rejecting a malformed hash or dropping the connection.
    """

    def __init__(
        self,
        message: str,
        tx_hash: Optional[str] = None,
        **kwargs
    ):
        details = {"tx_hash": tx_hash} if tx_hash else {}
        details.update(kwargs)
        super().__init__(message, details, "TransactionError")


class TransactionNotFoundError(TransactionError):
    """The node has no transaction with this hash."""

    def __init__(self, tx_hash: str, **kwargs):
        super().__init__(f"Transaction not found: {tx_hash}", tx_hash=tx_hash, **kwargs)
        self.error_code = "TransactionNotFoundError"


class DebugTraceUnavailableError(TransactionError):
    """
    debug_traceTransaction failed or returned nothing, usually because the
    node does not expose the debug namespace or has pruned the state.
    """

    def __init__(
        self,
        tx_hash: str,
        reason: Optional[str] = None,
        **kwargs
    ):
        message = f"debug_traceTransaction unavailable for {tx_hash}"
        if reason:
            message += f": {reason}"
        super().__init__(message, tx_hash=tx_hash, **kwargs)
        self.error_code = "DebugTraceUnavailable"


# ============================================================================
# Trace Reconstruction Errors
# ============================================================================

class TraceError(TxtraceError):
    """Base class for errors raised while recording a call trace."""

    def __init__(self, message: str, **kwargs):
        super().__init__(message, dict(kwargs), "TraceError")


class TraceProtocolError(TraceError):
    """
    Raised when the notification stream breaks the nesting contract.

    Examples are a close notification with no open call, a stream that ends
    with calls still open, or a self-destruct reported before any visible
    call. The trace is unusable once this is raised.
    """

    def __init__(self, message: str, **kwargs):
        super().__init__(message, **kwargs)
        self.error_code = "TraceProtocolError"


class MissingValueError(TraceError):
    """Raised when a call kind that must transfer value arrives without one."""

    def __init__(self, kind: str, **kwargs):
        super().__init__(
            f"{kind} notification is missing its value",
            kind=kind,
            **kwargs
        )
        self.error_code = "MissingValueError"


# ============================================================================
# Error Formatting Utilities
# ============================================================================

def format_error(e: Exception, json_mode: bool = False) -> str:
    """
    Format an exception for display.

    Args:
        e: The exception to format
        json_mode: If True, output as JSON; otherwise use colored text

    Returns:
        Formatted error string
    """
    from txtrace.utils.colors import error

    if isinstance(e, TxtraceError):
        if json_mode:
            return e.to_json()
        return error(e.message)
    if json_mode:
        return json.dumps(format_error_json(str(e), type(e).__name__), indent=2)
    return error(str(e))


def format_error_json(
    message: str,
    error_type: str = "Error",
    **kwargs
) -> Dict[str, Any]:
    """
    Create a standardized error JSON structure.

    Args:
        message: Error message
        error_type: Error type/code
        **kwargs: Additional fields to include

    Returns:
        Dictionary suitable for JSON output
    """
    return {
        "error": True,
        "type": error_type,
        "message": message,
        **kwargs
    }
