"""
Utilities module for txtrace.

Provides exception handling, logging and color helpers.
"""

from .exceptions import (
    TxtraceError,
    ConfigError,
    RPCConnectionError,
    TransactionError,
    TransactionNotFoundError,
    DebugTraceUnavailableError,
    TraceError,
    TraceProtocolError,
    MissingValueError,
    format_error,
    format_error_json,
)
from .logging import TRACE, setup_logging, get_logger, logger
from .colors import (
    Colors,
    SUPPORTS_COLOR,
    dim,
    error, info,
    address, number, call_type,
)

__all__ = [
    # Exceptions
    'TxtraceError',
    'ConfigError',
    'RPCConnectionError',
    'TransactionError',
    'TransactionNotFoundError',
    'DebugTraceUnavailableError',
    'TraceError',
    'TraceProtocolError',
    'MissingValueError',
    # Formatting
    'format_error',
    'format_error_json',
    # Logging
    'TRACE',
    'setup_logging',
    'get_logger',
    'logger',
    # Colors
    'Colors',
    'SUPPORTS_COLOR',
    'dim',
    'error', 'info',
    'address', 'number', 'call_type',
]
