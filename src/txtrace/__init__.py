"""
txtrace - EVM transaction call tracer
"""

__version__ = "0.1.0"

# Main entry point
from .cli.main import main

# Core components
from .core import (
    CallKind,
    TraceEntry,
    CallTracer,
    TransactionTracer,
    TraceSerializer,
    RPCCallTraceSource,
    trace_transaction,
)

# Configuration
from .config import TracerConfig

# Utilities
from .utils import (
    TxtraceError,
    RPCConnectionError,
    TraceProtocolError,
    MissingValueError,
)

__all__ = [
    # Version
    '__version__',
    # Main
    'main',
    # Core
    'CallKind',
    'TraceEntry',
    'CallTracer',
    'TransactionTracer',
    'TraceSerializer',
    'RPCCallTraceSource',
    'trace_transaction',
    # Config
    'TracerConfig',
    # Utils
    'TxtraceError',
    'RPCConnectionError',
    'TraceProtocolError',
    'MissingValueError',
]
