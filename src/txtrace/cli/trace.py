"""
Trace command implementation.

Looks up a transaction on a node, rebuilds its call trace and prints it as
an indented tree or as JSON.
"""

import json

from txtrace.config import TracerConfig
from txtrace.core.rpc_source import RPCCallTraceSource
from txtrace.core.serializer import TraceSerializer
from txtrace.core.trace_api import trace_transaction
from txtrace.utils.colors import info
from txtrace.utils.exceptions import TxtraceError, format_error
from txtrace.utils.logging import logger, setup_logging


def trace_command(args, source=None) -> int:
    """
    Execute the trace command.

    Args:
        args: Parsed command arguments
        source: Optional call trace source; an RPCCallTraceSource is
                created from the configuration when omitted

    Returns:
        Exit code (0 for success, non-zero for error)
    """
    json_mode = getattr(args, 'json', False)
    setup_logging(
        debug=getattr(args, 'debug', False),
        verbose=getattr(args, 'verbose', False),
        log_file=getattr(args, 'log_file', None),
    )
    try:
        config = _resolve_config(args)
        if source is None:
            if not json_mode:
                print(f"Connecting to {info(config.rpc_url)}...")
            source = RPCCallTraceSource(
                config.rpc_url,
                timeout=config.timeout,
                precompiles=config.precompiles,
            )
        entries = trace_transaction(args.tx_hash, source)
    except TxtraceError as e:
        logger.debug("trace failed: %s", e.to_dict())
        print(format_error(e, json_mode))
        return 1

    serializer = TraceSerializer()
    if json_mode:
        print(json.dumps(serializer.serialize_entries(entries), indent=2))
    else:
        print(f"Call trace for {info(args.tx_hash)}:")
        print(serializer.format_text(entries))
    return 0


def _resolve_config(args) -> TracerConfig:
    """Environment defaults overridden by command line flags."""
    config = TracerConfig.from_env()
    if getattr(args, 'rpc_url', None):
        config.rpc_url = args.rpc_url
    if getattr(args, 'timeout', None) is not None:
        config.timeout = args.timeout
    return config
