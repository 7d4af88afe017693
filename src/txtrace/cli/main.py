#!/usr/bin/env python3
"""
Main entry point for txtrace

Handles argument parsing and routes to the command implementations in the
cli/ module.
"""

import sys
import argparse

from .trace import trace_command


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='txtrace - list the calls made by an EVM transaction')
    parser.add_argument('--version', '-v', action='version', version='%(prog)s 0.1.0')

    subparsers = parser.add_subparsers(dest='command', help='Commands')
    subparsers.required = True

    # trace command
    trace_parser = subparsers.add_parser('trace', help='Show the call trace of a transaction')
    trace_parser.add_argument('tx_hash', help='Transaction hash to trace')
    trace_parser.add_argument('--rpc-url', '-r', default=None, help='RPC URL (default: $TXTRACE_RPC_URL or http://localhost:8545)')
    trace_parser.add_argument('--timeout', type=int, default=None, help='RPC request timeout in seconds')
    trace_parser.add_argument('--json', action='store_true', help='Output the trace as JSON')
    trace_parser.add_argument('--debug', action='store_true', help='Enable debug logging')
    trace_parser.add_argument('--verbose', action='store_true', help='Log every call notification')
    trace_parser.add_argument('--log-file', default=None, help='Write a detailed log to this file')

    return parser


def main(argv=None):
    """Main entry point for txtrace CLI."""
    args = build_parser().parse_args(argv)

    if args.command == 'trace':
        return trace_command(args)

    return 0


if __name__ == '__main__':
    sys.exit(main())
