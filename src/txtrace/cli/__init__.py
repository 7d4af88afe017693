"""
CLI module for txtrace commands.
"""

from .main import main

__all__ = [
    'main',
    'trace_command',
]


def trace_command(args):
    """Execute the trace command."""
    from .trace import trace_command as _trace_command
    return _trace_command(args)
