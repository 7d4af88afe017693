"""
ANSI color helpers for terminal output.
"""

import os
import sys


class Colors:
    RESET = '\033[0m'
    BOLD = '\033[1m'
    DIM = '\033[2m'
    YELLOW = '\033[33m'
    BLUE = '\033[34m'
    MAGENTA = '\033[35m'
    BRIGHT_RED = '\033[91m'
    BRIGHT_YELLOW = '\033[93m'
    BRIGHT_CYAN = '\033[96m'


SUPPORTS_COLOR = (
    hasattr(sys.stdout, 'isatty') and sys.stdout.isatty()
    and os.environ.get('NO_COLOR') is None
)


def _wrap(text: str, color: str) -> str:
    if not SUPPORTS_COLOR:
        return str(text)
    return f"{color}{text}{Colors.RESET}"


def dim(text) -> str:
    return _wrap(text, Colors.DIM)


def error(text) -> str:
    return _wrap(text, Colors.BRIGHT_RED)


def info(text) -> str:
    return _wrap(text, Colors.BRIGHT_CYAN)


def address(text) -> str:
    return _wrap(text, Colors.MAGENTA)


def number(text) -> str:
    return _wrap(text, Colors.YELLOW)


def call_type(text) -> str:
    """Highlight a call kind such as CALL or DELEGATECALL."""
    return _wrap(text, Colors.BOLD + Colors.BLUE)
