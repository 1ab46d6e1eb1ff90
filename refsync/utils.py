"""Logging and formatting utilities for refsync.

Informational output goes to stdout, errors to stderr.
Debug output is only emitted when REFSYNC_DEBUG=1.
"""

from __future__ import annotations

import os
import sys


# Color codes - respect TERM environment variable
def _should_use_colors() -> bool:
    """Check if colors should be used based on TERM environment variable."""
    term = os.environ.get("TERM", "")
    if not term or term == "dumb":
        return False
    return sys.stdout.isatty()


_USE_COLORS = _should_use_colors()

# ANSI color codes
BOLD = "\033[1m" if _USE_COLORS else ""
RESET = "\033[0m" if _USE_COLORS else ""


def debug_enabled() -> bool:
    """Return True when REFSYNC_DEBUG=1."""
    return os.environ.get("REFSYNC_DEBUG") == "1"


def log_info(msg: str) -> None:
    """Log an info message to stdout.

    Args:
        msg: The message to log.
    """
    print(msg)


def log_debug(msg: str) -> None:
    """Log a debug message to stderr (only if REFSYNC_DEBUG=1).

    Args:
        msg: The message to log.
    """
    if debug_enabled():
        print(f"DEBUG: {msg}", file=sys.stderr)


def log_error(msg: str) -> None:
    """Log an error message to stderr.

    Args:
        msg: The message to log.
    """
    print(f"Error: {msg}", file=sys.stderr)


def log_section(msg: str) -> None:
    """Log a section header in bold."""
    print()
    print(f"{BOLD}> {msg}{RESET}")


def log_step(msg: str) -> None:
    """Log an indented step message (2 spaces indent)."""
    print(f"  {msg}")


def format_kv(key: str, value: str) -> str:
    """Format a key-value pair with 2 spaces indent.

    Args:
        key: The key name.
        value: The value.

    Returns:
        Formatted string "  {key}: {value}".
    """
    return f"  {key}: {value}"
