"""
Shared utilities — log levels, timestamp formatting, diagnostics.

Single source of truth for the helpers used by both decoders, the
assembler, the server and the CLI.
"""

import sys
from datetime import datetime, timezone
from types import MappingProxyType

# logcat prints epoch timestamps in UTC (--format=epoch,UTC,usec)
UTC = timezone.utc

# logcat priority letter → display name
LOG_LEVELS = MappingProxyType({
    "V": "Verbose",
    "D": "Debug",
    "I": "Info",
    "W": "Warning",
    "E": "Error",
    "F": "Fatal",
})


def format_absolute_time(unix_sec: float) -> str:
    """Convert Unix epoch seconds to human-readable datetime string (UTC)."""
    dt = datetime.fromtimestamp(unix_sec, tz=UTC)
    return dt.strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]  # millisecond precision


def warn(message: str):
    """Print a non-fatal diagnostic.

    Goes to stderr so that JSON written to stdout by the CLI stays parseable.
    """
    print(f"[WARN] {message}", file=sys.stderr)


def info(message: str):
    print(f"[INFO] {message}", file=sys.stderr)
