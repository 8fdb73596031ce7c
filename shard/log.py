"""Diagnostic logging for the Shard toolchain.

Messages go to stderr with a ``[shard]`` prefix; stdout belongs to the
running program's ``print`` output. Logging is off unless enabled.
"""

import sys

_verbose = False


def set_verbose(enabled: bool) -> None:
    global _verbose
    _verbose = bool(enabled)


def log(message):
    """Log a message with [shard] prefix."""
    if _verbose:
        print(f"[shard] {message}", file=sys.stderr)
