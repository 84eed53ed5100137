from __future__ import annotations

import os
import sys

_TRUTHY = ('1', 'true', 'yes', 'on')


def env_flag(name: str, default: str = '0') -> bool:
    return os.getenv(name, default).lower() in _TRUTHY


def debug_enabled() -> bool:
    """Set FUMEN_DEBUG=1 to print a trace line for every rejected input."""
    return env_flag('FUMEN_DEBUG')


def trace(msg: str) -> None:
    if debug_enabled():
        print(f"[fumen] {msg}", file=sys.stderr)
