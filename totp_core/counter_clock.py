"""
counter_clock.py — Time-step counter for TOTP (RFC 6238).

    counter   = floor(unix_seconds / step)
    remaining = step - (unix_seconds mod step)

Clock skew between issuer and verifier is handled by the verifier window,
not here.
"""

import time
from typing import Optional


def _unix_seconds(timestamp: Optional[float]) -> int:
    if timestamp is None:
        timestamp = time.time()
    return int(timestamp)


def now(step: int, timestamp: Optional[float] = None) -> int:
    """Counter for the current time (or for `timestamp`, epoch seconds)."""
    return _unix_seconds(timestamp) // step


def remaining(step: int, timestamp: Optional[float] = None) -> int:
    """Seconds left before the counter advances; always in [1, step]."""
    return step - (_unix_seconds(timestamp) % step)
