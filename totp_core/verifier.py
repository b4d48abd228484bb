"""
verifier.py — Compare a submitted code against the codes around "now".

The default window radius is 0: only the current time step is accepted. Most
TOTP verifiers allow one step either side for clock skew; callers that want
that pass window_radius=1 explicitly.
"""

import hmac
import logging
import unicodedata
from typing import Any, Optional, Union

from . import counter_clock, secret_codec
from .configuration import Configuration
from .errors import InvalidConfiguration
from .generator import generate

logger = logging.getLogger(__name__)

DEFAULT_WINDOW_RADIUS = 0


def _as_bytes(text: str) -> bytes:
    return unicodedata.normalize("NFKC", text).encode("utf-8")


def check(
    submitted_code: Any,
    secret: Union[bytes, str],
    configuration: Configuration = Configuration(),
    window_radius: int = DEFAULT_WINDOW_RADIUS,
    timestamp: Optional[float] = None,
) -> bool:
    """
    True if `submitted_code` matches the code of any counter in
    [C - window_radius, C + window_radius], where C is the counter for now.

    - Every candidate is computed and compared with hmac.compare_digest; the
      loop never stops early, so timing does not reveal which offset matched.
    - A well-formed code that does not match returns False.

    Arguments:
        submitted_code: code typed by the user
        secret: raw bytes or Base32 text
        configuration: step / algorithm / digits
        window_radius: number of adjacent steps accepted on each side
        timestamp: epoch seconds to verify against (default: now)

    Raises:
        FormatError: secret text is not Base32
        GenerationError: secret or configuration cannot produce codes
    """
    if isinstance(secret, str):
        secret = secret_codec.decode(secret)
    if not configuration.is_usable():
        raise InvalidConfiguration(f"unusable configuration: {configuration!r}")
    if isinstance(window_radius, bool) or not isinstance(window_radius, int) or window_radius < 0:
        raise InvalidConfiguration("window_radius must be a non-negative integer")

    if not isinstance(submitted_code, str):
        return False
    submitted = _as_bytes(submitted_code)

    counter = counter_clock.now(configuration.step, timestamp)
    matched = False
    for offset in range(-window_radius, window_radius + 1):
        test_counter = counter + offset
        if test_counter < 0:
            continue
        expected = generate(secret, test_counter, configuration.algorithm, configuration.digits)
        matched |= hmac.compare_digest(expected.encode("ascii"), submitted)

    logger.debug(
        "TOTP check step=%s algorithm=%s digits=%s radius=%s -> %s",
        configuration.step, configuration.algorithm, configuration.digits, window_radius, matched,
    )
    return matched
