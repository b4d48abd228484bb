"""
generator.py — HOTP / TOTP code derivation (RFC 4226, RFC 6238).

    code = Truncate(HMAC-<alg>(key=secret, msg=counter)) mod 10^digits

Pure functions only: same (secret, counter, algorithm, digits) always gives
the same code, and nothing here reads or writes module state.
"""

import hmac
import struct
from typing import Optional

from . import counter_clock
from .configuration import ALGORITHMS, MAX_DIGITS, MIN_DIGITS, Configuration
from .errors import InvalidConfiguration, InvalidSecret


# --- RFC helpers -----------------------------------------------------------
def int_to_bytes(i: int) -> bytes:
    """
    Counter as 8-byte big-endian, as RFC 4226 requires.

    Example: int_to_bytes(1) -> b'\\x00\\x00\\x00\\x00\\x00\\x00\\x00\\x01'
    """
    return struct.pack(">Q", i)


def dynamic_truncate(hmac_digest: bytes) -> int:
    """
    RFC 4226 dynamic truncation.

    - offset = low 4 bits of the last digest byte (0..15)
    - read 4 bytes from offset, clear the top bit of the first one
    - return the 31-bit unsigned integer

    Every supported digest (SHA1 = 20 bytes and up) is long enough for
    offset + 4.
    """
    offset = hmac_digest[-1] & 0x0F
    code = (
        ((hmac_digest[offset] & 0x7F) << 24)
        | ((hmac_digest[offset + 1] & 0xFF) << 16)
        | ((hmac_digest[offset + 2] & 0xFF) << 8)
        | (hmac_digest[offset + 3] & 0xFF)
    )
    return code


def generate(secret: bytes, counter: int, algorithm: str = "sha1", digits: int = 6) -> str:
    """
    Compute the HOTP code for one counter value.

    Steps:
    1. Message = 8-byte big-endian counter
    2. HMAC-<algorithm>(key=secret, message)
    3. Dynamic truncate -> 31-bit integer
    4. Reduce modulo 10^digits
    5. Zero-pad to exactly `digits` characters

    Arguments:
        secret: raw secret bytes (already Base32-decoded)
        counter: non-negative integer counter
        algorithm: 'sha1', 'sha256' or 'sha512'
        digits: code length, 6..10

    Raises:
        InvalidSecret: secret empty or not bytes (e.g. Base32 text passed undecoded)
        InvalidConfiguration: unsupported algorithm / digits, or negative counter
    """
    if not isinstance(secret, (bytes, bytearray)) or len(secret) == 0:
        raise InvalidSecret("secret must be non-empty decoded bytes")

    digest_function = ALGORITHMS.get(algorithm)
    if digest_function is None:
        raise InvalidConfiguration(f"unsupported algorithm: {algorithm!r}")
    if isinstance(digits, bool) or not isinstance(digits, int) or not MIN_DIGITS <= digits <= MAX_DIGITS:
        raise InvalidConfiguration(f"digits must be an integer between {MIN_DIGITS} and {MAX_DIGITS}")
    if isinstance(counter, bool) or not isinstance(counter, int) or counter < 0:
        raise InvalidConfiguration("counter must be a non-negative integer")

    digest = hmac.new(bytes(secret), int_to_bytes(counter), digest_function).digest()
    otp_val = dynamic_truncate(digest) % (10 ** digits)
    return str(otp_val).zfill(digits)


def generate_at(secret: bytes, configuration: Configuration, timestamp: Optional[float] = None) -> str:
    """TOTP code for the time step containing `timestamp` (default: now)."""
    if not configuration.is_usable():
        raise InvalidConfiguration(f"unusable configuration: {configuration!r}")
    counter = counter_clock.now(configuration.step, timestamp)
    return generate(secret, counter, configuration.algorithm, configuration.digits)
