"""
secret_codec.py — Secret <-> Base32 text, plus random secret generation.

The text form is RFC 4648 Base32, upper-case, without '=' padding, which is
what authenticator apps (Google Authenticator, Authy, ...) expect to import.
"""

import base64
import binascii
import os
import re

from .errors import FormatError

# --- Config / constants ----------------------------------------------------
SECRET_BYTES = 20           # 160-bit secret (common practice, RFC 4226 recommendation)
MIN_SECRET_BYTES = 10
MAX_SECRET_BYTES = 64

_BASE32_RE = re.compile(r"^[A-Z2-7]*$")


def encode(raw: bytes) -> str:
    """
    Encode raw secret bytes as Base32 text.

    - base64.b32encode pads to a multiple of 8 with '='; the padding is removed.
    - Output is upper-case.

    Example: encode(b"Hello!\\xde\\xad\\xbe\\xef") -> "JBSWY3DPEHPK3PXP"
    """
    return base64.b32encode(bytes(raw)).decode("ascii").rstrip("=")


def decode(text: str) -> bytes:
    """
    Decode Base32 secret text back to raw bytes.

    - Case-insensitive; surrounding whitespace is ignored.
    - Missing '=' padding is tolerated and restored before decoding.

    Arguments:
        text: Base32 secret (e.g. "JBSWY3DPEHPK3PXP" or "jbswy3dpehpk3pxp")

    Raises:
        FormatError: characters outside A-Z / 2-7, or a length that cannot be
            produced by any byte string.
    """
    if not isinstance(text, str):
        raise FormatError("secret must be Base32 text")
    cleaned = text.strip().upper().rstrip("=")
    if not _BASE32_RE.match(cleaned):
        raise FormatError("secret contains characters outside the Base32 alphabet")

    missing_padding = len(cleaned) % 8
    if missing_padding:
        cleaned += "=" * (8 - missing_padding)
    try:
        return base64.b32decode(cleaned)
    except binascii.Error as e:
        raise FormatError("secret has an invalid Base32 length") from e


def generate_secret(length: int = SECRET_BYTES) -> bytes:
    """
    Random secret bytes from the OS CSPRNG (os.urandom).

    Raises:
        ValueError: length outside [MIN_SECRET_BYTES, MAX_SECRET_BYTES]
    """
    if not MIN_SECRET_BYTES <= length <= MAX_SECRET_BYTES:
        raise ValueError(
            f"secret length must be between {MIN_SECRET_BYTES} and {MAX_SECRET_BYTES} bytes"
        )
    return os.urandom(length)


def generate_base32_secret(length: int = SECRET_BYTES) -> str:
    """Random secret, already in Base32 text form."""
    return encode(generate_secret(length))
