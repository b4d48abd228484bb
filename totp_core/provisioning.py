"""
provisioning.py — otpauth:// provisioning identifier for authenticator apps.

    otpauth://totp/{issuer}:{account}?secret=...&issuer=...&algorithm=SHA1&digits=6&period=30

See https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

from typing import Union
from urllib.parse import quote, urlencode

from . import secret_codec
from .configuration import Configuration

DEFAULT_ISSUER = "TOTP Lab"
DEFAULT_ACCOUNT = "totp-demo@example.com"


def format_otpauth_uri(
    secret: Union[bytes, str],
    account: str = DEFAULT_ACCOUNT,
    issuer: str = DEFAULT_ISSUER,
    configuration: Configuration = Configuration(),
) -> str:
    """
    Build the TOTP provisioning URI (usually rendered as a QR code).

    - label is "issuer:account", each part percent-encoded (':' and '@' included)
    - query values are percent-encoded, spaces as %20 rather than '+'
    - secret is Base32 without padding; raw bytes are encoded first
    - algorithm / digits / period are always written, even at their defaults

    Raises:
        FormatError: secret text is not valid Base32
    """
    if isinstance(secret, (bytes, bytearray)):
        secret_b32 = secret_codec.encode(secret)
    else:
        # round-trip to reject bad text and normalise case / padding
        secret_b32 = secret_codec.encode(secret_codec.decode(secret))

    label = quote(issuer, safe="") + ":" + quote(account, safe="")
    query = urlencode(
        [
            ("secret", secret_b32),
            ("issuer", issuer),
            ("algorithm", configuration.otpauth_algorithm),
            ("digits", configuration.digits),
            ("period", configuration.step),
        ],
        quote_via=quote,
    )
    return f"otpauth://totp/{label}?{query}"
