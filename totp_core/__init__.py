"""
totp_core package
=================

TOTP engine (RFC 4226 / RFC 6238): secret encoding, code generation,
parameter validation, window verification and failure bookkeeping.

──────────────────────────────────────────────
Core algorithm
──────────────────────────────────────────────
- HOTP (HMAC-based One-Time Password):
  code = Truncate(HMAC-<alg>(key=secret, msg=counter)) mod 10^digits

- TOTP (Time-based One-Time Password):
  HOTP with counter = floor(unix_time / step)
  → default step = 30 s, 6 digits, SHA1 (what most authenticator apps use).

- Dynamic truncation:
  take 4 bytes of the HMAC at offset (last byte & 0x0F), clear the top bit.

──────────────────────────────────────────────
Quick example
──────────────────────────────────────────────
>>> from totp_core import Configuration, decode, generate, check
>>> key = decode("JBSWY3DPEHPK3PXP")
>>> generate(key, 1, "sha1", 6)
'996554'
>>> check("996554", key, Configuration(), timestamp=59)
True
"""

from .configuration import Configuration
from .counter_clock import now, remaining
from .display import UNAVAILABLE, DisplayClock, DisplayFrame, frame_at
from .errors import (
    FormatError,
    GenerationError,
    InvalidConfiguration,
    InvalidSecret,
    NetworkError,
    TotpError,
    ValidationError,
)
from .generator import dynamic_truncate, generate, generate_at, int_to_bytes
from .provisioning import format_otpauth_uri
from .risk import RISK_THRESHOLD, RiskTracker
from .secret_codec import decode, encode, generate_base32_secret, generate_secret
from .session import TotpSession
from .validator import require_valid, validate, validate_configuration, validate_secret
from .verifier import check

__all__ = [
    "Configuration",
    "DisplayClock",
    "DisplayFrame",
    "FormatError",
    "GenerationError",
    "InvalidConfiguration",
    "InvalidSecret",
    "NetworkError",
    "RISK_THRESHOLD",
    "RiskTracker",
    "TotpError",
    "TotpSession",
    "UNAVAILABLE",
    "ValidationError",
    "check",
    "decode",
    "dynamic_truncate",
    "encode",
    "format_otpauth_uri",
    "frame_at",
    "generate",
    "generate_at",
    "generate_base32_secret",
    "generate_secret",
    "int_to_bytes",
    "now",
    "remaining",
    "require_valid",
    "validate",
    "validate_configuration",
    "validate_secret",
]
