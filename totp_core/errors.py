"""
errors.py — Error kinds raised by the TOTP engine.

- FormatError      : secret text is not valid Base32
- ValidationError  : one or more request parameters are out of range / malformed
- GenerationError  : a code cannot be computed for this secret / configuration
    - InvalidSecret        : empty or undecoded secret
    - InvalidConfiguration : unsupported algorithm, digits, step or counter
- NetworkError     : the remote verification boundary did not answer

A GenerationError is never a "wrong code": Verifier only returns False for
well-formed codes that do not match.
"""

from typing import List, Optional


class TotpError(Exception):
    """Base class for every error raised by totp_core."""


class FormatError(TotpError, ValueError):
    """Secret text contains characters outside the Base32 alphabet or has a bad length."""


class ValidationError(TotpError, ValueError):
    """
    Parameter validation failed.

    Carries the full list of violations (one message per field) so a caller can
    fix every field at once.
    """

    def __init__(self, errors: List[str], message: Optional[str] = None) -> None:
        self.errors = list(errors)
        super().__init__(message or "; ".join(self.errors) or "validation failed")


class GenerationError(TotpError):
    """A code could not be computed."""


class InvalidSecret(GenerationError):
    pass


class InvalidConfiguration(GenerationError):
    pass


class NetworkError(TotpError):
    """The remote checker could not be reached or did not give a decision."""
