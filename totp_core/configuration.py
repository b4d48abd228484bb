"""
configuration.py — Immutable TOTP configuration value.

A Configuration is passed explicitly into every generate / check call; there
is no shared, mutable "options" object that concurrent requests could race on.
"""

import hashlib
from typing import Any, Callable, NamedTuple, Optional

# --- Config / constants ----------------------------------------------------
DEFAULT_TIME_STEP = 30      # seconds
DEFAULT_ALGORITHM = "sha1"
DEFAULT_DIGITS = 6

MIN_TIME_STEP = 5
MAX_TIME_STEP = 300
MIN_DIGITS = 6
MAX_DIGITS = 10

# name -> hashlib constructor
ALGORITHMS = {
    "sha1": hashlib.sha1,
    "sha256": hashlib.sha256,
    "sha512": hashlib.sha512,
}


def coerce_int(value: Any) -> Optional[int]:
    """
    Request-style integer coercion: ints, integral floats and integer strings.

    Returns None when the value cannot be read as an integer (bools included).
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if text.lstrip("+-").isdigit() and text.isascii():
            return int(text)
    return None


def normalize_algorithm(value: Any) -> Optional[str]:
    """'SHA256' / 'sha256' -> 'sha256'; anything unsupported -> None."""
    if not isinstance(value, str):
        return None
    name = value.strip().lower()
    return name if name in ALGORITHMS else None


class Configuration(NamedTuple):
    step: int = DEFAULT_TIME_STEP
    algorithm: str = DEFAULT_ALGORITHM
    digits: int = DEFAULT_DIGITS

    @classmethod
    def from_params(cls, step: Any = None, algorithm: Any = None, digits: Any = None) -> "Configuration":
        """
        Build a Configuration from loosely typed request values.

        Absent (None) fields take their defaults. Every field is checked before
        anything is raised, so the ValidationError lists all bad fields.

        Raises:
            ValidationError: one or more fields out of bounds / unsupported
        """
        from .errors import ValidationError
        from .validator import validate_configuration

        errors = validate_configuration(step, algorithm, digits)
        if errors:
            raise ValidationError(errors)
        return cls(
            step=DEFAULT_TIME_STEP if step is None else coerce_int(step),
            algorithm=DEFAULT_ALGORITHM if algorithm is None else normalize_algorithm(algorithm),
            digits=DEFAULT_DIGITS if digits is None else coerce_int(digits),
        )

    @property
    def hash_function(self) -> Callable:
        return ALGORITHMS[self.algorithm]

    @property
    def otpauth_algorithm(self) -> str:
        return self.algorithm.upper()

    def is_usable(self) -> bool:
        return (
            isinstance(self.step, int) and MIN_TIME_STEP <= self.step <= MAX_TIME_STEP
            and self.algorithm in ALGORITHMS
            and isinstance(self.digits, int) and MIN_DIGITS <= self.digits <= MAX_DIGITS
        )
