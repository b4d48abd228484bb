"""
validator.py — Request parameter checks run before any code is generated.

Validation is exhaustive: every rule is evaluated and all violations are
returned together (one message per field), never just the first one.
"""

import re
from typing import Any, List

from .configuration import (
    ALGORITHMS,
    DEFAULT_DIGITS,
    MAX_DIGITS,
    MAX_TIME_STEP,
    MIN_DIGITS,
    MIN_TIME_STEP,
    coerce_int,
    normalize_algorithm,
)
from .errors import ValidationError

_DIGITS_ONLY_RE = re.compile(r"^[0-9]+$")


def validate_configuration(step: Any = None, algorithm: Any = None, digits: Any = None) -> List[str]:
    """Configuration rules only; None means "not supplied" and is always fine."""
    errors = []

    if step is not None:
        step_num = coerce_int(step)
        if step_num is None or not MIN_TIME_STEP <= step_num <= MAX_TIME_STEP:
            errors.append(f"step must be an integer between {MIN_TIME_STEP} and {MAX_TIME_STEP}")

    if algorithm is not None and normalize_algorithm(algorithm) is None:
        errors.append(f"algorithm must be one of: {', '.join(ALGORITHMS)}")

    if digits is not None:
        digits_num = coerce_int(digits)
        if digits_num is None or not MIN_DIGITS <= digits_num <= MAX_DIGITS:
            errors.append(f"digits must be an integer between {MIN_DIGITS} and {MAX_DIGITS}")

    return errors


def _token_errors(token: Any, digits: Any) -> List[str]:
    if token is None or token == "":
        return ["token is required"]
    if not isinstance(token, str):
        return ["token must be a string"]

    width = DEFAULT_DIGITS if digits is None else coerce_int(digits)
    if width is None or not MIN_DIGITS <= width <= MAX_DIGITS:
        # width unknown: only the character class can be checked
        if not _DIGITS_ONLY_RE.match(token):
            return ["token must contain only digits"]
        return []
    if not re.fullmatch(r"[0-9]{%d}" % width, token):
        return [f"token must be exactly {width} digits"]
    return []


def validate_secret(secret: Any) -> List[str]:
    """Secret rule only: present, a string, non-empty after trimming."""
    if secret is None:
        return ["secret is required"]
    if not isinstance(secret, str):
        return ["secret must be a string"]
    if not secret.strip():
        return ["secret must not be empty"]
    return []


def validate(token: Any, secret: Any, step: Any = None, algorithm: Any = None, digits: Any = None) -> List[str]:
    """
    Validate one verification request.

    Arguments:
        token: submitted code, must be exactly `digits` decimal digits (default 6)
        secret: Base32 secret text, non-empty after trimming
        step, algorithm, digits: optional configuration fields

    Returns:
        list of violation messages; empty list means valid.
    """
    errors = []
    errors.extend(_token_errors(token, digits))
    errors.extend(validate_secret(secret))
    errors.extend(validate_configuration(step, algorithm, digits))
    return errors


def require_valid(token: Any, secret: Any, step: Any = None, algorithm: Any = None, digits: Any = None) -> None:
    """Raise ValidationError with every violation, if there is any."""
    errors = validate(token, secret, step, algorithm, digits)
    if errors:
        raise ValidationError(errors)
