"""
session.py — One active secret, its configuration and its risk counter.

A session is the unit the risk counter belongs to: rotating the secret starts
a fresh RiskTracker, and attempts against different sessions never interact.
"""

import logging
import threading
from typing import Any, Callable, Optional, Tuple, Union

from . import provisioning, secret_codec
from .configuration import Configuration
from .risk import RiskTracker
from .verifier import DEFAULT_WINDOW_RADIUS, check

logger = logging.getLogger(__name__)

# checker(code, secret_b32, configuration) -> bool
Checker = Callable[[str, str, Configuration], bool]


class TotpSession:

    def __init__(self, secret: Union[bytes, str, None] = None,
                 configuration: Optional[Configuration] = None) -> None:
        self._lock = threading.Lock()
        self._secret = self._coerce_secret(secret)
        self._configuration = configuration or Configuration()
        self.risk = RiskTracker()

    @staticmethod
    def _coerce_secret(secret: Union[bytes, str, None]) -> bytes:
        if secret is None:
            return secret_codec.generate_secret()
        if isinstance(secret, str):
            return secret_codec.decode(secret)
        return bytes(secret)

    @property
    def secret(self) -> bytes:
        with self._lock:
            return self._secret

    @property
    def secret_text(self) -> str:
        return secret_codec.encode(self.secret)

    @property
    def configuration(self) -> Configuration:
        with self._lock:
            return self._configuration

    def snapshot(self) -> Tuple[bytes, Configuration]:
        """(secret, configuration) read together, for one generate / check."""
        with self._lock:
            return self._secret, self._configuration

    def rotate_secret(self, secret: Union[bytes, str, None] = None) -> bytes:
        """
        Replace the secret wholesale (random when None) and reset the risk counter.

        Raises:
            FormatError: `secret` is text but not valid Base32
        """
        new_secret = self._coerce_secret(secret)
        with self._lock:
            self._secret = new_secret
            self.risk = RiskTracker()
        logger.info("session secret rotated")
        return new_secret

    def update_configuration(self, step: Any = None, algorithm: Any = None, digits: Any = None) -> Configuration:
        """
        Replace the configuration; fields left as None keep their current value.

        Raises:
            ValidationError: any field out of bounds
        """
        with self._lock:
            current = self._configuration
        updated = Configuration.from_params(
            step=current.step if step is None else step,
            algorithm=current.algorithm if algorithm is None else algorithm,
            digits=current.digits if digits is None else digits,
        )
        with self._lock:
            self._configuration = updated
        return updated

    def verify(self, code: str, window_radius: int = DEFAULT_WINDOW_RADIUS,
               checker: Optional[Checker] = None) -> bool:
        """
        Verify `code` and record the outcome in the risk counter.

        With `checker` set (e.g. VerifyClient.check) the decision is made
        remotely. Only a decision (True / False) is recorded; exceptions such
        as NetworkError or ValidationError propagate and leave the counter alone.
        """
        with self._lock:
            secret, configuration, risk = self._secret, self._configuration, self.risk
        if checker is None:
            outcome = check(code, secret, configuration, window_radius)
        else:
            outcome = bool(checker(code, secret_codec.encode(secret), configuration))
        risk.record_outcome(outcome)
        return outcome

    def provisioning_uri(self, account: str = provisioning.DEFAULT_ACCOUNT,
                         issuer: str = provisioning.DEFAULT_ISSUER) -> str:
        secret, configuration = self.snapshot()
        return provisioning.format_otpauth_uri(secret, account, issuer, configuration)
