"""
client.py — Caller side of the /api/verify boundary.

Only an explicit decision from the server is a verification outcome. A
timeout, a refused connection, a 5xx or an unreadable body raises
NetworkError, which TotpSession.verify does not count as a failed attempt.
"""

import logging
from http import HTTPStatus
from typing import List, NamedTuple, Optional

import requests

from totp_core.configuration import Configuration
from totp_core.errors import NetworkError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 5.0
VERIFY_PATH = "/api/verify"


class VerifyResult(NamedTuple):
    success: bool
    message: str
    errors: Optional[List[str]] = None


class VerifyClient:

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT,
                 session: Optional[requests.Session] = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http = session or requests.Session()

    def verify(self, token: str, secret: str, configuration: Configuration = Configuration()) -> VerifyResult:
        """
        POST the verification request and return the server's decision.

        Raises:
            ValidationError: the server rejected the parameters (400)
            NetworkError: no decision (transport failure, timeout, 5xx, bad body)
        """
        payload = {
            "token": token,
            "secret": secret,
            "step": configuration.step,
            "algorithm": configuration.algorithm,
            "digits": configuration.digits,
        }
        url = self.base_url + VERIFY_PATH
        try:
            response = self._http.post(url, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise NetworkError(f"verification timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise NetworkError(f"verification request failed: {e}") from e

        try:
            body = response.json()
        except ValueError as e:
            raise NetworkError(f"unreadable response (HTTP {response.status_code})") from e
        if not isinstance(body, dict):
            raise NetworkError(f"unexpected response body (HTTP {response.status_code})")

        if response.status_code == HTTPStatus.BAD_REQUEST:
            raise ValidationError(body.get("errors") or [], body.get("message"))
        if response.status_code != HTTPStatus.OK or "success" not in body:
            logger.warning("verification server answered HTTP %s", response.status_code)
            raise NetworkError(f"verification server error (HTTP {response.status_code})")

        return VerifyResult(
            success=bool(body["success"]),
            message=str(body.get("message", "")),
            errors=body.get("errors"),
        )

    def check(self, token: str, secret: str, configuration: Configuration) -> bool:
        """Checker signature for TotpSession.verify."""
        return self.verify(token, secret, configuration).success
