"""
risk.py — Consecutive-failure bookkeeping for one secret / session.

The signal is advisory only: it lives in the session's memory, so starting a
new session resets it. Nothing here blocks verification.
"""

import logging
import threading

logger = logging.getLogger(__name__)

RISK_THRESHOLD = 5


class RiskTracker:
    """Counts consecutive failed verifications; thread-safe."""

    def __init__(self, threshold: int = RISK_THRESHOLD) -> None:
        self.threshold = threshold
        self._consecutive_failures = 0
        self._lock = threading.Lock()

    @property
    def consecutive_failures(self) -> int:
        with self._lock:
            return self._consecutive_failures

    def record_outcome(self, success: bool) -> int:
        """Reset on success, +1 on failure. Returns the new count."""
        with self._lock:
            if success:
                self._consecutive_failures = 0
            else:
                self._consecutive_failures += 1
                if self._consecutive_failures == self.threshold:
                    logger.warning(
                        "%d consecutive failed verifications, possible brute-force attempt",
                        self._consecutive_failures,
                    )
            return self._consecutive_failures

    def is_at_risk(self) -> bool:
        with self._lock:
            return self._consecutive_failures >= self.threshold

    def reset_manually(self) -> None:
        """Operator acknowledgment; does not count as a successful verification."""
        with self._lock:
            self._consecutive_failures = 0
        logger.info("risk counter reset manually")
