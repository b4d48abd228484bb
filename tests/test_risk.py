import threading

from totp_core import secret_codec
from totp_core.configuration import Configuration
from totp_core.risk import RISK_THRESHOLD, RiskTracker
from totp_core.verifier import check

KEY = secret_codec.decode("JBSWY3DPEHPK3PXP")


def test_threshold_is_five():
    assert RISK_THRESHOLD == 5


def test_at_risk_after_fifth_consecutive_failure():
    tracker = RiskTracker()
    for _ in range(4):
        tracker.record_outcome(check("000000", KEY, Configuration(), timestamp=59))
    assert tracker.consecutive_failures == 4
    assert tracker.is_at_risk() is False

    tracker.record_outcome(check("000000", KEY, Configuration(), timestamp=59))
    assert tracker.consecutive_failures == 5
    assert tracker.is_at_risk() is True


def test_success_resets_count():
    tracker = RiskTracker()
    for _ in range(6):
        tracker.record_outcome(False)
    assert tracker.is_at_risk() is True

    tracker.record_outcome(check("996554", KEY, Configuration(), timestamp=59))
    assert tracker.consecutive_failures == 0
    assert tracker.is_at_risk() is False


def test_record_outcome_returns_new_count():
    tracker = RiskTracker()
    assert tracker.record_outcome(False) == 1
    assert tracker.record_outcome(False) == 2
    assert tracker.record_outcome(True) == 0


def test_manual_reset():
    tracker = RiskTracker()
    for _ in range(7):
        tracker.record_outcome(False)
    tracker.reset_manually()
    assert tracker.consecutive_failures == 0
    assert tracker.is_at_risk() is False


def test_custom_threshold():
    tracker = RiskTracker(threshold=2)
    tracker.record_outcome(False)
    assert not tracker.is_at_risk()
    tracker.record_outcome(False)
    assert tracker.is_at_risk()


def test_concurrent_failures_are_all_counted():
    tracker = RiskTracker()
    barrier = threading.Barrier(8)

    def worker():
        barrier.wait()
        for _ in range(250):
            tracker.record_outcome(False)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert tracker.consecutive_failures == 2000


def test_trackers_are_independent():
    first, second = RiskTracker(), RiskTracker()
    for _ in range(5):
        first.record_outcome(False)
    assert first.is_at_risk()
    assert second.consecutive_failures == 0
