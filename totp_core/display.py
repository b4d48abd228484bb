"""
display.py — Live code display driven by a once-per-second timer.

Each tick re-reads the current secret / configuration from `source`, so an
edit is reflected on the very next frame and a stale code is never shown.
When the code cannot be computed (secret half-typed, bad configuration) the
frame carries UNAVAILABLE instead.
"""

import logging
import threading
import time
from typing import Callable, NamedTuple, Optional, Tuple, Union

from . import counter_clock, secret_codec
from .configuration import Configuration
from .errors import FormatError, GenerationError
from .generator import generate

logger = logging.getLogger(__name__)

UNAVAILABLE = "------"
DEFAULT_INTERVAL = 1.0

Source = Callable[[], Tuple[Union[bytes, str], Configuration]]


class DisplayFrame(NamedTuple):
    code: str
    remaining: int
    progress: float     # remaining / step, 1.0 right after the code changes
    counter: Optional[int]

    @property
    def available(self) -> bool:
        return self.code != UNAVAILABLE


def frame_at(secret: Union[bytes, str], configuration: Configuration,
             timestamp: Optional[float] = None) -> DisplayFrame:
    """Code, seconds left and progress ratio for one instant."""
    if timestamp is None:
        timestamp = time.time()
    if not configuration.is_usable():
        return DisplayFrame(UNAVAILABLE, 0, 0.0, None)

    step = configuration.step
    remaining = counter_clock.remaining(step, timestamp)
    progress = remaining / step
    counter = counter_clock.now(step, timestamp)
    try:
        if isinstance(secret, str):
            secret = secret_codec.decode(secret)
        code = generate(secret, counter, configuration.algorithm, configuration.digits)
    except (FormatError, GenerationError) as e:
        logger.debug("code unavailable: %s", e)
        return DisplayFrame(UNAVAILABLE, remaining, progress, None)
    return DisplayFrame(code, remaining, progress, counter)


class DisplayClock:
    """
    Single background timer that calls `on_tick(frame)` every `interval` seconds.

    Use as a context manager so the timer is released on every exit path:

        with DisplayClock(session.snapshot, render):
            ...

    After stop() returns, on_tick is never called again.
    """

    def __init__(self, source: Source, on_tick: Callable[[DisplayFrame], None],
                 interval: float = DEFAULT_INTERVAL, clock: Callable[[], float] = time.time) -> None:
        self.interval = interval
        self._source = source
        self._on_tick = on_tick
        self._clock = clock
        self._stop_event = threading.Event()
        self._thread = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def tick(self) -> DisplayFrame:
        secret, configuration = self._source()
        return frame_at(secret, configuration, self._clock())

    def _run(self) -> None:
        while not self._stop_event.is_set():
            try:
                frame = self.tick()
                if self._stop_event.is_set():
                    break
                self._on_tick(frame)
            except Exception:
                logger.exception("display tick failed")
            if self._stop_event.wait(self.interval):
                break

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("DisplayClock already started")
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="totp-display-clock", daemon=True)
        self._thread.start()

    def stop(self) -> None:
        self._stop_event.set()
        thread, self._thread = self._thread, None
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def __enter__(self) -> "DisplayClock":
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()
