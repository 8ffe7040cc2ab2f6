"""Stopwatch controller: play/pause/reset/lap on top of an ElapsedClock.

The controller owns a ``QTimer`` while running.  Its timeouts arrive through
the event loop of the thread that owns the controller, so every write to the
clock happens on that one thread and the observer is always called from it.
"""

from dataclasses import dataclass
from typing import Protocol

from PySide6.QtCore import QObject, Qt, QTimer

from sw.common.logger import log
from sw.core.clock import ElapsedClock
from sw.util import format_duration

DEFAULT_TICK_HZ = 60


@dataclass(frozen=True)
class Lap:
    elapsed: float


class Observer(Protocol):
    def timer_update(self, formatted_elapsed: str) -> None: ...


class StopwatchController(QObject):
    """Single stopwatch with a lap list.

    States are Paused (no timer) and Running (timer active).  ``play()`` and
    ``pause()`` are no-ops when already in the target state.
    """

    def __init__(self, tick_hz=DEFAULT_TICK_HZ, time_source=None, parent=None):
        super().__init__(parent)
        self.clock = ElapsedClock() if time_source is None else ElapsedClock(time_source)
        self.tick_hz = tick_hz
        self._laps = []
        self._timer = None
        self._observer = None

    # ------------------------------------------------------------------ #
    #  Observer registration                                               #
    # ------------------------------------------------------------------ #

    def set_observer(self, observer: Observer):
        self._observer = observer
        log.debug(f"Registered observer {type(observer).__name__}")
        self._notify(self.get_elapsed())

    def clear_observer(self):
        self._observer = None

    def _notify(self, text):
        # Nobody listening, drop it
        if self._observer is None:
            return
        self._observer.timer_update(text)

    # ------------------------------------------------------------------ #
    #  State                                                               #
    # ------------------------------------------------------------------ #

    @property
    def running(self):
        return self._timer is not None

    @property
    def laps(self):
        return tuple(self._laps)

    def play(self):
        if self.running:
            log.debug("play() while already running, ignoring")
            return
        self.clock.check()
        self._timer = QTimer(self)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._tick)
        self._timer.start(self._interval_ms())
        log.debug(f"Started stopwatch at {self.get_elapsed()} ({self.tick_hz} Hz)")

    def pause(self):
        if not self.running:
            return
        self._stop_timer()
        log.debug(f"Paused stopwatch at {self.get_elapsed()}")

    def reset(self):
        self._stop_timer()
        self.clock.reset()
        self._laps = []
        log.debug("Reset stopwatch")
        self._notify(format_duration(0))

    def record(self):
        lap = Lap(self.clock.get_elapsing())
        self._laps.append(lap)
        log.debug(f"Recorded lap {len(self._laps)} at {format_duration(lap.elapsed)}")
        return lap

    def get_elapsed(self):
        return format_duration(self.clock.get_elapsing())

    # Laps in display order, newest first. Row r shows lap index count - r - 1, labelled with that
    # index + 1 so numbers stay chronological.
    def lap_rows(self):
        n = len(self._laps)
        rows = []
        for r in range(n):
            i = n - r - 1
            rows.append(f"Lap {i + 1} {format_duration(self._laps[i].elapsed)}")
        return rows

    # Changes the refresh rate, a running timer picks up the new interval right away.
    def set_tick_hz(self, tick_hz):
        self.tick_hz = tick_hz
        if self._timer is not None:
            self._timer.setInterval(self._interval_ms())
        log.debug(f"Tick rate set to {tick_hz} Hz")

    def shutdown(self):
        self.pause()
        self.clear_observer()

    # ------------------------------------------------------------------ #
    #  Tick                                                                #
    # ------------------------------------------------------------------ #

    def _tick(self):
        self.clock.update()
        self._notify(self.get_elapsed())

    def _interval_ms(self):
        return max(1, round(1000 / self.tick_hz))

    def _stop_timer(self):
        if self._timer is not None:
            self._timer.stop()
            self._timer.deleteLater()
            self._timer = None
