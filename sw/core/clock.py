"""Elapsed-time accounting for the stopwatch — pure logic, no UI."""

import time


class ElapsedClock:
    """Accumulates elapsed seconds across play/pause cycles.

    ``accumulated`` holds everything folded in by ``check()``; the running
    segment is ``now - segment_start``.  ``now`` only moves when
    ``update()`` is called, so a paused stopwatch simply stops calling it and
    the elapsing value stays frozen.  Timestamps come from ``time_source``
    (monotonic seconds by default, immune to clock changes).
    """

    def __init__(self, time_source=time.monotonic):
        self.time_source = time_source
        self.accumulated = 0.0
        self.segment_start = 0.0
        self.now = 0.0
        self.reset()

    def reset(self):
        self.accumulated = 0.0
        self.segment_start = self.now = self.time_source()

    def check(self):
        """Fold the current segment into ``accumulated`` and start a new one."""
        self.accumulated = self.get_elapsing()
        self.segment_start = self.now = self.time_source()

    def update(self, now=None):
        now = self.time_source() if now is None else now
        # A segment never runs backwards
        self.now = max(now, self.segment_start)

    def get_elapsing(self):
        return self.accumulated + (self.now - self.segment_start)
