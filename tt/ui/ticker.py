"""QTimer-backed tick source for TaskTimerController."""

import time
from PySide6.QtCore import Qt, QTimer


class QtTickSource:
    """Calls ``callback(delta)`` every ``interval`` seconds on the GUI thread.

    With ``monotonic=True`` the delta is the real time since the previous fire,
    measured with ``time.monotonic()``, so a late or coalesced timeout does not
    lose time. With ``monotonic=False`` every fire reports the nominal interval.
    """

    def __init__(self, interval, callback, parent=None, monotonic=True):
        self.interval = interval
        self.monotonic = monotonic
        self._callback = callback
        self._last = None
        self._timer = QTimer(parent)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.setInterval(max(1, round(interval * 1000)))
        self._timer.timeout.connect(self._fire)

    def start(self):
        self._last = time.monotonic()
        self._timer.start()

    # QTimer.stop() on the owning thread means no further timeout is delivered. Dropping the callback as well covers
    # a timeout that was already queued when stop() ran.
    def stop(self):
        self._timer.stop()
        self._timer.deleteLater()
        self._callback = None

    def _fire(self):
        if self._callback is None:
            return
        if self.monotonic:
            now = time.monotonic()
            delta = now - self._last
            self._last = now
        else:
            delta = self.interval
        self._callback(delta)

