# core/chrono.py
from PySide6.QtCore import QObject, QTimer, Signal

from app.errors import FailedPrecondition, InvalidConfiguration


class SessionClock(QObject):
    """
    One-second countdown for a typing session.
    arm() sets the duration, the first keystroke calls start_on_first_event(),
    cancel() tears it down. Only one tick source exists per clock.
    """

    ticked = Signal(int)  # seconds left on this clock
    started = Signal()
    expired = Signal()

    def __init__(self, interval_ms: int = 1000, parent=None):
        super().__init__(parent)
        self._duration = 0
        self._remaining = 0
        self._armed = False

        self._tick = QTimer(self)
        self._tick.setInterval(interval_ms)
        self._tick.timeout.connect(self._on_timeout)

    @property
    def is_armed(self) -> bool:
        return self._armed

    @property
    def is_running(self) -> bool:
        return self._tick.isActive()

    @property
    def remaining(self) -> int:
        return self._remaining

    def arm(self, duration_seconds: int):
        if duration_seconds <= 0:
            raise InvalidConfiguration(f"Clock duration must be positive, got {duration_seconds}")
        if self._armed:
            raise FailedPrecondition("Clock is already armed; cancel() it first")
        self._duration = int(duration_seconds)
        self._remaining = self._duration
        self._armed = True

    def start_on_first_event(self):
        if not self._armed:
            raise FailedPrecondition("Clock must be armed before it can start")
        if self._tick.isActive() or self._remaining <= 0:
            return
        self._tick.start()
        self.started.emit()

    def on_tick(self, callback):
        self.ticked.connect(callback)

    def cancel(self):
        self._tick.stop()
        self._armed = False
        self._remaining = 0

    def _on_timeout(self):
        if not self._armed or not self._tick.isActive() or self._remaining <= 0:
            self._tick.stop()
            return
        self._remaining -= 1
        if self._remaining == 0:
            self._tick.stop()
        self.ticked.emit(self._remaining)
        if self._remaining == 0:
            self.expired.emit()
