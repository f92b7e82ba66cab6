# pqdiag/utils/qt_timer.py
from PySide6.QtCore import QObject, QTimer

class QtRepeatingTask(QObject):
    """RepeatingTask on top of QTimer; fires on the GUI thread."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._callback = None
        self._timer.timeout.connect(self._fire)

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def start(self, interval_seconds: int, callback) -> None:
        self._timer.stop()
        self._callback = callback
        self._timer.start(int(interval_seconds) * 1000)

    def stop(self) -> None:
        self._timer.stop()

    def _fire(self):
        if self._callback: self._callback()
