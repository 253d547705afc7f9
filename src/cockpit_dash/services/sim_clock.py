"""Fixed-period timer that drives the simulation."""

from __future__ import annotations

from PySide6.QtCore import QObject, QTimer, Signal, Slot


class SimulationClock(QObject):
    """
    Emits ticked(dt) on a fixed period.

    dt is always the nominal period in seconds, not the measured wall time,
    so a late timer never makes the simulation jump. After stop() no further
    ticks are emitted, even if a timeout was already queued.
    """

    # Signals
    ticked = Signal(float)  # dt in seconds
    running_changed = Signal(bool)

    DEFAULT_INTERVAL_MS = 100

    def __init__(self, interval_ms: int = DEFAULT_INTERVAL_MS, parent: QObject | None = None):
        super().__init__(parent)
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timeout)
        self._running = False
        self._ticks = 0
        self.set_interval(interval_ms)

    @property
    def interval_ms(self) -> int:
        return self._timer.interval()

    @property
    def dt(self) -> float:
        """Tick length in seconds."""
        return self._timer.interval() / 1000.0

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def tick_count(self) -> int:
        """Ticks emitted since construction."""
        return self._ticks

    def set_interval(self, interval_ms: int) -> None:
        """
        Change the tick period.

        Raises:
            ValueError: If interval_ms is not positive
        """
        if interval_ms <= 0:
            raise ValueError(f"Tick interval must be positive, got {interval_ms}")
        self._timer.setInterval(int(interval_ms))

    @Slot()
    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._timer.start()
        self.running_changed.emit(True)

    @Slot()
    def stop(self) -> None:
        if not self._running:
            return
        self._running = False
        self._timer.stop()
        self.running_changed.emit(False)

    @Slot()
    def _on_timeout(self) -> None:
        if not self._running:
            return
        self._ticks += 1
        self.ticked.emit(self.dt)
