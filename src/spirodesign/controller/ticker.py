"""
Tick Source
===========
Drives the Simulation from the Qt event loop.

Why is this file needed?
------------------------
1. Timing: The model never reads a clock. This is the only place where
   wall-clock time is sampled and handed over as elapsed milliseconds.
2. Thread safety: QTimer fires on the GUI thread, so the Simulation is only
   ever touched from one thread.

Classes:
    TickSource: QTimer + QElapsedTimer pair that calls `Simulation.advance`.
"""
import logging

from PySide6.QtCore import QElapsedTimer, QObject, QTimer, Signal

from spirodesign.model.simulation import Simulation

logger = logging.getLogger(__name__)


class TickSource(QObject):
    # Emitted after every advance with the elapsed milliseconds
    ticked = Signal(int)

    def __init__(self, simulation: Simulation, interval_ms: int, parent: QObject | None = None):
        super().__init__(parent)
        self.simulation = simulation

        self._clock = QElapsedTimer()
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(interval_ms)))
        self._timer.timeout.connect(self._on_timeout)

    def start(self) -> None:
        """Start the simulation and begin sampling time."""
        self.simulation.start()
        self._clock.start()
        self._timer.start()
        logger.debug(f"Tick source started ({self._timer.interval()} ms interval).")

    def stop(self) -> None:
        self._timer.stop()
        self.simulation.stop()
        logger.debug("Tick source stopped.")

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _on_timeout(self) -> None:
        # restart() returns the ms since the previous sample
        elapsed = int(self._clock.restart())
        if elapsed <= 0:
            return
        self.simulation.advance(elapsed)
        self.ticked.emit(elapsed)
