"""Qt timer that drives a breathing session from the GUI event loop."""

import logging

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from breathe_trainer.exceptions import BreatheTrainerException
from breathe_trainer.models import BreathPhase, SessionRecord, TimerSnapshot
from breathe_trainer.orchestration import BreathingSessionController

logger = logging.getLogger(__name__)


class QtSessionDriver(QObject):
    """Tick a BreathingSessionController from a QTimer on the GUI thread.

    Controller events are re-emitted as Qt signals so widgets can connect to
    them directly. The timer stops itself once the session is no longer
    running, whether it was stopped or reached its cycle limit.
    """

    tick = pyqtSignal(object)  # TimerSnapshot
    phase_changed = pyqtSignal(object)  # BreathPhase
    session_finalized = pyqtSignal(object)  # SessionRecord
    error = pyqtSignal(str)

    def __init__(
        self,
        controller: BreathingSessionController,
        interval_seconds: float = 0.1,
        parent=None,
    ):
        """Initialize the driver.

        Args:
            controller: Session controller to drive
            interval_seconds: Time between ticks
            parent: Optional parent QObject
        """
        super().__init__(parent)
        self._controller = controller
        self._timer = QTimer(self)
        self._timer.setInterval(max(1, int(interval_seconds * 1000)))
        self._timer.timeout.connect(self._on_timeout)

        self._unsubscribers = [
            controller.on_tick.subscribe(self._forward_tick),
            controller.on_phase_change.subscribe(self._forward_phase),
            controller.on_session_finalized.subscribe(self._forward_record),
        ]

    @property
    def is_active(self) -> bool:
        return self._timer.isActive()

    def start(self, pattern_id: str, speed_multiplier: float | None = None) -> bool:
        """Start a session and begin ticking.

        Returns:
            True if the session started; errors are reported via ``error``
        """
        try:
            self._controller.start(pattern_id, speed_multiplier)
        except BreatheTrainerException as e:
            logger.warning(f"Could not start session: {e}")
            self.error.emit(str(e))
            return False
        self._timer.start()
        return True

    def stop(self) -> SessionRecord | None:
        """Stop ticking and finalize the running session."""
        self._timer.stop()
        return self._controller.stop()

    def detach(self) -> None:
        """Stop the timer and drop the controller subscriptions."""
        self._timer.stop()
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []

    def _on_timeout(self) -> None:
        if not self._controller.is_running:
            self._timer.stop()
            return
        self._controller.tick()
        if not self._controller.is_running:
            self._timer.stop()

    def _forward_tick(self, snapshot: TimerSnapshot) -> None:
        self.tick.emit(snapshot)

    def _forward_phase(self, phase: BreathPhase) -> None:
        self.phase_changed.emit(phase)

    def _forward_record(self, record: SessionRecord) -> None:
        self.session_finalized.emit(record)
