"""Minimal window for running breathing sessions."""

import logging

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont
from PyQt6.QtWidgets import (
    QComboBox,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from breathe_trainer.gui.presenters import GUINotifier
from breathe_trainer.gui.session_driver import QtSessionDriver
from breathe_trainer.models import Achievement, SessionRecord, TimerSnapshot
from breathe_trainer.orchestration import AppContext
from breathe_trainer.utils import format_duration

logger = logging.getLogger(__name__)


class SessionWindow(QWidget):
    """Pattern picker, live phase display and a start/stop button.

    Features:
    - Phase name and a progress bar for the current phase
    - Cycle count and total session time
    - Achievement and error messages in the status line
    - Starts the next session automatically after one reaches its cycle
      limit, when the setting asks for it
    """

    def __init__(self, context: AppContext, notifier: GUINotifier | None = None, parent=None):
        """Initialize the window.

        Args:
            context: Loaded application context
            notifier: The context's notifier, if it is a GUINotifier
            parent: Optional parent widget
        """
        super().__init__(parent)
        self.context = context
        self.driver = QtSessionDriver(context.sessions, context.config.tick_interval, self)
        self._stopping = False
        self._setup_ui()

        self.driver.tick.connect(self._on_tick)
        self.driver.session_finalized.connect(self._on_session_finalized)
        self.driver.error.connect(self._show_status)
        if notifier is not None:
            notifier.achievement_unlocked.connect(self._on_achievement)

    def _setup_ui(self) -> None:
        """Set up the user interface."""
        self.setWindowTitle("Breathe Trainer")
        layout = QVBoxLayout()

        self.pattern_combo = QComboBox()
        for pattern in self.context.patterns.all_patterns:
            self.pattern_combo.addItem(f"{pattern.name} ({pattern.signature})", pattern.id)
        layout.addWidget(self.pattern_combo)

        self.phase_label = QLabel("Ready")
        self.phase_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        font = QFont()
        font.setPointSize(24)
        self.phase_label.setFont(font)
        layout.addWidget(self.phase_label)

        self.progress_bar = QProgressBar()
        self.progress_bar.setRange(0, 100)
        self.progress_bar.setTextVisible(False)
        layout.addWidget(self.progress_bar)

        stats_layout = QHBoxLayout()
        self.cycle_label = QLabel("Cycle 1")
        self.time_label = QLabel("0:00")
        stats_layout.addWidget(self.cycle_label)
        stats_layout.addStretch()
        stats_layout.addWidget(self.time_label)
        layout.addLayout(stats_layout)

        self.start_button = QPushButton("Start")
        self.start_button.clicked.connect(self._on_start_clicked)
        layout.addWidget(self.start_button)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

        self.setLayout(layout)

    @property
    def selected_pattern_id(self) -> str:
        return self.pattern_combo.currentData()

    def start_session(self) -> None:
        if self.driver.start(self.selected_pattern_id):
            self.start_button.setText("Stop")
            self.pattern_combo.setEnabled(False)
            self._show_status("")

    def stop_session(self) -> None:
        self._stopping = True
        try:
            record = self.driver.stop()
        finally:
            self._stopping = False
        self._set_idle()
        if record is None:
            self._show_status("Session too short to record")

    def closeEvent(self, event) -> None:
        """Finalize a running session before the window goes away."""
        if self.context.sessions.is_running:
            self.stop_session()
        self.driver.detach()
        super().closeEvent(event)

    def _set_idle(self) -> None:
        self.start_button.setText("Start")
        self.pattern_combo.setEnabled(True)
        self.phase_label.setText("Ready")
        self.progress_bar.setValue(0)

    def _on_start_clicked(self) -> None:
        if self.context.sessions.is_running:
            self.stop_session()
        else:
            self.start_session()

    def _on_tick(self, snapshot: TimerSnapshot) -> None:
        self.phase_label.setText(snapshot.phase.label)
        self.progress_bar.setValue(int(snapshot.progress * 100))
        self.cycle_label.setText(f"Cycle {snapshot.cycle_count + 1}")
        self.time_label.setText(format_duration(snapshot.session_elapsed))

    def _on_session_finalized(self, record: SessionRecord) -> None:
        self._set_idle()
        self._show_status(
            f"Session complete: {record.cycles} cycles in {record.formatted_duration}"
        )
        if not self._stopping and self.context.settings.settings.auto_start_next_session:
            # Let the finishing tick unwind before starting again
            QTimer.singleShot(0, self._auto_start)

    def _auto_start(self) -> None:
        if not self.context.sessions.is_running:
            logger.debug("Auto-starting next session")
            self.start_session()

    def _on_achievement(self, achievement: Achievement) -> None:
        self._show_status(f"Achievement unlocked: {achievement.title}")

    def _show_status(self, message: str) -> None:
        self.status_label.setText(message)
