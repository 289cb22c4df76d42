"""GUI application entry point."""

import logging
import sys

from PyQt6.QtWidgets import QApplication

from breathe_trainer.gui.presenters import GUINotifier
from breathe_trainer.gui.session_window import SessionWindow
from breathe_trainer.orchestration import AppContext


def main():
    """Launch the Breathe Trainer window."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    app = QApplication(sys.argv)
    app.setApplicationName("Breathe Trainer")
    app.setOrganizationName("BreatheTrainer")

    notifier = GUINotifier()
    context = AppContext.create(notifier=notifier)

    window = SessionWindow(context, notifier)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
