"""Application entry point and setup for the Typebook typing tutor."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from typebook.core.config import load_settings
from typebook.core.progress import ProgressStore
from typebook.core.session import TypingSession
from typebook.ui.colors import normalize_theme
from typebook.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load settings and saved progress, then start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Typebook")
    app.setApplicationDisplayName("Typebook")

    settings = load_settings()
    progress_store = ProgressStore()
    session = TypingSession(
        settings.default_text,
        strict=settings.strict_mode,
        store=progress_store,
    )
    session.restore_progress()
    theme = normalize_theme(progress_store.get_theme() or settings.default_theme)

    window = MainWindow(
        session=session,
        progress_store=progress_store,
        settings=settings,
        theme=theme,
    )
    window.resize(1100, 720)
    window.show()

    sys.exit(app.exec())
