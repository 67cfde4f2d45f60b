from __future__ import annotations

import logging

from PySide6.QtCore import Qt, QTimer, QPropertyAnimation
from PySide6.QtGui import QCloseEvent, QFont
from PySide6.QtWidgets import (
    QFileDialog,
    QFrame,
    QGraphicsOpacityEffect,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from typebook.core.config import Settings
from typebook.core.errors import EmptyTextError, FileTooLargeError, TextImportError
from typebook.core.progress import ProgressStore
from typebook.core.session import TypingSession
from typebook.ui.colors import colors_for, next_theme, normalize_theme, toggle_button_label
from typebook.ui.models import StatsText
from typebook.ui.typing_widgets import PassageLabel, visible_range

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Single-screen typing practice window.

    Feeds every edit of the input box to the session, renders the passage
    with per-character status and refreshes the time, WPM and accuracy
    read-outs once per tick while a session is running.
    """

    def __init__(
        self,
        session: TypingSession,
        progress_store: ProgressStore,
        settings: Settings,
        theme: str = "light",
    ) -> None:
        super().__init__()
        self._session = session
        self._progress_store = progress_store
        self._settings = settings
        self._theme = normalize_theme(theme)

        self._build_ui()
        self._apply_theme()
        self._set_input_text(self._session.buffer)
        self._render_passage()
        self._update_stats()

    def _build_ui(self) -> None:
        """Construct the widget tree and the stats timer."""
        self.setWindowTitle("Typebook - Typing Practice")
        self.setMinimumSize(900, 600)

        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        header = QHBoxLayout()
        title = QLabel("Typebook")
        title.setObjectName("title")
        header.addWidget(title)
        header.addStretch(1)
        self.import_button = QPushButton("Import Text…")
        self.import_button.clicked.connect(self._import_file)
        header.addWidget(self.import_button)
        self.reset_button = QPushButton("Reset")
        self.reset_button.clicked.connect(self._reset)
        header.addWidget(self.reset_button)
        self.theme_button = QPushButton()
        self.theme_button.clicked.connect(self._toggle_theme)
        header.addWidget(self.theme_button)
        layout.addLayout(header)

        stats = QHBoxLayout()
        stats.setSpacing(32)

        def _stat(caption: str, initial: str) -> QLabel:
            column = QVBoxLayout()
            cap = QLabel(caption)
            cap.setObjectName("statCaption")
            value = QLabel(initial)
            value.setObjectName("statValue")
            column.addWidget(cap)
            column.addWidget(value)
            stats.addLayout(column)
            return value

        self._time_label = _stat("TIME", "0s")
        self._wpm_label = _stat("WPM", "0")
        self._accuracy_label = _stat("ACCURACY", "100%")
        stats.addStretch(1)
        layout.addLayout(stats)

        self._passage_card = QFrame()
        self._passage_card.setObjectName("passageCard")
        card_layout = QVBoxLayout(self._passage_card)
        card_layout.setContentsMargins(20, 20, 20, 20)
        self.passage_label = PassageLabel()
        passage_font = QFont("monospace")
        passage_font.setStyleHint(QFont.StyleHint.Monospace)
        passage_font.setPointSize(16)
        self.passage_label.setFont(passage_font)
        card_layout.addWidget(self.passage_label)
        layout.addWidget(self._passage_card, 1)

        self.input_box = QLineEdit()
        self.input_box.setPlaceholderText("Start typing here…")
        self.input_box.textEdited.connect(self._on_text_edited)
        layout.addWidget(self.input_box)

        self._error_overlay = QWidget(self._passage_card)
        self._error_overlay.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self._error_overlay.setStyleSheet("background-color: #EF6060; border-radius: 12px;")
        self._error_overlay_effect = QGraphicsOpacityEffect(self._error_overlay)
        self._error_overlay_effect.setOpacity(0.0)
        self._error_overlay.setGraphicsEffect(self._error_overlay_effect)
        self._error_overlay.hide()
        self._error_overlay_anim = QPropertyAnimation(self._error_overlay_effect, b"opacity", self)
        self._error_overlay_anim.setKeyValueAt(0.0, 0.0)
        self._error_overlay_anim.setKeyValueAt(0.2, 0.28)
        self._error_overlay_anim.setKeyValueAt(1.0, 0.0)
        self._error_overlay_anim.finished.connect(self._error_overlay.hide)

        self._stats_timer = QTimer(self)
        self._stats_timer.setInterval(self._settings.tick_interval_ms)
        self._stats_timer.timeout.connect(self._update_stats)

        self.input_box.setFocus()

    def _apply_theme(self) -> None:
        c = colors_for(self._theme)
        self.passage_label.set_colors(c)
        self.theme_button.setText(toggle_button_label(self._theme))
        self.setStyleSheet(f"""
            QMainWindow, QWidget {{
                background: {c.bg_main};
                color: {c.text_primary};
            }}
            QLabel#title {{
                color: {c.highlight};
                font-size: 26px;
                font-weight: 900;
            }}
            QLabel#statCaption {{
                color: {c.text_muted};
                font-size: 11px;
                font-weight: 700;
                letter-spacing: 2px;
            }}
            QLabel#statValue {{
                color: {c.highlight};
                font-size: 28px;
                font-weight: 900;
            }}
            QFrame#passageCard {{
                background: {c.bg_card};
                border: 1px solid {c.border};
                border-radius: 12px;
            }}
            QFrame#passageCard QLabel {{
                background: transparent;
            }}
            QLineEdit {{
                background: {c.bg_input};
                color: {c.text_primary};
                border: 1px solid {c.border};
                border-radius: 10px;
                padding: 12px 16px;
                font-size: 18px;
            }}
            QLineEdit:focus {{
                border: 2px solid {c.highlight};
            }}
            QPushButton {{
                background: {c.button_bg};
                color: {c.button_text};
                border: none;
                border-radius: 10px;
                padding: 8px 16px;
                font-weight: 700;
            }}
        """)
        self._render_passage()

    def _toggle_theme(self) -> None:
        self._theme = next_theme(self._theme)
        self._progress_store.set_theme(self._theme)
        logger.info("Switched to %s theme", self._theme)
        self._apply_theme()

    def _render_passage(self) -> None:
        text = self._session.text
        start, end = visible_range(len(text), len(self._session.buffer))
        self.passage_label.set_passage(text[start:end], self._session.statuses(start, end))

    def _update_stats(self) -> None:
        stats = StatsText.from_metrics(self._session.metrics())
        self._time_label.setText(stats.time)
        self._wpm_label.setText(stats.wpm)
        self._accuracy_label.setText(stats.accuracy)

    def _set_input_text(self, text: str) -> None:
        """Set the input box text without emitting ``textEdited``."""
        self.input_box.setText(text)
        self.input_box.setCursorPosition(len(text))

    def _on_text_edited(self, value: str) -> None:
        was_active = self._session.is_active()
        result = self._session.on_keystroke(value)
        if not was_active and self._session.is_active():
            self._stats_timer.start()

        if result.buffer != value:
            self._set_input_text(result.buffer)
        if result.rejected:
            self._flash_invalid_input_overlay(self._settings.error_flash_ms)
            return

        self._render_passage()
        if result.completed:
            self._session_completed()

    def _session_completed(self) -> None:
        self._stats_timer.stop()
        self._update_stats()
        self.input_box.setReadOnly(True)
        QMessageBox.information(self, "Finished", "Test finished! Great job!")

    def _restart_input(self) -> None:
        self._stats_timer.stop()
        self.input_box.setReadOnly(False)
        self._set_input_text("")
        self._render_passage()
        self._update_stats()
        self.input_box.setFocus()

    def _reset(self) -> None:
        self._session.reset()
        logger.info("Session reset")
        self._restart_input()

    def _import_file(self) -> None:
        path, _ = QFileDialog.getOpenFileName(
            self,
            "Import Text",
            "",
            "Text files (*.txt *.md);;All files (*)",
        )
        if not path:
            return
        try:
            self._session.import_file(path, max_bytes=self._settings.max_import_bytes)
        except FileTooLargeError as e:
            QMessageBox.warning(self, "File too large", str(e))
            return
        except EmptyTextError as e:
            QMessageBox.warning(self, "Empty text", str(e))
            return
        except TextImportError as e:
            logger.warning("Import failed: %s", e)
            QMessageBox.warning(self, "Import failed", str(e))
            return
        self._restart_input()

    def _flash_invalid_input_overlay(self, duration_ms: int = 200) -> None:
        """Flash a short red overlay over the passage on a rejected keystroke."""
        self._error_overlay_anim.stop()
        self._error_overlay.setGeometry(self._passage_card.rect())
        self._error_overlay.show()
        self._error_overlay.raise_()
        self._error_overlay_effect.setOpacity(0.0)
        self._error_overlay_anim.setDuration(max(50, int(duration_ms)))
        self._error_overlay_anim.start()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist progress when closing the app."""
        self._progress_store.save()
        super().closeEvent(event)
