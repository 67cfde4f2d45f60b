"""Typing practice UI: the passage with per-character highlighting."""

from __future__ import annotations

import html
from itertools import groupby
from typing import Optional, Sequence

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QLabel, QWidget

from typebook.core.session import CharStatus
from typebook.ui.colors import LIGHT_COLORS, ThemeColors, blend_hex


def _status_style(status: CharStatus, colors: ThemeColors) -> str:
    if status is CharStatus.CORRECT:
        return f"color:{colors.success};"
    if status is CharStatus.INCORRECT:
        bg = blend_hex(colors.bg_card, colors.error, 0.25)
        return f"color:{colors.error}; background:{bg}; text-decoration:underline;"
    if status is CharStatus.CURRENT:
        bg = blend_hex(colors.bg_card, colors.highlight, 0.3)
        return f"color:{colors.highlight}; background:{bg}; font-weight:700;"
    return f"color:{colors.text_muted};"


def render_passage_html(text: str, statuses: Sequence[CharStatus], colors: ThemeColors) -> str:
    """Render *text* as rich text, one span per run of equal status."""
    if len(statuses) != len(text):
        raise ValueError("statuses must be parallel to text")
    parts = []
    pairs = zip(text, statuses)
    for status, run in groupby(pairs, key=lambda pair: pair[1]):
        chunk = html.escape("".join(ch for ch, _ in run))
        parts.append(f'<span style="{_status_style(status, colors)}">{chunk}</span>')
    return f'<div style="white-space:pre-wrap;">{"".join(parts)}</div>'


def visible_range(length: int, position: int, before: int = 300, after: int = 1200) -> tuple[int, int]:
    """Slice bounds around *position* so long books render quickly."""
    position = max(0, min(position, length))
    start = max(0, position - before)
    end = min(length, position + after)
    return start, end


class PassageLabel(QLabel):
    """Word-wrapped label showing the target passage with typing progress."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setTextFormat(Qt.TextFormat.RichText)
        self.setWordWrap(True)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)
        self.setTextInteractionFlags(Qt.TextInteractionFlag.NoTextInteraction)
        self._colors = LIGHT_COLORS

    def set_colors(self, colors: ThemeColors) -> None:
        self._colors = colors

    def set_passage(self, text: str, statuses: Sequence[CharStatus]) -> None:
        self.setText(render_passage_html(text, statuses, self._colors))
