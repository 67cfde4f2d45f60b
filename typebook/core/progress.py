from __future__ import annotations

import json
import logging
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional

from typebook.core.config import data_dir

logger = logging.getLogger(__name__)


@dataclass
class SavedProgress:
    text: Optional[str] = None
    index: int = 0
    theme: Optional[str] = None


class ProgressStore:
    """Stores the current passage, typed position and theme across app restarts.
    File: ~/.typebook/progress.json (or $TYPEBOOK_HOME/progress.json)."""

    def __init__(self, file_path: Optional[Path] = None) -> None:
        self._file_path = file_path or data_dir() / "progress.json"
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        self._state = self._load()

    @property
    def file_path(self) -> Path:
        return self._file_path

    def get_text(self) -> Optional[str]:
        return self._state.text

    def get_index(self) -> int:
        return self._state.index

    def get_theme(self) -> Optional[str]:
        return self._state.theme

    def save_progress(self, text: str, index: int) -> None:
        self._state.text = text
        self._state.index = max(0, int(index))
        self._save()

    def set_theme(self, theme: str) -> None:
        self._state.theme = theme
        self._save()

    def save(self) -> None:
        """Persist current state to disk (e.g. on app exit)."""
        self._save()

    def _load(self) -> SavedProgress:
        state = SavedProgress()
        if not self._file_path.exists():
            return state
        try:
            payload = json.loads(self._file_path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Could not load progress from %s: %s", self._file_path, e)
            return state
        if not isinstance(payload, dict):
            logger.warning("Ignoring malformed progress file %s", self._file_path)
            return state

        text = payload.get("text")
        if isinstance(text, str) and text.strip():
            state.text = text
        try:
            state.index = max(0, int(payload.get("index", 0)))
        except (TypeError, ValueError):
            state.index = 0
        theme = payload.get("theme")
        if isinstance(theme, str):
            state.theme = theme
        return state

    def _save(self) -> None:
        self._file_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            self._file_path.write_text(json.dumps(asdict(self._state), indent=2), encoding="utf-8")
        except OSError as e:
            logger.warning("Could not save progress to %s: %s", self._file_path, e)
