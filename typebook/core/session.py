from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional, Union

from typebook.core.config import DEFAULT_MAX_IMPORT_BYTES, DEFAULT_TEXT
from typebook.core.errors import EmptyTextError
from typebook.core.importer import read_text_file
from typebook.core.progress import ProgressStore

logger = logging.getLogger(__name__)

CHARS_PER_WORD = 5


class CharStatus(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    CURRENT = "current"
    UNTOUCHED = "untouched"


class SessionState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMPLETED = "completed"


@dataclass(frozen=True)
class Metrics:
    """Snapshot of the speed and accuracy figures shown to the user."""

    elapsed_seconds: int
    wpm: int
    accuracy: int


@dataclass(frozen=True)
class KeystrokeResult:
    """Outcome of feeding the input field's value to the session.

    ``buffer`` is the value the input field should hold afterwards; it
    differs from what was typed when a strict-mode keystroke is rejected
    or overflow past the end of the text is dropped.
    """

    buffer: str
    accepted: bool
    rejected: bool = False
    completed: bool = False


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _is_blank(text: Optional[str]) -> bool:
    return not text or not text.strip()


def flatten_lines(text: str) -> str:
    """Join the lines of *text* with single spaces.

    The input box is a single line, so line breaks cannot be typed. Blank
    lines and whitespace around each line are dropped.
    """
    return " ".join(line.strip() for line in text.splitlines() if line.strip())


class TypingSession:
    """Compares typed input against a target passage and derives metrics.

    Metrics follow the usual convention:
      * **WPM** – (correct characters / 5) / elapsed minutes.
      * **Accuracy** – correct characters / typed characters × 100,
        reported as 100 before anything is typed.

    The clock starts on the first keystroke after a reset and stops when
    the typed buffer matches the whole passage. In strict mode the buffer
    is always a prefix of the passage: a keystroke that would break that
    is rejected and the previous buffer kept.
    """

    def __init__(
        self,
        text: str = DEFAULT_TEXT,
        strict: bool = True,
        store: Optional[ProgressStore] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if _is_blank(text):
            raise EmptyTextError()
        self._text = flatten_lines(text)
        self._strict = strict
        self._store = store
        self._clock = clock
        self._buffer = ""
        self._index = 0
        self._state = SessionState.IDLE
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None

    @property
    def text(self) -> str:
        """The target passage."""
        return self._text

    @property
    def buffer(self) -> str:
        """What has been typed so far."""
        return self._buffer

    @property
    def index(self) -> int:
        """Number of leading characters typed correctly (the resume point)."""
        return self._index

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def start_time(self) -> Optional[float]:
        """Clock reading at the first keystroke, or None while idle."""
        return self._start_time

    @property
    def typed_characters(self) -> int:
        return len(self._buffer)

    @property
    def correct_characters(self) -> int:
        return sum(1 for a, b in zip(self._buffer, self._text) if a == b)

    def is_active(self) -> bool:
        return self._state is SessionState.ACTIVE

    def is_complete(self) -> bool:
        return self._state is SessionState.COMPLETED

    def load_text(self, text: str) -> None:
        """Replace the passage and start over. Blank text raises ``EmptyTextError``."""
        if _is_blank(text):
            raise EmptyTextError()
        self._text = flatten_lines(text)
        logger.info("Loaded text (%d characters)", len(self._text))
        self.reset()

    def import_file(self, path: Union[str, Path], max_bytes: int = DEFAULT_MAX_IMPORT_BYTES) -> None:
        """Read *path* and load its contents; the current passage survives any error."""
        self.load_text(read_text_file(path, max_bytes=max_bytes))

    def reset(self) -> None:
        """Stop the clock and clear the typed buffer."""
        self._state = SessionState.IDLE
        self._start_time = None
        self._end_time = None
        self._buffer = ""
        self._index = 0
        self.persist_progress()

    def on_keystroke(self, typed: str) -> KeystrokeResult:
        """Process the new value of the input field."""
        if self._state is SessionState.COMPLETED:
            return KeystrokeResult(buffer=self._buffer, accepted=False)

        if self._state is SessionState.IDLE:
            self._state = SessionState.ACTIVE
            self._start_time = self._clock()
            self._end_time = None

        if self._strict:
            if not self._text.startswith(typed):
                logger.debug("Rejected keystroke at position %d", len(typed) - 1)
                return KeystrokeResult(buffer=self._buffer, accepted=False, rejected=True)
            buffer = typed
        else:
            # characters past the end of the passage are dropped
            buffer = typed[: len(self._text)]

        self._buffer = buffer
        index = self._matching_prefix_length()
        if index != self._index:
            self._index = index
            self.persist_progress()

        if self._buffer == self._text:
            self._complete()
            return KeystrokeResult(buffer=self._buffer, accepted=True, completed=True)
        return KeystrokeResult(buffer=self._buffer, accepted=True)

    def statuses(self, start: int = 0, end: Optional[int] = None) -> List[CharStatus]:
        """Per-character status, parallel to ``text[start:end]``."""
        typed_len = len(self._buffer)
        start, end, _ = slice(start, end).indices(len(self._text))
        result: List[CharStatus] = []
        for i in range(start, end):
            ch = self._text[i]
            if i < typed_len:
                result.append(CharStatus.CORRECT if self._buffer[i] == ch else CharStatus.INCORRECT)
            elif i == typed_len:
                result.append(CharStatus.CURRENT)
            else:
                result.append(CharStatus.UNTOUCHED)
        return result

    def elapsed_seconds(self) -> float:
        """Seconds since the first keystroke, frozen once the passage is complete."""
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else self._clock()
        return max(0.0, end - self._start_time)

    def compute_metrics(self, elapsed_seconds: float) -> Metrics:
        correct = self.correct_characters
        typed = self.typed_characters
        wpm = 0
        if elapsed_seconds > 0:
            minutes = elapsed_seconds / 60.0
            wpm = _round_half_up((correct / CHARS_PER_WORD) / minutes)
        accuracy = 100
        if typed > 0:
            accuracy = _round_half_up((correct / typed) * 100)
        return Metrics(
            elapsed_seconds=_round_half_up(elapsed_seconds),
            wpm=wpm,
            accuracy=accuracy,
        )

    def metrics(self) -> Metrics:
        """Metrics for the current moment."""
        return self.compute_metrics(self.elapsed_seconds())

    def persist_progress(self) -> None:
        if self._store is not None:
            self._store.save_progress(self._text, self._index)

    def restore_progress(self, store: Optional[ProgressStore] = None) -> int:
        """Load the saved passage and replay the saved position.

        The replayed characters count as typed and correct but do not start
        the clock. Returns the number of characters replayed.
        """
        store = store or self._store
        if store is None:
            return 0
        saved_text = store.get_text()
        if not _is_blank(saved_text):
            self._text = flatten_lines(saved_text)
        self._state = SessionState.IDLE
        self._start_time = None
        self._end_time = None
        self._buffer = ""
        self._index = 0

        saved_index = store.get_index()
        if 0 < saved_index < len(self._text):
            self._buffer = self._text[:saved_index]
            self._index = saved_index
            logger.info("Restored progress at %d/%d", saved_index, len(self._text))
        return self._index

    def _matching_prefix_length(self) -> int:
        n = 0
        for a, b in zip(self._buffer, self._text):
            if a != b:
                break
            n += 1
        return n

    def _complete(self) -> None:
        self._state = SessionState.COMPLETED
        self._end_time = self._clock()
        self._index = 0
        self.persist_progress()
        logger.info("Session completed: %s", self.metrics())
