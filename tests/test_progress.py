"""Tests for typebook.core.progress – progress persistence."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from typebook.core.progress import ProgressStore, SavedProgress


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def progress_file(tmp_path: Path) -> Path:
    return tmp_path / "progress.json"


@pytest.fixture()
def store(progress_file: Path) -> ProgressStore:
    """ProgressStore backed by a temp file so tests don't touch ~/.typebook."""
    return ProgressStore(progress_file)


# ---------------------------------------------------------------------------
# SavedProgress dataclass
# ---------------------------------------------------------------------------

class TestSavedProgress:
    def test_defaults(self):
        sp = SavedProgress()
        assert sp.text is None
        assert sp.index == 0
        assert sp.theme is None


# ---------------------------------------------------------------------------
# ProgressStore – fresh state
# ---------------------------------------------------------------------------

class TestProgressStoreFresh:
    def test_no_file_returns_defaults(self, store: ProgressStore):
        assert store.get_text() is None
        assert store.get_index() == 0
        assert store.get_theme() is None

    def test_creates_parent_directory(self, tmp_path: Path):
        f = tmp_path / "nested" / "dir" / "progress.json"
        ProgressStore(f)
        assert f.parent.is_dir()

    def test_default_location_uses_typebook_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("TYPEBOOK_HOME", str(tmp_path / "home"))
        s = ProgressStore()
        assert s.file_path == tmp_path / "home" / "progress.json"


# ---------------------------------------------------------------------------
# ProgressStore – saving
# ---------------------------------------------------------------------------

class TestSaveProgress:
    def test_round_trip_in_memory(self, store: ProgressStore):
        store.save_progress("hello", 3)
        assert store.get_text() == "hello"
        assert store.get_index() == 3

    def test_persists_to_disk(self, store: ProgressStore, progress_file: Path):
        store.save_progress("hello", 3)
        data = json.loads(progress_file.read_text(encoding="utf-8"))
        assert data["text"] == "hello"
        assert data["index"] == 3

    def test_negative_index_clamped(self, store: ProgressStore):
        store.save_progress("hello", -4)
        assert store.get_index() == 0

    def test_reload_from_disk(self, store: ProgressStore, progress_file: Path):
        store.save_progress("hello", 2)
        store.set_theme("dark")
        again = ProgressStore(progress_file)
        assert again.get_text() == "hello"
        assert again.get_index() == 2
        assert again.get_theme() == "dark"


# ---------------------------------------------------------------------------
# ProgressStore – theme
# ---------------------------------------------------------------------------

class TestTheme:
    def test_set_theme(self, store: ProgressStore):
        store.set_theme("dark")
        assert store.get_theme() == "dark"

    def test_theme_does_not_touch_progress(self, store: ProgressStore):
        store.save_progress("abc", 1)
        store.set_theme("light")
        assert store.get_index() == 1


# ---------------------------------------------------------------------------
# ProgressStore – loading edge cases
# ---------------------------------------------------------------------------

class TestLoadEdgeCases:
    def test_corrupt_json(self, progress_file: Path):
        progress_file.write_text("NOT VALID JSON", encoding="utf-8")
        s = ProgressStore(progress_file)
        assert s.get_text() is None
        assert s.get_index() == 0

    def test_payload_not_dict(self, progress_file: Path):
        progress_file.write_text(json.dumps(["a", "b"]), encoding="utf-8")
        s = ProgressStore(progress_file)
        assert s.get_text() is None

    def test_blank_text_ignored(self, progress_file: Path):
        progress_file.write_text(json.dumps({"text": "   ", "index": 2}), encoding="utf-8")
        s = ProgressStore(progress_file)
        assert s.get_text() is None

    def test_index_as_string(self, progress_file: Path):
        progress_file.write_text(json.dumps({"text": "hello", "index": "4"}), encoding="utf-8")
        s = ProgressStore(progress_file)
        assert s.get_index() == 4

    def test_index_garbage(self, progress_file: Path):
        progress_file.write_text(json.dumps({"text": "hello", "index": "four"}), encoding="utf-8")
        s = ProgressStore(progress_file)
        assert s.get_index() == 0

    def test_theme_not_string(self, progress_file: Path):
        progress_file.write_text(json.dumps({"theme": 42}), encoding="utf-8")
        s = ProgressStore(progress_file)
        assert s.get_theme() is None

    def test_corrupt_file_logs_warning(self, progress_file: Path, caplog: pytest.LogCaptureFixture):
        progress_file.write_text("{", encoding="utf-8")
        with caplog.at_level("WARNING"):
            ProgressStore(progress_file)
        assert "Could not load progress" in caplog.text
