"""Tests for typebook.core.importer – reading practice text from files."""

from __future__ import annotations

from pathlib import Path

import pytest

from typebook.core.errors import (
    EmptyTextError,
    FileTooLargeError,
    TextImportError,
    TypebookError,
)
from typebook.core.importer import read_text_file


class TestReadTextFile:
    def test_reads_utf8(self, tmp_path: Path):
        f = tmp_path / "book.txt"
        f.write_text("Café au lait", encoding="utf-8")
        assert read_text_file(f) == "Café au lait"

    def test_accepts_str_path(self, tmp_path: Path):
        f = tmp_path / "book.txt"
        f.write_text("hello", encoding="utf-8")
        assert read_text_file(str(f)) == "hello"

    def test_strips_bom(self, tmp_path: Path):
        f = tmp_path / "bom.txt"
        f.write_bytes(b"\xef\xbb\xbfhello")
        assert read_text_file(f) == "hello"

    def test_exactly_at_limit(self, tmp_path: Path):
        f = tmp_path / "limit.txt"
        f.write_bytes(b"x" * 10)
        assert read_text_file(f, max_bytes=10) == "x" * 10


class TestReadTextFileErrors:
    def test_too_large(self, tmp_path: Path):
        f = tmp_path / "big.txt"
        f.write_bytes(b"x" * 11)
        with pytest.raises(FileTooLargeError) as info:
            read_text_file(f, max_bytes=10)
        assert info.value.size == 11
        assert info.value.limit == 10

    def test_too_large_message(self):
        err = FileTooLargeError("big.txt", 6 * 1024 * 1024, 5 * 1024 * 1024)
        assert "6.0 MB" in str(err)
        assert "under 5 MB" in str(err)

    def test_empty(self, tmp_path: Path):
        f = tmp_path / "empty.txt"
        f.write_text("", encoding="utf-8")
        with pytest.raises(EmptyTextError):
            read_text_file(f)

    def test_whitespace_only(self, tmp_path: Path):
        f = tmp_path / "blank.txt"
        f.write_text(" \n\t ", encoding="utf-8")
        with pytest.raises(EmptyTextError):
            read_text_file(f)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(TextImportError):
            read_text_file(tmp_path / "missing.txt")

    def test_binary_file(self, tmp_path: Path):
        f = tmp_path / "image.bin"
        f.write_bytes(b"\xff\xfe\x00\x81\x9f")
        with pytest.raises(TextImportError, match="not a UTF-8"):
            read_text_file(f)

    def test_errors_share_base_class(self, tmp_path: Path):
        with pytest.raises(TypebookError):
            read_text_file(tmp_path / "missing.txt")
