"""Reading practice text from files picked by the user."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Union

from typebook.core.config import DEFAULT_MAX_IMPORT_BYTES
from typebook.core.errors import EmptyTextError, FileTooLargeError, TextImportError

logger = logging.getLogger(__name__)


def read_text_file(path: Union[str, Path], max_bytes: int = DEFAULT_MAX_IMPORT_BYTES) -> str:
    """Return the contents of *path* as text.

    Raises ``FileTooLargeError`` when the file is over *max_bytes*,
    ``TextImportError`` when it cannot be read or is not UTF-8 text, and
    ``EmptyTextError`` when it holds only whitespace.
    """
    path = Path(path)
    try:
        size = path.stat().st_size
    except OSError as e:
        logger.warning("Could not stat %s: %s", path, e)
        raise TextImportError(f"Could not read {path.name}: {e.strerror or e}") from e

    if size > max_bytes:
        raise FileTooLargeError(str(path), size, max_bytes)

    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.warning("File read error for %s: %s", path, e)
        raise TextImportError(f"Could not read {path.name}: {e.strerror or e}") from e

    try:
        # utf-8-sig drops a BOM left by some editors
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        logger.warning("File %s is not UTF-8 text: %s", path, e)
        raise TextImportError(f"{path.name} is not a UTF-8 text file.") from e

    if not text.strip():
        raise EmptyTextError()
    logger.info("Imported %d characters from %s", len(text), path)
    return text
