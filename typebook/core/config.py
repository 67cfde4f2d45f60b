from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(__file__).resolve().parent.parent / "data" / "settings.yaml"
DEFAULT_TEXT = "The quick brown fox jumps over the lazy dog. This is some default text for practice."
DEFAULT_MAX_IMPORT_BYTES = 5 * 1024 * 1024


def data_dir() -> Path:
    """Directory holding progress.json (``TYPEBOOK_HOME`` or ``~/.typebook``)."""
    override = os.environ.get("TYPEBOOK_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".typebook"


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def _parse_flag(name: str, value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be one of 0/1, true/false, yes/no, on/off (got {value!r})")


@dataclass(frozen=True)
class Settings:
    default_text: str = DEFAULT_TEXT
    strict_mode: bool = True
    max_import_bytes: int = DEFAULT_MAX_IMPORT_BYTES
    tick_interval_ms: int = 1000
    error_flash_ms: int = 200
    default_theme: str = "light"


def load_settings(path: Optional[Path] = None) -> Settings:
    """Load settings from YAML, then apply environment overrides.

    Missing keys keep their defaults. A file that is not a mapping, or a
    value of the wrong type, raises ``ValueError`` naming the file.
    """
    if path is None:
        env_path = os.environ.get("TYPEBOOK_SETTINGS")
        path = Path(env_path).expanduser() if env_path else DEFAULT_SETTINGS_PATH

    raw: dict = {}
    if path.exists():
        loaded = yaml.safe_load(path.read_text(encoding="utf-8"))
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError(f"{path.name}: expected a YAML mapping of settings")
        raw = loaded
    else:
        logger.warning("Settings file not found: %s, using defaults", path)

    defaults = Settings()

    default_text = raw.get("default_text", defaults.default_text)
    if not isinstance(default_text, str) or not default_text.strip():
        raise ValueError(f"{path.name}: 'default_text' must be a non-empty string")

    strict_mode = raw.get("strict_mode", defaults.strict_mode)
    if not isinstance(strict_mode, bool):
        raise ValueError(f"{path.name}: 'strict_mode' must be true or false")

    ints = {}
    for key in ("max_import_bytes", "tick_interval_ms", "error_flash_ms"):
        value = raw.get(key, getattr(defaults, key))
        if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
            raise ValueError(f"{path.name}: '{key}' must be a positive integer")
        ints[key] = value

    default_theme = raw.get("default_theme", defaults.default_theme)
    if default_theme not in ("light", "dark"):
        raise ValueError(f"{path.name}: 'default_theme' must be 'light' or 'dark'")

    strict_env = os.environ.get("TYPEBOOK_STRICT")
    if strict_env is not None:
        strict_mode = _parse_flag("TYPEBOOK_STRICT", strict_env)

    return Settings(
        default_text=default_text,
        strict_mode=strict_mode,
        default_theme=default_theme,
        **ints,
    )
