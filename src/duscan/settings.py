"""JSON-backed user settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from duscan.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "duscan"
_SETTINGS_FILE = "settings.json"

DEFAULT_IGNORE_DIRS = ["/proc", "/dev", "/sys", "/run"]


def default_settings_path() -> Path:
    return xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE


class Settings:
    """Persistent settings backed by a JSON file.

    Uses dot-notation keys for nested access:
        settings.get("display.colors")  # reads data["display"]["colors"]

    Recognised keys are ``display.colors``, ``display.progress``,
    ``display.apparent_size`` and ``scan.ignore_dirs``.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or default_settings_path()
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        parts = key.split(".")
        node: Any = self._data
        for part in parts:
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_bool(self, key: str, default: bool) -> bool:
        """Get a boolean value, falling back to *default* for anything else."""
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if value is not None:
            log.warning("Setting '%s' should be true or false, got %r", key, value)
        return default

    def ignore_dirs(self) -> list[str]:
        """Directories skipped by scans unless overridden on the command line."""
        value = self.get("scan.ignore_dirs")
        if isinstance(value, list) and all(isinstance(p, str) for p in value):
            return value
        if value is not None:
            log.warning("Setting 'scan.ignore_dirs' should be a list of paths, got %r", value)
        return list(DEFAULT_IGNORE_DIRS)

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: top level is not an object", self._path)
            return
        self._data = data

