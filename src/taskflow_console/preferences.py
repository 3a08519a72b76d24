# src/taskflow_console/preferences.py

"""
Durable key-value preferences (a small JSON file, string values).

Plays the role of the browser's localStorage: read at startup, written on
every change, survives restarts. Only the dark-mode flag is stored today.
"""

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DARK_MODE_KEY = "darkMode"


class PreferenceStore:
    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, str]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.exception("Failed to read preferences from %s; using defaults", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Preferences file %s is not an object; ignoring it", self._path)
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._read_all().get(key, default)

    def set(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Preference saved %s=%s path=%s", key, value, self._path)

    def get_bool(self, key: str, default: bool = False) -> bool:
        raw = self.get(key)
        if raw is None:
            return default
        return raw.strip().lower() == "true"

    def set_bool(self, key: str, value: bool) -> None:
        self.set(key, "true" if value else "false")
