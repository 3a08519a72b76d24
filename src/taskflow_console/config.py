# src/taskflow_console/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is read from disk at import time except .env.
- The composition root accepts any object with the same attributes (tests use SimpleNamespace).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFLOW"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    prefs_path: Path

    # None means "use the fixtures bundled with the package".
    fixtures_dir: Path | None

    # Multiplier for simulated backend latency (0 disables it).
    latency_scale: float

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "TaskFlow") or "TaskFlow"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskflow")) or Path(".local/taskflow")
        prefs_path = _env_path(_k("PREFS_PATH"), data_dir / "preferences.json") or (
            data_dir / "preferences.json"
        )
        fixtures_dir = _env_path(_k("FIXTURES_DIR"), None)

        latency_scale = max(0.0, _env_float(_k("LATENCY_SCALE"), 1.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            prefs_path=prefs_path,
            fixtures_dir=fixtures_dir,
            latency_scale=latency_scale,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
