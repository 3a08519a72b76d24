# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskflow_console.cli.bootstrap import create_initial_state
from taskflow_console.cli.commands import Session, create_session
from taskflow_console.core.state import AppState

from .fakes import FakeNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the composition root.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic (no latency, tmp paths).
    """
    return SimpleNamespace(
        app_name="TaskFlow",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        prefs_path=tmp_path / "data" / "preferences.json",
        fixtures_dir=None,
        latency_scale=0.0,
    )


@pytest.fixture()
def state(settings: SimpleNamespace) -> AppState:
    """AppState seeded from the bundled fixtures, real services, zero latency."""
    return create_initial_state(settings=settings)


@pytest.fixture()
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture()
def session(state: AppState, notifier: FakeNotifier) -> Session:
    return create_session(state, notifier)
