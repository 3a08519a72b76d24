# src/taskflow_console/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- seeds the in-memory Store from fixtures,
- wires the entity services and the preference store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..data.fixtures import load_fixtures
from ..preferences import PreferenceStore
from ..services.entity_service import CategoryService, TaskService, UserService
from ..services.store import Store

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.prefs_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, store: Store | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings(). If store is None, a fresh Store is seeded
    from fixtures (settings.fixtures_dir, or the bundled ones).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if store is None:
        store = Store.from_fixtures(load_fixtures(getattr(settings, "fixtures_dir", None)))

    scale = float(getattr(settings, "latency_scale", 1.0))

    state = AppState(
        settings=settings,
        store=store,
        tasks=TaskService(store, latency_scale=scale),
        categories=CategoryService(store, latency_scale=scale),
        users=UserService(store, latency_scale=scale),
        preferences=PreferenceStore(settings.prefs_path),
    )
    logger.debug("AppState created latency_scale=%s prefs=%s", scale, settings.prefs_path)
    return state


def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        state.store.close()
    except Exception:
        logger.exception("Store close failed.")
