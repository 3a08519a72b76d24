# src/taskflow_console/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.models import Category, Task, User
from ..preferences import PreferenceStore
from ..services.store import Store
from .ports import EntityRepo


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: Store
    tasks: EntityRepo[Task]
    categories: EntityRepo[Category]
    users: EntityRepo[User]
    preferences: PreferenceStore
