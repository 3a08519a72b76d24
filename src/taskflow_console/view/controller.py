# src/taskflow_console/view/controller.py

from __future__ import annotations

import asyncio
import logging

from ..core.models import Category, Task, TaskStats
from ..core.ports import EntityRepo, PreferenceRepo
from ..errors import AggregateLoadError
from ..preferences import DARK_MODE_KEY
from .listing import TaskFilter, compute_stats, filter_tasks

logger = logging.getLogger(__name__)

DARK_CLASS = "dark"


class ViewStateController:
    """
    Page-level view state.

    Owns the client-side snapshot of tasks/categories, the active filter, the
    error banner, and the dark-mode flag. It never patches the snapshot locally:
    after any mutation the caller asks for a full `load_data()`.
    """

    def __init__(
        self,
        tasks: EntityRepo[Task],
        categories: EntityRepo[Category],
        preferences: PreferenceRepo,
    ) -> None:
        self._task_repo = tasks
        self._category_repo = categories
        self._preferences = preferences

        self.tasks: list[Task] = []
        self.categories: list[Category] = []
        self.loading = False
        self.error: str | None = None
        self.active_filter = TaskFilter.ALL

        # Presentation attributes applied to the page root (like <html class="dark">).
        self.root_classes: set[str] = set()

        self.dark_mode = self._preferences.get_bool(DARK_MODE_KEY, False)
        if self.dark_mode:
            self.root_classes.add(DARK_CLASS)

    async def load_data(self) -> bool:
        """
        Refresh tasks and categories together.

        Both fetches run concurrently and are applied only if both succeed. On
        failure the previous snapshot stays in place and `error` is set.
        """
        self.loading = True
        try:
            tasks, categories = await asyncio.gather(
                self._task_repo.get_all(),
                self._category_repo.get_all(),
            )
        except Exception as e:
            err = AggregateLoadError(e)
            self.error = err.message
            logger.warning("load_data failed: %s", err.message)
            return False
        finally:
            self.loading = False

        self.tasks = list(tasks or [])
        self.categories = list(categories or [])
        logger.debug("load_data ok tasks=%d categories=%d", len(self.tasks), len(self.categories))
        return True

    def dismiss_error(self) -> None:
        self.error = None

    @property
    def stats(self) -> TaskStats:
        return compute_stats(self.tasks)

    def set_filter(self, value: TaskFilter | str) -> TaskFilter:
        self.active_filter = TaskFilter(value)
        return self.active_filter

    def filtered_tasks(self) -> list[Task]:
        return filter_tasks(self.tasks, self.active_filter)

    def category_name(self, category_id: str | None) -> str | None:
        if not category_id:
            return None
        for c in self.categories:
            if c.id == category_id:
                return c.name
        return None

    def toggle_dark_mode(self) -> bool:
        # Persist first: a failed write leaves the flag and classes untouched.
        dark = not self.dark_mode
        self._preferences.set_bool(DARK_MODE_KEY, dark)
        self.dark_mode = dark
        if self.dark_mode:
            self.root_classes.add(DARK_CLASS)
        else:
            self.root_classes.discard(DARK_CLASS)
        logger.info("Dark mode %s", "on" if self.dark_mode else "off")
        return self.dark_mode
