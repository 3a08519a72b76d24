# src/taskflow_console/services/store.py

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Iterable
from typing import Any

from ..core.models import Category, Task, User
from ..data.fixtures import Fixtures
from .records import seed_category, seed_task, seed_user

logger = logging.getLogger(__name__)


class Store:
    """
    In-memory collections behind the entity services.

    One instance per running app, created by the composition root and handed to
    every service. Collections are plain lists in insertion order. Records are
    frozen, so a record can be handed out without copying; services replace
    list slots instead of mutating records.

    No locking: every service operation reads and writes a collection without
    awaiting in between, which is atomic on a single event loop.
    """

    def __init__(
        self,
        *,
        tasks: Iterable[Task] = (),
        categories: Iterable[Category] = (),
        users: Iterable[User] = (),
        id_factory: Callable[[], str] | None = None,
    ) -> None:
        self.tasks: list[Task] = list(tasks)
        self.categories: list[Category] = list(categories)
        self.users: list[User] = list(users)
        self._id_factory = id_factory or (lambda: uuid.uuid4().hex)
        self._closed = False

    @classmethod
    def from_fixtures(cls, fixtures: Fixtures, **kwargs: Any) -> Store:
        store = cls(
            tasks=[seed_task(r) for r in fixtures.tasks if "id" in r],
            categories=[seed_category(r) for r in fixtures.categories if "id" in r],
            users=[seed_user(r) for r in fixtures.users if "id" in r],
            **kwargs,
        )
        logger.info(
            "Store ready tasks=%d categories=%d users=%d",
            len(store.tasks),
            len(store.categories),
            len(store.users),
        )
        return store

    def new_id(self, collection: list[Any]) -> str:
        """Fresh id, unique within `collection`."""
        taken = {r.id for r in collection}
        while True:
            candidate = self._id_factory()
            if candidate not in taken:
                return candidate
            logger.warning("Id collision on %s, generating another", candidate)

    def close(self) -> None:
        if self._closed:
            return
        self.tasks.clear()
        self.categories.clear()
        self.users.clear()
        self._closed = True
        logger.debug("Store closed")
