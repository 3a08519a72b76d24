# src/taskflow_console/services/entity_service.py

"""
Async CRUD services over the in-memory Store.

They stand in for a remote backend: every call sleeps for a short, per-operation
latency before touching the store, and missing ids fail with NotFoundError.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import datetime
from typing import ClassVar, Generic, TypeVar

from ..core.models import Category, Task, User, utcnow
from ..errors import NotFoundError
from .records import (
    Payload,
    build_category,
    build_task,
    build_user,
    merge_category,
    merge_task,
    merge_user,
)
from .store import Store

logger = logging.getLogger(__name__)

R = TypeVar("R", Task, Category, User)

Sleep = Callable[[float], Awaitable[None]]
Clock = Callable[[], datetime]


class EntityService(Generic[R]):
    entity_name: ClassVar[str] = "Record"
    # Simulated round-trip per operation, in milliseconds (before latency_scale).
    latency_ms: ClassVar[dict[str, int]] = {
        "get_all": 300,
        "get_by_id": 200,
        "create": 400,
        "update": 350,
        "delete": 250,
    }

    def __init__(
        self,
        store: Store,
        *,
        latency_scale: float = 1.0,
        clock: Clock = utcnow,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        self._store = store
        self._latency_scale = max(0.0, float(latency_scale))
        self._clock = clock
        self._sleep = sleep

    # ---- hooks ----

    def _records(self) -> list[R]:
        raise NotImplementedError

    def _build(self, record_id: str, data: Payload | None, now: datetime) -> R:
        raise NotImplementedError

    def _merge(self, record: R, data: Payload | None, now: datetime) -> R:
        raise NotImplementedError

    # ---- helpers ----

    async def _delay(self, op: str) -> None:
        seconds = self.latency_ms.get(op, 0) / 1000.0 * self._latency_scale
        if seconds > 0:
            await self._sleep(seconds)

    def _index_of(self, record_id: str) -> int:
        for i, r in enumerate(self._records()):
            if r.id == record_id:
                return i
        raise NotFoundError(self.entity_name, record_id)

    # ---- public API ----

    async def get_all(self) -> list[R]:
        await self._delay("get_all")
        return list(self._records())

    async def get_by_id(self, record_id: str) -> R:
        await self._delay("get_by_id")
        records = self._records()
        return records[self._index_of(record_id)]

    async def create(self, data: Payload | None = None) -> R:
        await self._delay("create")
        records = self._records()
        record = self._build(self._store.new_id(records), data, self._clock())
        records.append(record)
        logger.debug("%s created id=%s", self.entity_name, record.id)
        return record

    async def update(self, record_id: str, data: Payload | None = None) -> R:
        await self._delay("update")
        records = self._records()
        idx = self._index_of(record_id)
        record = self._merge(records[idx], data, self._clock())
        records[idx] = record
        logger.debug("%s updated id=%s fields=%s", self.entity_name, record_id, sorted(data or {}))
        return record

    async def delete(self, record_id: str) -> R:
        await self._delay("delete")
        records = self._records()
        record = records.pop(self._index_of(record_id))
        logger.debug("%s deleted id=%s", self.entity_name, record_id)
        return record


class TaskService(EntityService[Task]):
    entity_name = "Task"

    def _records(self) -> list[Task]:
        return self._store.tasks

    def _build(self, record_id: str, data: Payload | None, now: datetime) -> Task:
        return build_task(record_id, data, now)

    def _merge(self, record: Task, data: Payload | None, now: datetime) -> Task:
        return merge_task(record, data, now)


class CategoryService(EntityService[Category]):
    entity_name = "Category"
    latency_ms = {
        "get_all": 250,
        "get_by_id": 200,
        "create": 300,
        "update": 300,
        "delete": 200,
    }

    def _records(self) -> list[Category]:
        return self._store.categories

    def _build(self, record_id: str, data: Payload | None, now: datetime) -> Category:
        return build_category(record_id, data, now)

    def _merge(self, record: Category, data: Payload | None, now: datetime) -> Category:
        return merge_category(record, data, now)


class UserService(EntityService[User]):
    entity_name = "User"
    latency_ms = {
        "get_all": 300,
        "get_by_id": 250,
        "create": 400,
        "update": 350,
        "delete": 250,
    }

    def _records(self) -> list[User]:
        return self._store.users

    def _build(self, record_id: str, data: Payload | None, now: datetime) -> User:
        return build_user(record_id, data, now)

    def _merge(self, record: User, data: Payload | None, now: datetime) -> User:
        return merge_user(record, data, now)
