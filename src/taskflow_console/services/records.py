# src/taskflow_console/services/records.py

"""
Record builders: payload dict -> frozen record.

Payloads are never rejected. Known keys are coerced, unknown keys are dropped,
server-assigned keys (id, created_at, updated_at) are ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import replace
from datetime import datetime, timedelta
from typing import Any

from ..core.models import (
    Category,
    Task,
    TaskPriority,
    TaskStatus,
    User,
    UserPreferences,
    as_tags,
    parse_date,
    parse_datetime,
    utcnow,
)

logger = logging.getLogger(__name__)

Payload = Mapping[str, Any]
Coercers = dict[str, Callable[[Any], Any]]

SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})


def _str(v: Any) -> str:
    return "" if v is None else str(v)


def _opt_str(v: Any) -> str | None:
    return None if v is None else str(v)


def _opt_ref(v: Any) -> str | None:
    # Forms send "" for "no category".
    if v is None or v == "":
        return None
    return str(v)


TASK_FIELDS: Coercers = {
    "title": _str,
    "description": _opt_str,
    "priority": TaskPriority.coerce,
    "status": TaskStatus.coerce,
    "due_date": parse_date,
    "category_id": _opt_ref,
    "tags": as_tags,
    "subtasks": lambda v: tuple(v or ()),
}

CATEGORY_FIELDS: Coercers = {
    "name": _str,
    "color": _opt_str,
}

USER_FIELDS: Coercers = {
    "name": _str,
    "email": _opt_str,
    "preferences": UserPreferences.from_raw,
}


def clean_payload(data: Payload | None, coercers: Coercers, entity: str) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in (data or {}).items():
        coerce = coercers.get(key)
        if coerce is None:
            if key not in SERVER_FIELDS:
                logger.debug("Dropping unknown %s field %r", entity, key)
            continue
        out[key] = coerce(value)
    return out


def next_stamp(previous: datetime, now: datetime) -> datetime:
    """`now`, bumped just past `previous` if the clock has not moved on."""
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


# ---- tasks ----

def build_task(record_id: str, data: Payload | None, now: datetime) -> Task:
    fields = clean_payload(data, TASK_FIELDS, "task")
    fields.setdefault("title", "")
    fields["subtasks"] = ()
    return Task(id=record_id, created_at=now, updated_at=now, **fields)


def merge_task(record: Task, data: Payload | None, now: datetime) -> Task:
    changes = clean_payload(data, TASK_FIELDS, "task")
    return replace(record, **changes, updated_at=next_stamp(record.updated_at, now))


def seed_task(row: Payload) -> Task:
    created_at = parse_datetime(row.get("created_at")) or utcnow()
    updated_at = parse_datetime(row.get("updated_at")) or created_at
    fields = clean_payload(row, TASK_FIELDS, "task")
    fields.setdefault("title", "")
    return Task(id=str(row["id"]), created_at=created_at, updated_at=updated_at, **fields)


# ---- categories ----

def build_category(record_id: str, data: Payload | None, now: datetime) -> Category:
    fields = clean_payload(data, CATEGORY_FIELDS, "category")
    fields.setdefault("name", "")
    return Category(id=record_id, created_at=now, **fields)


def merge_category(record: Category, data: Payload | None, now: datetime) -> Category:
    return replace(record, **clean_payload(data, CATEGORY_FIELDS, "category"))


def seed_category(row: Payload) -> Category:
    created_at = parse_datetime(row.get("created_at")) or utcnow()
    return build_category(str(row["id"]), row, created_at)


# ---- users ----

def build_user(record_id: str, data: Payload | None, now: datetime) -> User:
    fields = clean_payload(data, USER_FIELDS, "user")
    fields.setdefault("name", "")
    return User(id=record_id, created_at=now, **fields)


def merge_user(record: User, data: Payload | None, now: datetime) -> User:
    return replace(record, **clean_payload(data, USER_FIELDS, "user"))


def seed_user(row: Payload) -> User:
    created_at = parse_datetime(row.get("created_at")) or utcnow()
    return build_user(str(row["id"]), row, created_at)
