# src/taskflow_console/core/models.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

logger = logging.getLogger(__name__)


class TaskStatus(StrEnum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def coerce(cls, raw: Any) -> TaskStatus | str:
        """
        Map raw input to a status.

        Empty input means "not set" and becomes PENDING. Anything else that is not a known
        value is kept verbatim so that bad seed data stays visible instead of being rewritten.
        """
        if not raw:
            return cls.PENDING
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            logger.warning("Unrecognized task status %r kept as-is", raw)
            return str(raw)


class TaskPriority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"

    @classmethod
    def coerce(cls, raw: Any) -> TaskPriority | str:
        if not raw:
            return cls.MEDIUM
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            logger.warning("Unrecognized task priority %r kept as-is", raw)
            return str(raw)


def utcnow() -> datetime:
    return datetime.now(UTC)


def parse_date(raw: Any) -> date | None:
    """Accept date/datetime/ISO string; anything unparseable becomes None."""
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    text = str(raw).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        logger.debug("Unparseable date %r dropped", raw)
        return None


def parse_datetime(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw if raw.tzinfo else raw.replace(tzinfo=UTC)
    text = str(raw).strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug("Unparseable timestamp %r dropped", raw)
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def as_tags(raw: Any) -> tuple[str, ...]:
    if not raw:
        return ()
    if isinstance(raw, str):
        return (raw,)
    return tuple(str(t) for t in raw)


@dataclass(frozen=True, slots=True)
class Task:
    id: str
    title: str
    created_at: datetime
    updated_at: datetime

    description: str | None = None
    priority: TaskPriority | str = TaskPriority.MEDIUM
    status: TaskStatus | str = TaskStatus.PENDING
    due_date: date | None = None

    # Weak reference: nothing checks that the category exists.
    category_id: str | None = None

    tags: tuple[str, ...] = ()
    subtasks: tuple[Any, ...] = ()


@dataclass(frozen=True, slots=True)
class Category:
    id: str
    name: str
    created_at: datetime
    color: str | None = None


@dataclass(frozen=True, slots=True)
class UserPreferences:
    theme: str = "light"
    notifications: bool = True
    default_view: str = "list"

    @classmethod
    def from_raw(cls, raw: Any) -> UserPreferences:
        if isinstance(raw, UserPreferences):
            return raw
        if not isinstance(raw, dict):
            return cls()
        return cls(
            theme=str(raw.get("theme", "light")),
            notifications=bool(raw.get("notifications", True)),
            default_view=str(raw.get("default_view", raw.get("defaultView", "list"))),
        )


@dataclass(frozen=True, slots=True)
class User:
    id: str
    name: str
    created_at: datetime
    email: str | None = None
    preferences: UserPreferences = field(default_factory=UserPreferences)


@dataclass(frozen=True, slots=True)
class TaskStats:
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    completed: int = 0
    urgent: int = 0
