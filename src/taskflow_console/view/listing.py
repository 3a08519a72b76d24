# src/taskflow_console/view/listing.py

"""Pure list helpers for the task view: filter, search, sort, due-date labels."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from enum import StrEnum

from ..core.models import Task, TaskPriority, TaskStats, TaskStatus


class TaskFilter(StrEnum):
    ALL = "all"
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    URGENT = "urgent"


class SortKey(StrEnum):
    DUE_DATE = "due_date"
    PRIORITY = "priority"
    STATUS = "status"
    CREATED = "created"


PRIORITY_RANK: dict[str, int] = {
    TaskPriority.URGENT.value: 4,
    TaskPriority.HIGH.value: 3,
    TaskPriority.MEDIUM.value: 2,
    TaskPriority.LOW.value: 1,
}

STATUS_RANK: dict[str, int] = {
    TaskStatus.PENDING.value: 3,
    TaskStatus.IN_PROGRESS.value: 2,
    TaskStatus.COMPLETED.value: 1,
}

_EPOCH = datetime.min.replace(tzinfo=UTC)


def compute_stats(tasks: Iterable[Task]) -> TaskStats:
    total = pending = in_progress = completed = urgent = 0
    for t in tasks:
        total += 1
        if t.status == TaskStatus.PENDING:
            pending += 1
        elif t.status == TaskStatus.IN_PROGRESS:
            in_progress += 1
        elif t.status == TaskStatus.COMPLETED:
            completed += 1
        if t.priority == TaskPriority.URGENT:
            urgent += 1
    return TaskStats(
        total=total,
        pending=pending,
        in_progress=in_progress,
        completed=completed,
        urgent=urgent,
    )


def matches_filter(task: Task, active: TaskFilter) -> bool:
    if active == TaskFilter.ALL:
        return True
    if active == TaskFilter.URGENT:
        return task.priority == TaskPriority.URGENT
    return task.status == active.value


def filter_tasks(tasks: Iterable[Task], active: TaskFilter) -> list[Task]:
    return [t for t in tasks if matches_filter(t, active)]


def search_tasks(tasks: Iterable[Task], term: str) -> list[Task]:
    """Case-insensitive substring match on title OR description OR any tag."""
    needle = (term or "").lower()
    if not needle:
        return list(tasks)

    def hit(t: Task) -> bool:
        if needle in (t.title or "").lower():
            return True
        if needle in (t.description or "").lower():
            return True
        return any(needle in tag.lower() for tag in t.tags)

    return [t for t in tasks if hit(t)]


def sort_tasks(tasks: Iterable[Task], key: SortKey) -> list[Task]:
    """
    Order a task list for display. All orderings are stable.

    - due_date: ascending, undated last
    - priority: urgent > high > medium > low > anything else
    - status: pending > in_progress > completed > anything else
    - created: newest first, missing created_at counts as oldest
    """
    items = list(tasks)
    if key == SortKey.DUE_DATE:
        return sorted(items, key=lambda t: (t.due_date is None, t.due_date or date.min))
    if key == SortKey.PRIORITY:
        return sorted(items, key=lambda t: -PRIORITY_RANK.get(t.priority, 0))
    if key == SortKey.STATUS:
        return sorted(items, key=lambda t: -STATUS_RANK.get(t.status, 0))
    return sorted(items, key=lambda t: t.created_at or _EPOCH, reverse=True)


@dataclass(frozen=True, slots=True)
class DueLabel:
    text: str
    # today | tomorrow | overdue | upcoming
    kind: str


def due_date_label(due: date | None, today: date | None = None) -> DueLabel | None:
    if due is None:
        return None
    today = today or date.today()
    if due == today:
        return DueLabel("Today", "today")
    if due == today + timedelta(days=1):
        return DueLabel("Tomorrow", "tomorrow")
    if due < today:
        return DueLabel("Overdue", "overdue")
    return DueLabel(due.strftime("%b %d"), "upcoming")


def empty_list_message(search_term: str) -> str:
    if search_term:
        return "No tasks found. Try adjusting your search terms or filters."
    return "No tasks yet. Create your first task with /new."
