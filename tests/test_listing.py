# tests/test_listing.py

from __future__ import annotations

from datetime import UTC, date, datetime

from taskflow_console.core.models import Task
from taskflow_console.view.listing import (
    PRIORITY_RANK,
    SortKey,
    due_date_label,
    empty_list_message,
    search_tasks,
    sort_tasks,
)

TODAY = date(2024, 3, 10)


def _task(task_id: str, **kw) -> Task:
    created = kw.pop("created_at", datetime(2024, 1, 1, tzinfo=UTC))
    kw.setdefault("title", f"task {task_id}")
    return Task(id=task_id, created_at=created, updated_at=created, **kw)


def test_due_date_sort_puts_undated_last() -> None:
    tasks = [
        _task("a"),
        _task("b", due_date=date(2024, 3, 5)),
        _task("c"),
        _task("d", due_date=date(2024, 2, 1)),
        _task("e", due_date=date(2024, 3, 5)),
    ]
    ordered = sort_tasks(tasks, SortKey.DUE_DATE)
    assert [t.id for t in ordered] == ["d", "b", "e", "a", "c"]


def test_priority_sort_is_non_increasing_with_unknown_lowest() -> None:
    tasks = [
        _task("1", priority="low"),
        _task("2", priority="someday"),
        _task("3", priority="urgent"),
        _task("4", priority="medium"),
        _task("5", priority="high"),
        _task("6", priority="urgent"),
    ]
    ordered = sort_tasks(tasks, SortKey.PRIORITY)
    assert [t.id for t in ordered] == ["3", "6", "5", "4", "1", "2"]
    ranks = [PRIORITY_RANK.get(t.priority, 0) for t in ordered]
    assert ranks == sorted(ranks, reverse=True)


def test_status_sort() -> None:
    tasks = [
        _task("1", status="completed"),
        _task("2", status="in_progress"),
        _task("3", status="pending"),
    ]
    assert [t.id for t in sort_tasks(tasks, SortKey.STATUS)] == ["3", "2", "1"]


def test_created_sort_newest_first() -> None:
    tasks = [
        _task("old", created_at=datetime(2024, 1, 1, tzinfo=UTC)),
        _task("new", created_at=datetime(2024, 3, 1, tzinfo=UTC)),
        _task("mid", created_at=datetime(2024, 2, 1, tzinfo=UTC)),
        _task("none", created_at=None),
    ]
    assert [t.id for t in sort_tasks(tasks, SortKey.CREATED)] == ["new", "mid", "old", "none"]


def test_sort_does_not_modify_input() -> None:
    tasks = [_task("b", due_date=date(2024, 3, 5)), _task("a", due_date=date(2024, 1, 5))]
    sort_tasks(tasks, SortKey.DUE_DATE)
    assert [t.id for t in tasks] == ["b", "a"]


def test_search_is_case_insensitive_over_title_description_and_tags() -> None:
    tasks = [
        _task("t", title="Call the Plumber"),
        _task("d", description="ask about PLUMBING quote"),
        _task("g", tags=("home", "plumbing-fix")),
        _task("x", title="Unrelated", description=None),
    ]
    assert [t.id for t in search_tasks(tasks, "plumb")] == ["t", "d", "g"]
    assert [t.id for t in search_tasks(tasks, "HOME")] == ["g"]
    assert len(search_tasks(tasks, "")) == 4
    assert search_tasks(tasks, "zzz") == []


def test_due_date_labels() -> None:
    assert due_date_label(None, TODAY) is None
    assert due_date_label(TODAY, TODAY).text == "Today"
    assert due_date_label(date(2024, 3, 11), TODAY).text == "Tomorrow"
    assert due_date_label(date(2024, 3, 9), TODAY).text == "Overdue"
    assert due_date_label(date(2023, 12, 31), TODAY).kind == "overdue"

    later = due_date_label(date(2024, 4, 2), TODAY)
    assert later is not None
    assert later.text == "Apr 02"
    assert later.kind == "upcoming"


def test_empty_list_message_depends_on_search() -> None:
    assert empty_list_message("milk").startswith("No tasks found")
    assert empty_list_message("").startswith("No tasks yet")
