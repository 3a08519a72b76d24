# src/taskflow_console/view/editor.py

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from ..core.models import Task, TaskStatus
from ..core.ports import EntityRepo, Notifier
from ..errors import TaskFlowError, ValidationError
from .controller import ViewStateController
from .listing import SortKey, search_tasks, sort_tasks

logger = logging.getLogger(__name__)


@dataclass
class TaskForm:
    """Raw form fields, as typed by the user."""

    title: str = ""
    description: str = ""
    priority: str = "medium"
    due_date: str = ""
    category_id: str = ""
    tags: str = ""


def normalize_tags(raw: str) -> tuple[str, ...]:
    """
    "work, urgent,, work" -> ("work", "urgent")

    Split on commas, trim, drop empty pieces and repeats (first one wins).
    """
    out: list[str] = []
    for piece in (raw or "").split(","):
        tag = piece.strip()
        if tag and tag not in out:
            out.append(tag)
    return tuple(out)


class TaskEditor:
    """
    Create/edit form plus the visible task list (search + sort).

    Mutations go straight to the task service; the controller is then asked
    for a full reload so the list always reflects the service's state.
    """

    def __init__(
        self,
        tasks: EntityRepo[Task],
        controller: ViewStateController,
        notify: Notifier,
    ) -> None:
        self._tasks = tasks
        self._controller = controller
        self._notify = notify

        self.form = TaskForm()
        self.editing: Task | None = None
        self.form_open = False
        self.busy = False

        self.search_term = ""
        self.sort_key = SortKey.DUE_DATE

    # ---- form lifecycle ----

    def open_create(self) -> None:
        self.form = TaskForm()
        self.editing = None
        self.form_open = True

    def begin_edit(self, task: Task) -> None:
        self.editing = task
        self.form = TaskForm(
            title=task.title or "",
            description=task.description or "",
            priority=str(task.priority or "medium"),
            due_date=task.due_date.isoformat() if task.due_date else "",
            category_id=task.category_id or "",
            tags=", ".join(task.tags),
        )
        self.form_open = True

    def reset(self) -> None:
        self.form = TaskForm()
        self.editing = None
        self.form_open = False

    def validate(self) -> None:
        if not self.form.title.strip():
            raise ValidationError("Task title is required")

    def build_payload(self) -> dict[str, Any]:
        f = self.form
        return {
            "title": f.title,
            "description": f.description,
            "priority": f.priority,
            "due_date": f.due_date or None,
            "category_id": f.category_id or None,
            "tags": normalize_tags(f.tags),
            # Edits keep the task's current status; this form never changes it.
            "status": self.editing.status if self.editing else TaskStatus.PENDING,
        }

    async def submit(self) -> Task | None:
        try:
            self.validate()
        except ValidationError as e:
            self._notify("error", e.message)
            return None

        payload = self.build_payload()
        self.busy = True
        try:
            if self.editing is not None:
                saved = await self._tasks.update(self.editing.id, payload)
                self._notify("success", "Task updated successfully!")
            else:
                saved = await self._tasks.create(payload)
                self._notify("success", "Task created successfully!")
        except TaskFlowError as e:
            logger.info("Task save failed: %s", e.message)
            self._notify("error", e.message)
            return None
        finally:
            self.busy = False

        self.reset()
        await self._controller.load_data()
        return saved

    # ---- list actions ----

    async def toggle_status(self, task: Task) -> Task | None:
        new_status = TaskStatus.PENDING if task.status == TaskStatus.COMPLETED else TaskStatus.COMPLETED
        self.busy = True
        try:
            saved = await self._tasks.update(task.id, {"status": new_status})
        except TaskFlowError as e:
            logger.info("Status toggle failed id=%s: %s", task.id, e.message)
            self._notify("error", e.message)
            return None
        finally:
            self.busy = False

        self._notify("success", f"Task marked as {new_status}!")
        await self._controller.load_data()
        return saved

    async def delete(self, task_id: str) -> Task | None:
        self.busy = True
        try:
            removed = await self._tasks.delete(task_id)
        except TaskFlowError as e:
            logger.info("Delete failed id=%s: %s", task_id, e.message)
            self._notify("error", e.message)
            return None
        finally:
            self.busy = False

        self._notify("success", "Task deleted successfully!")
        await self._controller.load_data()
        return removed

    # ---- visible list ----

    def set_search(self, term: str) -> None:
        self.search_term = term or ""

    def set_sort(self, key: SortKey | str) -> SortKey:
        self.sort_key = SortKey(key)
        return self.sort_key

    def visible_tasks(self) -> list[Task]:
        found = search_tasks(self._controller.filtered_tasks(), self.search_term)
        return sort_tasks(found, self.sort_key)
