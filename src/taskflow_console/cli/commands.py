# src/taskflow_console/cli/commands.py

from __future__ import annotations

import inspect
import logging
import shlex
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import date

from ..core.models import Task, TaskStatus
from ..core.ports import Notifier
from ..core.state import AppState
from ..errors import NotFoundError
from ..view.controller import DARK_CLASS, ViewStateController
from ..view.editor import TaskEditor
from ..view.listing import SortKey, TaskFilter, due_date_label, empty_list_message

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Everything a command needs: app state plus the live view objects."""

    state: AppState
    controller: ViewStateController
    editor: TaskEditor
    notify: Notifier


def create_session(state: AppState, notify: Notifier) -> Session:
    controller = ViewStateController(state.tasks, state.categories, state.preferences)
    editor = TaskEditor(state.tasks, controller, notify)
    return Session(state=state, controller=controller, editor=editor, notify=notify)


CommandResult = str | Awaitable[str]
CommandHandler = Callable[[Session, list[str]], CommandResult]


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /new, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, session: Session, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}."
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        result = handler(session, args)
        if inspect.isawaitable(result):
            result = await result
        return result

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----

def _title_words(value: object) -> str:
    return " ".join(w.capitalize() for w in str(value).replace("_", " ").split())


def render_task(task: Task, controller: ViewStateController, today: date | None = None) -> str:
    check = "[x]" if task.status == TaskStatus.COMPLETED else "[ ]"
    meta = [_title_words(task.priority), _title_words(task.status)]
    category = controller.category_name(task.category_id)
    if category:
        meta.append(category)
    due = due_date_label(task.due_date, today)
    if due:
        meta.append(f"due: {due.text}")

    lines = [f"{check} {task.title}  <{task.id}>", f"    {' | '.join(meta)}"]
    if task.description:
        lines.append(f"    {task.description}")
    if task.tags:
        lines.append("    " + " ".join(f"#{t}" for t in task.tags))
    return "\n".join(lines)


def render_stats(controller: ViewStateController) -> str:
    s = controller.stats
    return (
        f"Total: {s.total} | Pending: {s.pending} | In progress: {s.in_progress} | "
        f"Done: {s.completed} | Urgent: {s.urgent}"
    )


def render_list(session: Session, today: date | None = None) -> str:
    controller, editor = session.controller, session.editor
    header = f"Tasks (filter={controller.active_filter}, sort={editor.sort_key}"
    if editor.search_term:
        header += f", search={editor.search_term!r}"
    header += ")"

    lines = []
    if controller.error:
        lines.append(f"! {controller.error} (use /dismiss to hide)")
    lines.append(header)

    tasks = editor.visible_tasks()
    if not tasks:
        lines.append(empty_list_message(editor.search_term))
    for t in tasks:
        lines.append(render_task(t, controller, today))
    return "\n".join(lines)


# ---- argument helpers ----

FIELD_ALIASES = {
    "title": "title",
    "desc": "description",
    "description": "description",
    "priority": "priority",
    "prio": "priority",
    "due": "due_date",
    "due_date": "due_date",
    "category": "category_id",
    "cat": "category_id",
    "tags": "tags",
}


def parse_fields(args: list[str]) -> tuple[list[str], dict[str, str]]:
    """
    Split ["Buy", "milk", "priority=low"] into (["Buy", "milk"], {"priority": "low"}).

    An argument shaped like name=value must name a known field, otherwise
    ValueError is raised and nothing ends up in the title.
    """
    words: list[str] = []
    fields: dict[str, str] = {}
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep or not key.isidentifier():
            words.append(arg)
            continue
        field_name = FIELD_ALIASES.get(key.lower())
        if field_name is None:
            hint = " Use /toggle to change status." if key.lower() == "status" else ""
            raise ValueError(f"Unknown field {key!r}. Fields: {', '.join(FIELD_ALIASES)}.{hint}")
        fields[field_name] = value
    return words, fields


def _resolve_category(controller: ViewStateController, raw: str) -> str:
    """Accept a category id or (case-insensitive) name; unknown values pass through."""
    for c in controller.categories:
        if c.id == raw:
            return c.id
    for c in controller.categories:
        if c.name.lower() == raw.lower():
            return c.id
    return raw


def _apply_fields(session: Session, fields: dict[str, str]) -> None:
    form = session.editor.form
    for name, value in fields.items():
        if name == "category_id" and value:
            value = _resolve_category(session.controller, value)
        setattr(form, name, value)


async def _find_task(session: Session, task_id: str) -> Task:
    # After a failed reload the snapshot may be stale; ask the service instead.
    if not session.controller.error:
        for t in session.controller.tasks:
            if t.id == task_id:
                return t
    return await session.state.tasks.get_by_id(task_id)


# ---- commands ----

def cmd_help(session: Session, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(session: Session, args: list[str]) -> str:
    return render_list(session)


def cmd_stats(session: Session, args: list[str]) -> str:
    return render_stats(session.controller)


def cmd_filter(session: Session, args: list[str]) -> str:
    choices = ", ".join(f.value for f in TaskFilter)
    if not args:
        return f"Filter is {session.controller.active_filter}. Choices: {choices}."
    try:
        session.controller.set_filter(args[0].lower())
    except ValueError:
        return f"Unknown filter {args[0]!r}. Choices: {choices}."
    return render_list(session)


_SORT_ALIASES = {"due": SortKey.DUE_DATE, "date": SortKey.DUE_DATE, "created": SortKey.CREATED}


def cmd_sort(session: Session, args: list[str]) -> str:
    choices = ", ".join(k.value for k in SortKey)
    if not args:
        return f"Sort is {session.editor.sort_key}. Choices: {choices}."
    raw = args[0].lower()
    try:
        session.editor.set_sort(_SORT_ALIASES.get(raw, raw))
    except ValueError:
        return f"Unknown sort key {args[0]!r}. Choices: {choices}."
    return render_list(session)


def cmd_search(session: Session, args: list[str]) -> str:
    session.editor.set_search(" ".join(args))
    return render_list(session)


async def cmd_new(session: Session, args: list[str]) -> str:
    """
    /new Buy milk priority=low due=2024-02-01 category=Shopping tags="home, weekly"
    """
    try:
        words, fields = parse_fields(args)
    except ValueError as e:
        return str(e)
    editor = session.editor
    editor.open_create()
    if words:
        editor.form.title = " ".join(words)
    _apply_fields(session, fields)

    saved = await editor.submit()
    if saved is None:
        editor.reset()
        return "Task not created."
    return render_list(session)


async def cmd_edit(session: Session, args: list[str]) -> str:
    """
    /edit <id> priority=high title="New title"
    """
    if not args:
        return "Usage: /edit <id> field=value ..."
    try:
        words, fields = parse_fields(args[1:])
    except ValueError as e:
        return str(e)
    try:
        task = await _find_task(session, args[0])
    except NotFoundError as e:
        return e.message

    editor = session.editor
    editor.begin_edit(task)
    if words:
        editor.form.title = " ".join(words)
    _apply_fields(session, fields)

    saved = await editor.submit()
    if saved is None:
        editor.reset()
        return "Task not updated."
    return render_list(session)


async def cmd_toggle(session: Session, args: list[str]) -> str:
    if not args:
        return "Usage: /toggle <id>"
    try:
        task = await _find_task(session, args[0])
    except NotFoundError as e:
        return e.message
    saved = await session.editor.toggle_status(task)
    if saved is None:
        return "Status unchanged."
    return render_list(session)


async def cmd_delete(session: Session, args: list[str]) -> str:
    if not args:
        return "Usage: /delete <id>"
    removed = await session.editor.delete(args[0])
    if removed is None:
        return "Nothing deleted."
    return render_list(session)


async def cmd_show(session: Session, args: list[str]) -> str:
    if not args:
        return "Usage: /show <id>"
    try:
        task = await session.state.tasks.get_by_id(args[0])
    except NotFoundError as e:
        return e.message
    return render_task(task, session.controller)


def cmd_categories(session: Session, args: list[str]) -> str:
    cats = session.controller.categories
    if not cats:
        return "No categories."
    lines = ["Categories:"]
    for c in cats:
        count = sum(1 for t in session.controller.tasks if t.category_id == c.id)
        lines.append(f"  <{c.id}> {c.name} ({count} tasks)")
    return "\n".join(lines)


def cmd_dark(session: Session, args: list[str]) -> str:
    try:
        on = session.controller.toggle_dark_mode()
    except OSError as e:
        logger.warning("Could not save dark mode preference: %s", e)
        return f"Could not save dark mode preference: {e}"
    return f"Dark mode {'ON' if on else 'OFF'}."


async def cmd_reload(session: Session, args: list[str]) -> str:
    await session.controller.load_data()
    return render_list(session)


def cmd_dismiss(session: Session, args: list[str]) -> str:
    session.controller.dismiss_error()
    return "Dismissed."


async def cmd_status(session: Session, args: list[str]) -> str:
    c, e = session.controller, session.editor
    users = await session.state.users.get_all()
    theme = "dark" if DARK_CLASS in c.root_classes else "light"
    return (
        "Status:\n"
        f"  Theme: {theme}\n"
        f"  Filter: {c.active_filter} | Sort: {e.sort_key} | Search: {e.search_term or '-'}\n"
        f"  Tasks: {len(c.tasks)} | Categories: {len(c.categories)} | Users: {len(users)}\n"
        f"  Error: {c.error or '-'}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("stats", cmd_stats, help_text="Show task counters.")
registry.register(
    "filter", cmd_filter, help_text="Filter: /filter all|pending|in_progress|completed|urgent."
)
registry.register("sort", cmd_sort, help_text="Sort: /sort due_date|priority|status|created.")
registry.register("search", cmd_search, help_text="Search title/description/tags (empty clears).")
registry.register(
    "new", cmd_new, help_text="Create: /new <title> [priority= due= category= tags= desc=]."
)
registry.register("edit", cmd_edit, help_text="Edit: /edit <id> field=value ...")
registry.register("toggle", cmd_toggle, help_text="Toggle completed/pending: /toggle <id>.")
registry.register("delete", cmd_delete, help_text="Delete: /delete <id>.", aliases=["rm"])
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register("categories", cmd_categories, help_text="List categories.", aliases=["cats"])
registry.register("dark", cmd_dark, help_text="Toggle dark mode (remembered).")
registry.register("reload", cmd_reload, help_text="Reload tasks and categories.")
registry.register("dismiss", cmd_dismiss, help_text="Hide the load error banner.")
registry.register("status", cmd_status, help_text="Show current view settings.")
