# src/taskflow_console/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the view layer.

The controller and editor depend on Protocols instead of concrete services.
This keeps the mock backend swappable and makes failure injection in tests trivial.
"""

from collections.abc import Mapping
from typing import Any, Literal, Protocol, TypeVar

R = TypeVar("R", covariant=True)

NoticeLevel = Literal["success", "error", "info"]


class EntityRepo(Protocol[R]):
    """Async CRUD contract shared by the task/category/user services."""

    async def get_all(self) -> list[R]: ...
    async def get_by_id(self, record_id: str) -> R: ...
    async def create(self, data: Mapping[str, Any] | None = None) -> R: ...
    async def update(self, record_id: str, data: Mapping[str, Any] | None = None) -> R: ...
    async def delete(self, record_id: str) -> R: ...


class PreferenceRepo(Protocol):
    def get_bool(self, key: str, default: bool = False) -> bool: ...
    def set_bool(self, key: str, value: bool) -> None: ...


class Notifier(Protocol):
    """
    Transient user-visible notices (the "toast" channel).

    The connector decides how to show them; the view layer only reports.
    """

    def __call__(self, level: NoticeLevel, message: str) -> None: ...
