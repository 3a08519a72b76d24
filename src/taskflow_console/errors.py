# src/taskflow_console/errors.py

"""Error taxonomy shared by services and the view layer."""

from __future__ import annotations


class TaskFlowError(Exception):
    """Base error. `message` is safe to show to the user as-is."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(TaskFlowError):
    """Form input rejected before any service call (e.g. empty title)."""


class NotFoundError(TaskFlowError):
    """Operation on an id that is not in the collection."""

    def __init__(self, entity: str, entity_id: str) -> None:
        super().__init__(f"{entity} not found")
        self.entity = entity
        self.entity_id = entity_id


class AggregateLoadError(TaskFlowError):
    """One of the concurrent fetches of a full reload failed."""

    def __init__(self, cause: BaseException) -> None:
        detail = getattr(cause, "message", None) or str(cause) or type(cause).__name__
        super().__init__(f"Failed to load data: {detail}")
        self.cause = cause
