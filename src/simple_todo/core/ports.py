# src/simple_todo/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage and reminder delivery swappable and makes testing easier.
"""

from collections.abc import Sequence
from typing import TYPE_CHECKING, Awaitable, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task


class KeyValueStore(Protocol):
    """Opaque get/set string store, partitioned by namespace."""

    def get(self, namespace: str, key: str, default: str | None = None) -> str | None: ...
    def set(self, namespace: str, key: str, value: str) -> None: ...
    def delete(self, namespace: str, key: str) -> None: ...


class TaskPersistence(Protocol):
    """Whole-collection persistence: load everything once, overwrite everything on save."""

    def load(self) -> list[Task]: ...
    def save(self, tasks: Sequence[Task]) -> None: ...


class ReminderPort(Protocol):
    """
    One-shot reminder facility keyed by task id.

    - schedule() replaces any pending reminder with the same id
    - schedule() silently declines at_millis that is 0 or already in the past
    - cancel() is a no-op when nothing is pending
    """

    def schedule(self, task_id: int, title: str, description: str, at_millis: int) -> None: ...
    def cancel(self, task_id: int) -> None: ...


class Notifier(Protocol):
    """Delivery side of a reminder: how a due reminder reaches the user."""

    def notify(self, *, task_id: int, title: str, description: str) -> Awaitable[None]: ...
