# tests/fakes.py

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from simple_todo.core.ports import Notifier
from simple_todo.tasks.task_models import Task


class FakeClock:
    """Settable wall clock passed to TaskStore as clock=..."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


class InMemoryKeyValueStore:
    def __init__(self) -> None:
        self.data: dict[tuple[str, str], str] = {}

    def get(self, namespace: str, key: str, default: str | None = None) -> str | None:
        return self.data.get((namespace, key), default)

    def set(self, namespace: str, key: str, value: str) -> None:
        self.data[(namespace, key)] = value

    def delete(self, namespace: str, key: str) -> None:
        self.data.pop((namespace, key), None)


class FakePersistence:
    """
    In-memory TaskPersistence.

    - Captures every save for assertions
    - fail_next_save makes the next save() raise
    """

    def __init__(self, tasks: Sequence[Task] = ()) -> None:
        self.stored: list[Task] = list(tasks)
        self.saves: list[list[Task]] = []
        self.fail_next_save = False

    def load(self) -> list[Task]:
        return list(self.stored)

    def save(self, tasks: Sequence[Task]) -> None:
        if self.fail_next_save:
            self.fail_next_save = False
            raise OSError("disk full")
        self.stored = list(tasks)
        self.saves.append(list(tasks))


@dataclass(slots=True)
class RecordingScheduler:
    """ReminderPort that only records calls."""

    calls: list[tuple] = field(default_factory=list)

    def schedule(self, task_id: int, title: str, description: str, at_millis: int) -> None:
        self.calls.append(("schedule", task_id, title, description, at_millis))

    def cancel(self, task_id: int) -> None:
        self.calls.append(("cancel", task_id))

    @property
    def scheduled(self) -> list[tuple]:
        return [c for c in self.calls if c[0] == "schedule"]

    @property
    def cancelled(self) -> list[int]:
        return [c[1] for c in self.calls if c[0] == "cancel"]


@dataclass(slots=True)
class Delivered:
    task_id: int
    title: str
    description: str


@dataclass(slots=True)
class FakeNotifier(Notifier):
    """
    Fake Notifier used by reminder loop tests.

    failures: number of notify() calls that raise before deliveries succeed.
    on_notify: called with the task id while the delivery is in progress.
    """

    delivered: list[Delivered] = field(default_factory=list)
    failures: int = 0
    on_notify: Callable[[int], None] | None = None

    async def notify(self, *, task_id: int, title: str, description: str) -> None:
        if self.on_notify is not None:
            self.on_notify(task_id)
        if self.failures > 0:
            self.failures -= 1
            raise ConnectionError("notification service unavailable")
        self.delivered.append(Delivered(task_id=task_id, title=title, description=description))
