# src/simple_todo/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from ..core.errors import NotFoundError, ValidationError
from ..core.ports import ReminderPort, TaskPersistence
from .reminder_time import resolve_reminder_time, to_millis
from .task_models import Task, id_from_millis

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def display_to_storage_index(display_index: int, length: int) -> int:
    """
    Map a row of display_order() back to its storage index.

    Display row 0 is the newest task, i.e. storage index length - 1.
    """
    if not (0 <= display_index < length):
        raise NotFoundError(f"No task at display row {display_index} (have {length}).")
    return length - 1 - display_index


class TaskStore:
    """
    In-memory ordered task list backed by a persistence port.

    Storage order is creation order; display_order() is the reverse.
    Every index taken by edit/toggle_done/remove is a *storage* index.

    Each mutation:
    - validates before any side effect,
    - writes the full new list through the persistence port,
    - swaps the in-memory list only after the write succeeded,
    - (re)schedules reminders through the scheduling port.

    Not thread-safe: callers must serialize access.
    """

    def __init__(
        self,
        persistence: TaskPersistence,
        scheduler: ReminderPort,
        *,
        clock: Clock = datetime.now,
    ) -> None:
        self._persistence = persistence
        self._scheduler = scheduler
        self._clock = clock
        self._tasks: list[Task] = list(persistence.load())
        logger.info("TaskStore ready total=%d", len(self._tasks))

    # ---- queries ----

    @property
    def tasks(self) -> tuple[Task, ...]:
        """Snapshot in storage order."""
        return tuple(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    def get(self, index: int) -> Task:
        self._check_index(index)
        return self._tasks[index]

    def display_order(self) -> list[Task]:
        return list(reversed(self._tasks))

    def display_to_storage_index(self, display_index: int) -> int:
        return display_to_storage_index(display_index, len(self._tasks))

    # ---- mutations ----

    def add(
        self,
        title: str,
        description: str,
        requested_hour: int,
        requested_minute: int,
        has_time: bool,
    ) -> Task:
        title = (title or "").strip()
        if not title:
            raise ValidationError("Title cannot be empty.")

        now = self._clock()
        scheduled = resolve_reminder_time(now, requested_hour, requested_minute, has_time)
        task = Task(
            id=id_from_millis(to_millis(now)),
            title=title,
            description=(description or "").strip(),
            scheduled_time_millis=scheduled,
        )

        self._commit([*self._tasks, task])
        logger.debug("Task added id=%s scheduled=%s", task.id, task.scheduled_time_millis)

        if task.has_reminder:
            self._scheduler.schedule(task.id, task.title, task.description, task.scheduled_time_millis)
        return task

    def edit(
        self,
        index: int,
        new_title: str,
        new_description: str,
        requested_hour: int,
        requested_minute: int,
    ) -> Task:
        self._check_index(index)
        old = self._tasks[index]

        # Hour/minute are always supplied on edit; 00:00 still means "no reminder".
        scheduled = resolve_reminder_time(self._clock(), requested_hour, requested_minute, True)

        self._scheduler.cancel(old.id)

        updated = replace(
            old,
            title=new_title,
            description=new_description,
            scheduled_time_millis=scheduled,
        )
        new_tasks = list(self._tasks)
        new_tasks[index] = updated
        self._commit(new_tasks)
        logger.debug("Task edited id=%s index=%d scheduled=%s", updated.id, index, scheduled)

        if updated.has_reminder:
            self._scheduler.schedule(
                updated.id, updated.title, updated.description, updated.scheduled_time_millis
            )
        return updated

    def toggle_done(self, index: int, is_done: bool) -> Task:
        self._check_index(index)
        updated = replace(self._tasks[index], is_done=bool(is_done))
        new_tasks = list(self._tasks)
        new_tasks[index] = updated
        self._commit(new_tasks)
        logger.debug("Task id=%s is_done=%s", updated.id, updated.is_done)
        return updated

    def remove(self, index: int) -> Task:
        self._check_index(index)
        removed = self._tasks[index]

        self._scheduler.cancel(removed.id)

        new_tasks = list(self._tasks)
        del new_tasks[index]
        self._commit(new_tasks)
        logger.debug("Task removed id=%s index=%d", removed.id, index)
        return removed

    # ---- helpers ----

    def _check_index(self, index: int) -> None:
        if not (0 <= index < len(self._tasks)):
            raise NotFoundError(f"No task at index {index} (have {len(self._tasks)}).")

    def _commit(self, new_tasks: list[Task]) -> None:
        self._persistence.save(new_tasks)
        self._tasks = new_tasks
