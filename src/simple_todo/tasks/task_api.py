# src/simple_todo/tasks/task_api.py

from __future__ import annotations

import logging

from ..core.ports import ReminderPort
from .reminder_scheduler import now_millis
from .task_store import TaskStore

logger = logging.getLogger(__name__)


def restore_reminders(store: TaskStore, scheduler: ReminderPort, now_ms: int | None = None) -> int:
    """
    Re-arm reminders for stored tasks after a restart.

    Only reminders still in the future are scheduled; done tasks keep
    their reminder, the same as when they were first created.
    Returns the number of reminders handed to the scheduler.
    """
    if now_ms is None:
        now_ms = now_millis()

    count = 0
    for task in store.tasks:
        if task.has_reminder and task.scheduled_time_millis > now_ms:
            scheduler.schedule(task.id, task.title, task.description, task.scheduled_time_millis)
            count += 1

    logger.info("Restored %d reminders (of %d tasks)", count, len(store))
    return count
