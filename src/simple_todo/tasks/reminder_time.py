# src/simple_todo/tasks/reminder_time.py

from __future__ import annotations

"""
Reminder time resolution.

A requested wall-clock time (hour, minute) always means "the next upcoming
occurrence": today if it is still ahead, otherwise tomorrow.

00:00 doubles as "no reminder" (stored value 0); a midnight reminder cannot
be expressed. Kept as-is because stored data relies on it.
"""

from datetime import datetime, timedelta

from ..core.errors import ValidationError
from .task_models import NO_REMINDER, Task


def to_millis(moment: datetime) -> int:
    """Local wall-clock datetime -> epoch milliseconds."""
    return int(moment.timestamp() * 1000)


def from_millis(epoch_millis: int) -> datetime:
    """Epoch milliseconds -> naive local datetime."""
    return datetime.fromtimestamp(epoch_millis / 1000)


def is_unset(hour: int, minute: int) -> bool:
    return hour == 0 and minute == 0


def resolve_reminder_time(now: datetime, hour: int, minute: int, has_time: bool = True) -> int:
    if not (0 <= hour <= 23):
        raise ValidationError(f"hour must be in 0..23, got {hour}")
    if not (0 <= minute <= 59):
        raise ValidationError(f"minute must be in 0..59, got {minute}")

    if not has_time or is_unset(hour, minute):
        return NO_REMINDER

    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        # Calendar day, not 24h: keeps the wall-clock time across DST changes.
        candidate += timedelta(days=1)
    return to_millis(candidate)


def default_edit_time(task: Task, now: datetime) -> tuple[int, int]:
    """Time pre-filled when editing: the current reminder, or the current time if none."""
    base = from_millis(task.scheduled_time_millis) if task.has_reminder else now
    return base.hour, base.minute
