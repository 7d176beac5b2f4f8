# src/simple_todo/tasks/task_models.py

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

NO_REMINDER = 0

_INT32_MASK = 0xFFFFFFFF


def _to_int32(value: int) -> int:
    value &= _INT32_MASK
    return value - (1 << 32) if value >= (1 << 31) else value


def id_from_millis(epoch_millis: int) -> int:
    """Task id derived from the creation time, wrapped to a signed 32-bit int."""
    return _to_int32(int(epoch_millis))


def title_hash(title: str) -> int:
    """
    Deterministic 32-bit hash of a title (same result as Java's String.hashCode).

    Used as the fallback id for stored entries that have none.
    """
    h = 0
    data = title.encode("utf-16-be")
    for i in range(0, len(data), 2):
        h = (31 * h + ((data[i] << 8) | data[i + 1])) & _INT32_MASK
    return _to_int32(h)


@dataclass(frozen=True, slots=True)
class Task:
    id: int
    title: str
    description: str = ""
    scheduled_time_millis: int = NO_REMINDER
    is_done: bool = False

    @property
    def has_reminder(self) -> bool:
        return self.scheduled_time_millis != NO_REMINDER

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "id": self.id,
            "scheduledTimeMillis": self.scheduled_time_millis,
            "isDone": self.is_done,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Task:
        title = str(raw["title"])
        tid = raw.get("id")
        scheduled = raw.get("scheduledTimeMillis")
        done = raw.get("isDone")
        return cls(
            id=int(tid) if isinstance(tid, int) and not isinstance(tid, bool) else title_hash(title),
            title=title,
            description=str(raw.get("description") or ""),
            scheduled_time_millis=int(scheduled) if isinstance(scheduled, int) else NO_REMINDER,
            is_done=done if isinstance(done, bool) else False,
        )


def encode_tasks(tasks: Sequence[Task]) -> str:
    """Serialize tasks to the stored JSON array (storage order)."""
    return json.dumps([t.to_dict() for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str | None) -> list[Task]:
    """
    Parse the stored JSON array.

    Missing data -> []. Missing fields take their defaults; entries
    without a title are skipped. Malformed JSON raises ValueError.
    """
    if raw is None or not raw.strip():
        return []
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array of tasks, got {type(data).__name__}")
    return list(_iter_valid(data))


def _iter_valid(items: Iterable[Any]) -> Iterable[Task]:
    for pos, item in enumerate(items):
        if not isinstance(item, dict) or item.get("title") is None:
            logger.warning("Skipping stored task #%d without a title", pos)
            continue
        yield Task.from_dict(item)
