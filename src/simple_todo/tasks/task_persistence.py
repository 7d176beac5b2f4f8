# src/simple_todo/tasks/task_persistence.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.ports import KeyValueStore
from .task_models import Task, decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

TASKS_NAMESPACE = "tasks"
TASKS_KEY = "data"


class KeyValueTaskPersistence:
    """
    Task persistence port over a key-value store.

    The whole list lives under a single key as a JSON array; save() always
    overwrites it.
    """

    def __init__(
        self,
        kv: KeyValueStore,
        *,
        namespace: str = TASKS_NAMESPACE,
        key: str = TASKS_KEY,
    ) -> None:
        self._kv = kv
        self._namespace = namespace
        self._key = key

    def load(self) -> list[Task]:
        tasks = decode_tasks(self._kv.get(self._namespace, self._key))
        logger.debug("Loaded %d tasks from %s/%s", len(tasks), self._namespace, self._key)
        return tasks

    def save(self, tasks: Sequence[Task]) -> None:
        self._kv.set(self._namespace, self._key, encode_tasks(tasks))
        logger.debug("Saved %d tasks to %s/%s", len(tasks), self._namespace, self._key)
