# src/simple_todo/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from ..tasks.reminder_scheduler import ReminderScheduler
from ..tasks.task_store import TaskStore
from .ports import KeyValueStore

if TYPE_CHECKING:
    from ..cli.theme import ThemeSettings


@dataclass
class AppState:
    settings: Any  # Settings or a test double with the same attributes

    kv: KeyValueStore
    task_store: TaskStore
    scheduler: ReminderScheduler
    theme: ThemeSettings

    # Serializes TaskStore access between connectors.
    lock: threading.Lock = field(default_factory=threading.Lock)
