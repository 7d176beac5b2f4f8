# src/simple_todo/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires concrete implementations into AppState (key-value store, task store,
  reminder scheduler, theme),
- re-arms reminders that are still ahead.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.kv_store import SqliteKeyValueStore
from ..tasks.reminder_scheduler import ReminderScheduler
from ..tasks.task_api import restore_reminders
from ..tasks.task_persistence import KeyValueTaskPersistence
from ..tasks.task_store import TaskStore
from .theme import ThemeSettings

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.db_path.parent.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    kv = SqliteKeyValueStore(settings.db_path)
    scheduler = ReminderScheduler()
    store = TaskStore(KeyValueTaskPersistence(kv), scheduler)
    restore_reminders(store, scheduler)

    return AppState(
        settings=settings,
        kv=kv,
        task_store=store,
        scheduler=scheduler,
        theme=ThemeSettings(kv),
    )
