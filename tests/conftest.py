# tests/conftest.py

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from types import SimpleNamespace

import pytest

from simple_todo.cli.theme import ThemeSettings
from simple_todo.core.state import AppState
from simple_todo.storage.kv_store import SqliteKeyValueStore
from simple_todo.tasks.reminder_scheduler import ReminderScheduler
from simple_todo.tasks.task_persistence import KeyValueTaskPersistence
from simple_todo.tasks.task_store import TaskStore

from .fakes import FakeClock, FakePersistence, RecordingScheduler

# 2024-01-01 08:00 local time
MORNING = datetime(2024, 1, 1, 8, 0)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(MORNING)


@pytest.fixture()
def persistence() -> FakePersistence:
    return FakePersistence()


@pytest.fixture()
def scheduler() -> RecordingScheduler:
    return RecordingScheduler()


@pytest.fixture()
def store(persistence: FakePersistence, scheduler: RecordingScheduler, clock: FakeClock) -> TaskStore:
    return TaskStore(persistence, scheduler, clock=clock)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the CLI.

    We intentionally use a SimpleNamespace rather than reading the environment,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="simple-todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "prefs.sqlite3",
        reminders_enabled=False,
        reminder_poll_seconds=0.01,
        reminder_retry_seconds=0.01,
    )


@pytest.fixture()
def state(settings: SimpleNamespace, monkeypatch: pytest.MonkeyPatch) -> AppState:
    """
    AppState wired with a real SQLite key-value store and the real scheduler.

    NOTE: the store runs on the real clock here; command tests only assert
    on things that do not depend on the time of day.
    """
    monkeypatch.setenv("NO_COLOR", "1")
    kv = SqliteKeyValueStore(settings.db_path)
    scheduler = ReminderScheduler()
    return AppState(
        settings=settings,
        kv=kv,
        task_store=TaskStore(KeyValueTaskPersistence(kv), scheduler),
        scheduler=scheduler,
        theme=ThemeSettings(kv),
    )
