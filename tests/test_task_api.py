# tests/test_task_api.py

from __future__ import annotations

from simple_todo.cli.bootstrap import create_initial_state
from simple_todo.tasks.task_api import restore_reminders
from simple_todo.tasks.task_models import Task
from simple_todo.tasks.task_store import TaskStore

from .fakes import FakePersistence, RecordingScheduler


def test_restore_reminders_only_future_ones(clock) -> None:
    tasks = [
        Task(id=1, title="past", scheduled_time_millis=1_000),
        Task(id=2, title="none"),
        Task(id=3, title="future", description="d", scheduled_time_millis=9_000),
        Task(id=4, title="done future", scheduled_time_millis=8_000, is_done=True),
    ]
    scheduler = RecordingScheduler()
    store = TaskStore(FakePersistence(tasks), scheduler, clock=clock)

    assert restore_reminders(store, scheduler, now_ms=5_000) == 2
    assert scheduler.scheduled == [
        ("schedule", 3, "future", "d", 9_000),
        ("schedule", 4, "done future", "", 8_000),
    ]


def test_bootstrap_wires_state(settings) -> None:
    state = create_initial_state(settings=settings)
    state.task_store.add("persisted", "", 0, 0, False)
    state.theme.set_dark(True)

    again = create_initial_state(settings=settings)

    assert [t.title for t in again.task_store.tasks] == ["persisted"]
    assert again.theme.is_dark is True
    assert settings.db_path.exists()
