# tests/test_reminder_time.py

from __future__ import annotations

from datetime import datetime

import pytest

from simple_todo.core.errors import ValidationError
from simple_todo.tasks.reminder_time import (
    default_edit_time,
    from_millis,
    resolve_reminder_time,
    to_millis,
)
from simple_todo.tasks.task_models import Task


def test_later_today_stays_today() -> None:
    now = datetime(2024, 1, 1, 8, 0)
    assert resolve_reminder_time(now, 9, 0, True) == to_millis(datetime(2024, 1, 1, 9, 0))


def test_already_passed_moves_to_tomorrow() -> None:
    now = datetime(2024, 1, 1, 10, 0)
    assert resolve_reminder_time(now, 9, 0, True) == to_millis(datetime(2024, 1, 2, 9, 0))


def test_exactly_now_moves_to_tomorrow() -> None:
    now = datetime(2024, 1, 1, 9, 0, 0)
    assert resolve_reminder_time(now, 9, 0, True) == to_millis(datetime(2024, 1, 2, 9, 0))


def test_same_minute_with_seconds_elapsed_moves_to_tomorrow() -> None:
    now = datetime(2024, 1, 1, 9, 0, 30)
    assert resolve_reminder_time(now, 9, 0, True) == to_millis(datetime(2024, 1, 2, 9, 0))


def test_rolls_over_month_and_year_end() -> None:
    now = datetime(2023, 12, 31, 23, 30)
    assert resolve_reminder_time(now, 7, 15, True) == to_millis(datetime(2024, 1, 1, 7, 15))


@pytest.mark.parametrize(
    "now",
    [datetime(2024, 1, 1, 0, 0), datetime(2024, 1, 1, 12, 0), datetime(2024, 6, 30, 23, 59)],
)
def test_midnight_means_no_reminder(now) -> None:
    assert resolve_reminder_time(now, 0, 0, True) == 0
    assert resolve_reminder_time(now, 0, 0, False) == 0


def test_no_time_requested() -> None:
    assert resolve_reminder_time(datetime(2024, 1, 1, 8, 0), 9, 0, False) == 0


@pytest.mark.parametrize(
    "hour, minute",
    [(0, 1), (6, 45), (12, 0), (23, 59)],
)
def test_result_is_strictly_in_the_future(hour, minute) -> None:
    now = datetime(2024, 3, 15, 12, 0, 0, 500)
    result = resolve_reminder_time(now, hour, minute, True)
    assert result > to_millis(now)
    assert (from_millis(result).hour, from_millis(result).minute) == (hour, minute)


@pytest.mark.parametrize("hour, minute", [(24, 0), (-1, 0), (9, 60), (9, -5)])
def test_out_of_range_time_rejected(hour, minute) -> None:
    with pytest.raises(ValidationError):
        resolve_reminder_time(datetime(2024, 1, 1, 8, 0), hour, minute, True)


def test_default_edit_time_uses_existing_reminder() -> None:
    task = Task(id=1, title="t", scheduled_time_millis=to_millis(datetime(2024, 1, 2, 18, 45)))
    assert default_edit_time(task, datetime(2024, 1, 1, 8, 0)) == (18, 45)


def test_default_edit_time_falls_back_to_now() -> None:
    task = Task(id=1, title="t")
    assert default_edit_time(task, datetime(2024, 1, 1, 8, 7)) == (8, 7)
