# src/simple_todo/tasks/reminder_scheduler.py

from __future__ import annotations

"""
Reminder scheduler.

ReminderScheduler is the in-process scheduling port: a table of pending
one-shot reminders keyed by task id.

run_reminder_loop() is a small polling loop that:
- pops reminders that are due,
- hands them to an injected notifier,
- re-queues a reminder with a delay when delivery fails.

How a reminder is shown (console line, desktop popup, ...) belongs to the notifier.
"""

import asyncio
import contextlib
import logging
import threading
import time
from dataclasses import dataclass

from ..core.ports import Notifier

logger = logging.getLogger(__name__)

DEFAULT_TITLE = "Task Reminder"
DEFAULT_DESCRIPTION = "It's time to complete this activity."


def now_millis() -> int:
    return int(time.time() * 1000)


@dataclass(slots=True, frozen=True)
class PendingReminder:
    task_id: int
    title: str
    description: str
    at_millis: int


class ReminderScheduler:
    """
    Thread-safe pending-reminder table.

    The task store calls schedule()/cancel() from the foreground; the
    reminder loop calls pop_due() from its own thread.

    A popped reminder stays "in flight" until the loop reports it delivered
    (finish) or failed (requeue). cancel() and schedule() for the same id
    clear the in-flight mark, so a failed delivery of a cancelled or
    replaced reminder is dropped instead of coming back.
    """

    def __init__(self, *, clock_millis=now_millis) -> None:
        self._clock_millis = clock_millis
        self._pending: dict[int, PendingReminder] = {}
        self._in_flight: set[int] = set()
        self._lock = threading.Lock()

    def schedule(self, task_id: int, title: str, description: str, at_millis: int) -> None:
        if at_millis == 0 or at_millis <= self._clock_millis():
            logger.debug("Reminder for task %s not scheduled (at=%s)", task_id, at_millis)
            return
        reminder = PendingReminder(
            task_id=int(task_id),
            title=title,
            description=description,
            at_millis=int(at_millis),
        )
        with self._lock:
            self._pending[reminder.task_id] = reminder
            self._in_flight.discard(reminder.task_id)
        logger.info("Reminder scheduled task=%s at=%s", task_id, at_millis)

    def cancel(self, task_id: int) -> None:
        task_id = int(task_id)
        with self._lock:
            removed = self._pending.pop(task_id, None)
            was_in_flight = task_id in self._in_flight
            self._in_flight.discard(task_id)
        if removed is not None or was_in_flight:
            logger.info("Reminder cancelled task=%s", task_id)

    def finish(self, reminder: PendingReminder) -> None:
        """Mark a popped reminder as delivered."""
        with self._lock:
            self._in_flight.discard(reminder.task_id)

    def requeue(self, reminder: PendingReminder, delay_ms: int) -> bool:
        """
        Put a popped reminder back delay_ms from now.

        Returns False (and drops it) when the id was cancelled or
        re-scheduled while the delivery was in flight.
        """
        at_millis = self._clock_millis() + int(delay_ms)
        with self._lock:
            if reminder.task_id not in self._in_flight:
                return False
            self._in_flight.discard(reminder.task_id)
            self._pending[reminder.task_id] = PendingReminder(
                reminder.task_id, reminder.title, reminder.description, at_millis
            )
        return True

    def pending(self) -> list[PendingReminder]:
        with self._lock:
            return sorted(self._pending.values(), key=lambda r: (r.at_millis, r.task_id))

    def get(self, task_id: int) -> PendingReminder | None:
        with self._lock:
            return self._pending.get(int(task_id))

    def pop_due(self, now_ms: int | None = None) -> list[PendingReminder]:
        """Remove and return reminders with at_millis <= now, oldest first."""
        if now_ms is None:
            now_ms = self._clock_millis()
        with self._lock:
            due = [r for r in self._pending.values() if r.at_millis <= now_ms]
            for r in due:
                del self._pending[r.task_id]
                self._in_flight.add(r.task_id)
        due.sort(key=lambda r: (r.at_millis, r.task_id))
        return due

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)


async def run_reminder_loop(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        *,
        interval_seconds: float = 1.0,
        retry_delay_seconds: float = 60.0,
) -> None:
    """
    Simple polling loop.

    Every interval_seconds:
    - pop due reminders
    - send each via notifier.notify(...)
      On failure:
        - log it
        - re-queue the reminder retry_delay_seconds later,
          unless it was cancelled or re-scheduled meanwhile

    To stop the loop, cancel the coroutine/task.
    """
    sleep_s = max(0.01, float(interval_seconds))
    retry_ms = int(max(0.01, float(retry_delay_seconds)) * 1000)

    while True:
        for reminder in scheduler.pop_due():
            try:
                await notifier.notify(
                    task_id=reminder.task_id,
                    title=reminder.title or DEFAULT_TITLE,
                    description=reminder.description or DEFAULT_DESCRIPTION,
                )
                scheduler.finish(reminder)
                logger.info("Reminder delivered task=%s", reminder.task_id)
            except Exception:
                logger.exception("Reminder delivery failed task=%s", reminder.task_id)
                if not scheduler.requeue(reminder, retry_ms):
                    logger.info("Reminder task=%s changed during delivery; not retried.", reminder.task_id)

        await asyncio.sleep(sleep_s)


@dataclass(slots=True)
class ReminderBackgroundRunner:
    thread: threading.Thread
    loop: asyncio.AbstractEventLoop
    stop_event: asyncio.Event

    def stop(self) -> None:
        try:
            self.loop.call_soon_threadsafe(self.stop_event.set)
        except RuntimeError:
            logger.debug("Failed to signal reminder loop stop.", exc_info=True)

    def join(self, timeout: float | None = None) -> None:
        self.thread.join(timeout=timeout)


async def _run_until_stopped(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        stop_event: asyncio.Event,
        interval_seconds: float,
        retry_delay_seconds: float,
) -> None:
    loop_task = asyncio.create_task(
        run_reminder_loop(
            scheduler,
            notifier,
            interval_seconds=interval_seconds,
            retry_delay_seconds=retry_delay_seconds,
        )
    )
    try:
        await stop_event.wait()
    finally:
        loop_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await loop_task


def start_reminders_in_background(
        scheduler: ReminderScheduler,
        notifier: Notifier,
        *,
        interval_seconds: float = 1.0,
        retry_delay_seconds: float = 60.0,
) -> ReminderBackgroundRunner | None:
    """
    Run the reminder loop on its own event loop in a daemon thread,
    so the blocking console REPL can own the main thread.
    """
    ready = threading.Event()
    holder: dict[str, object] = {}

    def runner() -> None:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
        stop_event = asyncio.Event()

        holder["loop"] = loop
        holder["stop_event"] = stop_event
        ready.set()

        try:
            loop.run_until_complete(
                _run_until_stopped(scheduler, notifier, stop_event, interval_seconds, retry_delay_seconds)
            )
        finally:
            loop.close()

    t = threading.Thread(target=runner, name="reminders", daemon=True)
    t.start()

    ready.wait(timeout=5.0)
    loop = holder.get("loop")
    stop_event = holder.get("stop_event")

    if not isinstance(loop, asyncio.AbstractEventLoop) or not isinstance(stop_event, asyncio.Event):
        logger.error("Reminder thread did not initialize properly.")
        return None

    logger.info("Reminder background thread started.")
    return ReminderBackgroundRunner(thread=t, loop=loop, stop_event=stop_event)
