# src/simple_todo/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, then starts:
- the reminder loop in a background thread (optional),
- the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, run_console_loop
from ..logging_setup import setup_logging
from ..tasks.reminder_scheduler import ReminderBackgroundRunner, start_reminders_in_background

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    log_file = setup_logging(
        log_dir=settings.data_dir,
        app_name=settings.app_name,
        console_level=console_level,
    )

    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    state = create_initial_state(settings=settings)

    runner: ReminderBackgroundRunner | None = None
    if settings.reminders_enabled:
        runner = start_reminders_in_background(
            state.scheduler,
            ConsoleNotifier(),
            interval_seconds=settings.reminder_poll_seconds,
            retry_delay_seconds=settings.reminder_retry_seconds,
        )
    else:
        logger.info("Reminders disabled; scheduled times are stored but not delivered.")

    try:
        run_console_loop(state)
    finally:
        if runner is not None:
            runner.stop()
            runner.join(timeout=5.0)
        close = getattr(state.kv, "close", None)
        if close is not None:
            close()
        logger.info("Bye.")


if __name__ == "__main__":
    main()
