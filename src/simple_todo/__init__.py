"""Single-user task list with wall-clock reminders."""

__version__ = "0.1.0"
