# src/simple_todo/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import datetime

from ..core.errors import NotFoundError, ValidationError
from ..core.state import AppState
from ..tasks.reminder_time import default_edit_time, from_millis
from ..tasks.task_models import Task
from .theme import palette

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

_TIME_RE = re.compile(r"(?:^|\s)@(\d{1,2}):(\d{2})\s*$")


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing / rendering helpers ----


def parse_task_text(text: str) -> tuple[str, str | None, tuple[int, int] | None]:
    """
    "<title> [| <description>] [@HH:MM]" -> (title, description or None, (h, m) or None).

    Raises ValidationError on a malformed time.
    """
    text = text.strip()
    when: tuple[int, int] | None = None

    m = _TIME_RE.search(text)
    if m:
        hour, minute = int(m.group(1)), int(m.group(2))
        if hour > 23 or minute > 59:
            raise ValidationError(f"Invalid time {m.group(1)}:{m.group(2)}. Use @HH:MM (24h).")
        when = (hour, minute)
        text = text[: m.start()].strip()

    if "|" in text:
        title, description = text.split("|", 1)
        return title.strip(), description.strip(), when
    return text, None, when


def _format_time(epoch_millis: int) -> str:
    return from_millis(epoch_millis).strftime("%H:%M")


def render_task_list(state: AppState) -> str:
    tasks = state.task_store.display_order()
    if not tasks:
        return "No tasks yet. Add one with /add <title>."

    c = palette(state.theme.is_dark)
    lines = [f"Tasks ({len(tasks)}):"]
    for row, task in enumerate(tasks, start=1):
        mark = "[x]" if task.is_done else "[ ]"
        style = c["done"] if task.is_done else c["title"]
        line = f"{row:>3}. {mark} {style}{task.title}{c['reset']}"
        if task.description.strip():
            line += f" {c['muted']}- {task.description}{c['reset']}"
        if task.has_reminder:
            line += f" {c['reminder']}(reminder {_format_time(task.scheduled_time_millis)}){c['reset']}"
        lines.append(line)
    return "\n".join(lines)


def _storage_index_for_row(state: AppState, args: list[str]) -> int | None:
    """Display row (1-based, newest first) -> storage index, or None if there is no such row."""
    if not args:
        return None
    try:
        row = int(args[0])
    except ValueError:
        return None
    try:
        return state.task_store.display_to_storage_index(row - 1)
    except NotFoundError:
        return None


def _describe(task: Task) -> str:
    if task.has_reminder:
        return f'"{task.title}" (reminder {_format_time(task.scheduled_time_millis)})'
    return f'"{task.title}"'


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk
    /add Buy milk | 2 litres @09:00
    """
    try:
        title, description, when = parse_task_text(" ".join(args))
        hour, minute = when or (0, 0)
        task = state.task_store.add(title, description or "", hour, minute, when is not None)
    except ValidationError as e:
        return str(e)
    return f"Added {_describe(task)}."


def _set_done(state: AppState, args: list[str], is_done: bool) -> str:
    index = _storage_index_for_row(state, args)
    if index is None:
        return render_task_list(state)
    try:
        task = state.task_store.toggle_done(index, is_done)
    except NotFoundError:
        return render_task_list(state)
    return f'{"Done" if is_done else "Not done"}: "{task.title}".'


def cmd_done(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, True)


def cmd_undone(state: AppState, args: list[str]) -> str:
    return _set_done(state, args, False)


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <row> <title> [| <description>] [@HH:MM]

    Omitted parts keep their current value (the time defaults to the
    current reminder, or to now when the task has none).
    """
    index = _storage_index_for_row(state, args)
    if index is None:
        return render_task_list(state)

    store = state.task_store
    current = store.get(index)
    try:
        title, description, when = parse_task_text(" ".join(args[1:]))
    except ValidationError as e:
        return str(e)

    hour, minute = when or default_edit_time(current, datetime.now())
    try:
        task = store.edit(
            index,
            title or current.title,
            current.description if description is None else description,
            hour,
            minute,
        )
    except (NotFoundError, ValidationError):
        return render_task_list(state)
    return f"Saved {_describe(task)}."


def cmd_rm(state: AppState, args: list[str]) -> str:
    index = _storage_index_for_row(state, args)
    if index is None:
        return render_task_list(state)
    try:
        task = state.task_store.remove(index)
    except NotFoundError:
        return render_task_list(state)
    return f'Removed "{task.title}".'


def cmd_theme(state: AppState, args: list[str]) -> str:
    """
    /theme        -> toggle
    /theme dark   -> dark theme
    /theme light  -> light theme
    """
    if not args:
        state.theme.toggle()
    else:
        arg = args[0].lower()
        if arg in ("dark", "night", "on"):
            state.theme.set_dark(True)
        elif arg in ("light", "day", "off"):
            state.theme.set_dark(False)
        else:
            return "Usage: /theme [light|dark]."
    return f"Theme: {state.theme.name}."


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.task_store.tasks
    done = sum(1 for t in tasks if t.is_done)
    db_path = getattr(state.settings, "db_path", "?")
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({done} done)\n"
        f"  Pending reminders: {len(state.scheduler)}\n"
        f"  Theme: {state.theme.name}\n"
        f"  Storage: {db_path}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks, newest first.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add <title> [| <description>] [@HH:MM]."
)
registry.register("done", cmd_done, help_text="Mark a task done: /done <row>.")
registry.register("undone", cmd_undone, help_text="Mark a task not done: /undone <row>.")
registry.register(
    "edit", cmd_edit, help_text="Edit a task: /edit <row> [<title>] [| <description>] [@HH:MM]."
)
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <row>.", aliases=["del"])
registry.register("theme", cmd_theme, help_text="Toggle theme: /theme [light|dark].")
registry.register("status", cmd_status, help_text="Show task counts, reminders and storage.")
