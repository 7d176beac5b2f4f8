# src/simple_todo/core/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors raised by the task store."""


class ValidationError(TodoError, ValueError):
    """Input rejected before any mutation (e.g. blank title)."""


class NotFoundError(TodoError, IndexError):
    """Index does not reference an existing task."""
