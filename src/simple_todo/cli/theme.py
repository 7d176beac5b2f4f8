# src/simple_todo/cli/theme.py

"""Light/dark theme flag and console palette.

The flag is a presentation setting: it is stored through the same key-value
store as tasks, under its own namespace, and the task core never reads it.
"""

from __future__ import annotations

import logging
import os
import sys

from ..core.ports import KeyValueStore

logger = logging.getLogger(__name__)

THEME_NAMESPACE = "theme_prefs"
DARK_KEY = "is_dark_theme"


class ThemeSettings:
    def __init__(self, kv: KeyValueStore) -> None:
        self._kv = kv
        raw = kv.get(THEME_NAMESPACE, DARK_KEY)
        self._is_dark = (raw or "").strip().lower() == "true"

    @property
    def is_dark(self) -> bool:
        return self._is_dark

    @property
    def name(self) -> str:
        return "dark" if self._is_dark else "light"

    def set_dark(self, is_dark: bool) -> None:
        self._kv.set(THEME_NAMESPACE, DARK_KEY, "true" if is_dark else "false")
        self._is_dark = bool(is_dark)
        logger.debug("Theme set to %s", self.name)

    def toggle(self) -> bool:
        self.set_dark(not self._is_dark)
        return self._is_dark


def colors_enabled() -> bool:
    if os.environ.get("NO_COLOR") is not None:
        return False
    return sys.stdout.isatty()


# (title, done, reminder, muted)
_DARK = ("\033[97m", "\033[2;37m", "\033[96m", "\033[90m")
_LIGHT = ("\033[30m", "\033[2;90m", "\033[34m", "\033[37m")

RESET = "\033[0m"


def palette(is_dark: bool, *, enabled: bool | None = None) -> dict[str, str]:
    """ANSI styles for list rendering; all empty when colors are off."""
    if enabled is None:
        enabled = colors_enabled()
    keys = ("title", "done", "reminder", "muted")
    if not enabled:
        return {k: "" for k in (*keys, "reset")}
    styles = dict(zip(keys, _DARK if is_dark else _LIGHT))
    styles["reset"] = RESET
    return styles
