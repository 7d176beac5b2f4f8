# tests/test_theme.py

from __future__ import annotations

from simple_todo.cli.theme import DARK_KEY, THEME_NAMESPACE, ThemeSettings, palette

from .fakes import InMemoryKeyValueStore


def test_default_is_light() -> None:
    assert ThemeSettings(InMemoryKeyValueStore()).is_dark is False


def test_toggle_persists_under_own_namespace() -> None:
    kv = InMemoryKeyValueStore()
    theme = ThemeSettings(kv)

    assert theme.toggle() is True
    assert kv.get(THEME_NAMESPACE, DARK_KEY) == "true"
    assert ThemeSettings(kv).is_dark is True

    assert theme.toggle() is False
    assert kv.get(THEME_NAMESPACE, DARK_KEY) == "false"
    assert list(kv.data) == [(THEME_NAMESPACE, DARK_KEY)]


def test_palette_disabled_is_plain() -> None:
    styles = palette(True, enabled=False)
    assert set(styles.values()) == {""}
    assert "reset" in styles


def test_palette_differs_by_theme() -> None:
    dark = palette(True, enabled=True)
    light = palette(False, enabled=True)
    assert dark["title"] != light["title"]
    assert dark["reset"] == light["reset"] == "\033[0m"
