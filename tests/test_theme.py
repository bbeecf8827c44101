# tests/test_theme.py

from __future__ import annotations

import pytest

import theme


def test_resolve_hex_accepts_valid_override(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_OVERDUE", "ff0000")
    assert theme.resolve_hex("TRACKER_OVERDUE", "#E36B6B") == "#ff0000"


@pytest.mark.parametrize("raw", ["", "red", "#12345", "#GGGGGG"])
def test_resolve_hex_rejects_bad_override(monkeypatch: pytest.MonkeyPatch, raw: str) -> None:
    monkeypatch.setenv("TRACKER_OVERDUE", raw)
    assert theme.resolve_hex("TRACKER_OVERDUE", "#E36B6B") == "#E36B6B"


def test_foreground_and_color_when_disabled(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(theme, "ENABLED", False)
    assert theme.foreground("#A7E399") == ""
    assert theme.color("done", "\033[1m") == "done"


def test_foreground_256_and_truecolor(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(theme, "ENABLED", True)
    monkeypatch.setattr(theme, "TRUECOLOR", False)
    assert theme.foreground("#FFFFFF") == "\033[38;5;231m"
    monkeypatch.setattr(theme, "TRUECOLOR", True)
    assert theme.foreground("#476EAE") == "\033[38;2;71;110;174m"
    assert theme.color("x", "\033[1m") == "\033[1mx\033[0m"
