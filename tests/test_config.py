# tests/test_config.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from config import PROJECT_ROOT, load_settings, truthy_env
from storage import STORAGE_KEY


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("TRACKER_DATA_DIR", "TRACKER_STORAGE_KEY", "TRACKER_ALT_SCREEN", "TRACKER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    settings = load_settings()
    assert settings.data_dir == PROJECT_ROOT / "data"
    assert settings.storage_key == STORAGE_KEY
    assert settings.alt_screen is True
    assert settings.log_level == logging.WARNING
    assert settings.log_file == PROJECT_ROOT / "data" / "tracker.log"


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TRACKER_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TRACKER_STORAGE_KEY", "other_key")
    monkeypatch.setenv("TRACKER_ALT_SCREEN", "off")
    monkeypatch.setenv("TRACKER_LOG_LEVEL", "debug")
    settings = load_settings()
    assert settings.data_dir == tmp_path
    assert settings.storage_key == "other_key"
    assert settings.alt_screen is False
    assert settings.log_level == logging.DEBUG


def test_unknown_log_level_falls_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_LOG_LEVEL", "chatty")
    assert load_settings().log_level == logging.WARNING


@pytest.mark.parametrize("raw,expected", [(None, True), ("0", False), ("no", False), ("yes", True), ("", False)])
def test_truthy_env(raw: str | None, expected: bool) -> None:
    assert truthy_env(raw) is expected
