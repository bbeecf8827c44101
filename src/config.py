"""Settings loaded from environment variables (+ optional project .env).

Real environment variables win over .env entries.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from storage import STORAGE_KEY

PROJECT_ROOT = Path(__file__).resolve().parent.parent
ENV_PREFIX = "TRACKER"

load_dotenv(PROJECT_ROOT / '.env', override=False)


def _k(suffix: str) -> str:
    return f"{ENV_PREFIX}_{suffix}"


def truthy_env(value: Optional[str], default: bool = True) -> bool:
    if value is None:
        return default
    return value.strip().lower() not in {"0", "false", "no", "off", ""}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_level(name: str, default: int) -> int:
    raw = (os.getenv(name) or "").strip().upper()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    storage_key: str = STORAGE_KEY
    alt_screen: bool = True
    log_level: int = logging.WARNING

    @property
    def log_file(self) -> Path:
        return self.data_dir / 'tracker.log'


def load_settings() -> Settings:
    return Settings(
        data_dir=_env_path(_k("DATA_DIR"), PROJECT_ROOT / 'data'),
        storage_key=(os.getenv(_k("STORAGE_KEY")) or "").strip() or STORAGE_KEY,
        alt_screen=truthy_env(os.getenv(_k("ALT_SCREEN")), True),
        log_level=_env_level(_k("LOG_LEVEL"), logging.WARNING),
    )
