# src/focuslist/config.py

"""Settings from FOCUSLIST_* environment variables, with an optional .env in the working directory.

Every value has a local default, so a bare checkout runs with no configuration.
Paths derived from FOCUSLIST_DATA_DIR follow it unless set explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "FOCUSLIST_"
DEFAULT_DATA_DIR = Path(".local/focuslist")
SNAPSHOT_FILE_NAME = "tasks.json"

_TRUE = frozenset({"1", "true", "yes", "y", "on"})
_FALSE = frozenset({"0", "false", "no", "n", "off"})
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Real environment wins over .env.
load_dotenv(override=False)


def _raw(suffix: str) -> str | None:
    value = os.getenv(ENV_PREFIX + suffix)
    if value is None or not value.strip():
        return None
    return value.strip()


def _str_setting(suffix: str, default: str) -> str:
    return _raw(suffix) or default


def _flag_setting(suffix: str, default: bool) -> bool:
    raw = _raw(suffix)
    if raw is None:
        return default
    low = raw.lower()
    if low in _TRUE:
        return True
    if low in _FALSE:
        return False
    raise ValueError(f"{ENV_PREFIX}{suffix} must be a boolean, got {raw!r}")


def _path_setting(suffix: str, default: Path) -> Path:
    raw = _raw(suffix)
    return default if raw is None else Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    app_name: str
    log_level: str

    # ---- files ----
    data_dir: Path
    snapshot_path: Path
    export_dir: Path

    # Off: only the shutdown save writes the snapshot.
    save_on_mutation: bool

    @staticmethod
    def from_env() -> "Settings":
        log_level = _str_setting("LOG_LEVEL", "WARNING").upper()
        if log_level not in _LOG_LEVELS:
            raise ValueError(f"{ENV_PREFIX}LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}")

        data_dir = _path_setting("DATA_DIR", DEFAULT_DATA_DIR)
        return Settings(
            app_name=_str_setting("APP_NAME", "focuslist"),
            log_level=log_level,
            data_dir=data_dir,
            snapshot_path=_path_setting("SNAPSHOT_PATH", data_dir / SNAPSHOT_FILE_NAME),
            export_dir=_path_setting("EXPORT_DIR", data_dir),
            save_on_mutation=_flag_setting("SAVE_ON_MUTATION", True),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
