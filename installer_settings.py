"""
Persisted installer settings.

The only setting today is where Hacknet Pathfinder was found when the game
was set up; it feeds the "Pathfinder not installed" advisory.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from hacknet_game import DEFAULT_PATHFINDER_EXE, pathfinder_exe_for

APP_DIR_NAME = "HacknetModInstaller"
SETTINGS_FILENAME = "settings.json"

_log = logging.getLogger(__name__)


def app_data_dir() -> Path:
    return Path(os.environ.get("APPDATA", "~")).expanduser() / APP_DIR_NAME


def default_settings_path() -> Path:
    return app_data_dir() / SETTINGS_FILENAME


class InstallerSettings(BaseModel):
    pathfinder_exe: str = DEFAULT_PATHFINDER_EXE

    @field_validator("pathfinder_exe")
    @classmethod
    def _not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("pathfinder_exe must not be blank")
        return v

    @classmethod
    def for_game_path(cls, game_path: str | Path) -> InstallerSettings:
        """Settings for a game directory found on disk."""
        return cls(pathfinder_exe=str(pathfinder_exe_for(game_path)))


def load_settings(path: str | Path | None = None) -> InstallerSettings:
    """Read settings from ``path``; a missing or broken file yields defaults."""
    path = Path(path) if path is not None else default_settings_path()
    if not path.exists():
        return InstallerSettings()
    try:
        return InstallerSettings.model_validate(json.loads(path.read_text(encoding="utf-8")))
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        _log.warning("Could not load settings from %s: %s", path, exc)
        return InstallerSettings()


def save_settings(settings: InstallerSettings, path: str | Path | None = None) -> Path:
    path = Path(path) if path is not None else default_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(settings.model_dump(), indent=2, ensure_ascii=False), encoding="utf-8"
    )
    return path
