# infra/path.py
from __future__ import annotations
import os
import sys
from pathlib import Path

APP_NAME = "TenderPlanningCPM"
COMPANY_NAME = "Aanbesteding"
LOG_FILE_NAME = "cpm.log"


def _platform_data_root() -> Path:
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.getenv("XDG_DATA_HOME", Path.home() / ".local" / "share"))


def user_data_dir() -> Path:
    """
    Directory for the scheduler's own files; project snapshots live wherever
    the user keeps them and are never written here.

    Layout:
        <root>/Aanbesteding/TenderPlanningCPM/
            logs/cpm.log        rotating log written by infra.logging_config

    <root> is %APPDATA% on Windows, ~/Library/Application Support on macOS
    and $XDG_DATA_HOME (default ~/.local/share) elsewhere. CPM_DATA_DIR
    replaces the whole path.
    """
    override = (os.getenv("CPM_DATA_DIR") or "").strip()
    path = Path(override).expanduser() if override else _platform_data_root() / COMPANY_NAME / APP_NAME
    try:
        path.mkdir(parents=True, exist_ok=True)
        return path
    except OSError:
        # Read-only or missing profile: fall back to a dot directory in home
        fallback = Path.home() / f".{APP_NAME}"
        fallback.mkdir(parents=True, exist_ok=True)
        return fallback


def log_dir() -> Path:
    return user_data_dir() / "logs"


def default_log_path() -> Path:
    return log_dir() / LOG_FILE_NAME
