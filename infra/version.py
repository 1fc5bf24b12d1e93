from __future__ import annotations

import os
from importlib import metadata


_DEFAULT_APP_VERSION = "0.1.0"
_DISTRIBUTION_NAME = "tender-planning-cpm"


def get_app_version() -> str:
    env_override = (os.getenv("CPM_APP_VERSION") or "").strip()
    if env_override:
        return env_override

    try:
        return metadata.version(_DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return _DEFAULT_APP_VERSION


__all__ = ["get_app_version"]
