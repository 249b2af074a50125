from __future__ import annotations

import os
from pathlib import Path

from platformdirs import PlatformDirs

APP_NAME = "wellrng"
RUNTIME_DIR_ENV = "WELLRNG_RUNTIME_DIR"


def _app_dirs() -> PlatformDirs:
    return PlatformDirs(appname=APP_NAME, appauthor=False)


def default_runtime_dir() -> Path:
    override = os.environ.get(RUNTIME_DIR_ENV)
    if override:
        return Path(override).expanduser().resolve()
    return Path(_app_dirs().user_data_path)


__all__ = [
    "APP_NAME",
    "RUNTIME_DIR_ENV",
    "default_runtime_dir",
]
