"""Runtime configuration for sigillum.

The only persisted state is the key pair file. Its directory follows the
per-user application data layout of each platform and can be redirected
with the ``SIGILLUM_DATA_DIR`` environment variable.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

APP_IDENTIFIER = "com.sigillum.app"
KEY_FILENAME = "keypair.json"
DATA_DIR_ENV = "SIGILLUM_DATA_DIR"


@dataclass(slots=True)
class Settings:
    """Resolved locations used by the key store."""

    data_dir: Path
    key_filename: str = KEY_FILENAME

    @property
    def key_path(self) -> Path:
        return self.data_dir / self.key_filename


def default_data_dir(
    platform: str | None = None,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Return the per-user data directory for *platform*."""

    platform = platform or sys.platform
    environ = os.environ if environ is None else environ

    override = environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()

    if platform.startswith("win"):
        appdata = environ.get("APPDATA")
        base = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
    elif platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        base = Path.home() / ".local" / "share"
    return base / APP_IDENTIFIER


def load_settings(data_dir: str | Path | None = None) -> Settings:
    if data_dir is not None:
        return Settings(data_dir=Path(data_dir).expanduser())
    return Settings(data_dir=default_data_dir())


__all__ = [
    "APP_IDENTIFIER",
    "KEY_FILENAME",
    "DATA_DIR_ENV",
    "Settings",
    "default_data_dir",
    "load_settings",
]
