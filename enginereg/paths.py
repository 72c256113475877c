"""Filesystem locations used by enginereg."""

import os
from pathlib import Path


def get_data_dir() -> Path:
    """Return the application data directory.

    Priority:
    1. ENGINEREG_HOME environment variable (if set)
    2. ~/.config/enginereg (default XDG location)
    """
    if "ENGINEREG_HOME" in os.environ:
        return Path(os.environ["ENGINEREG_HOME"])
    return Path.home() / ".config" / "enginereg"


def get_store_path() -> Path:
    """Return path to the key/value store file."""
    return get_data_dir() / "store.json"


def get_settings_path() -> Path:
    """Return path to the optional user settings file."""
    return get_data_dir() / "settings.json"


def get_packaged_releases_path() -> Path:
    """Return path to the bundled releases seed (read-only fallback)"""
    return Path(__file__).parent / "data" / "releases.json"
