"""Registry of known and locally available engine versions."""

import logging

from .catalog import ReleaseCatalog, parse_releases
from .config import ConfigError, Settings, load_settings
from .errors import CorruptedVersionDataError, format_error, format_suggestion
from .layout import EngineLayout
from .models import (
    InstallState,
    ReleaseChannel,
    ReleaseInfo,
    RunnableVersion,
    Version,
    VersionSource,
)
from .registry import VersionRegistry, open_registry
from .store import JsonFileStore, MemoryStore, VersionKeys, VersionStore
from .versions import (
    get_default_version,
    get_release_channel,
    get_version_state,
    make_runnable,
    normalize_version,
)

__version__ = "0.1.0"


def setup_logging(debug: bool = False) -> None:
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


__all__ = [
    "ConfigError",
    "CorruptedVersionDataError",
    "EngineLayout",
    "InstallState",
    "JsonFileStore",
    "MemoryStore",
    "ReleaseCatalog",
    "ReleaseChannel",
    "ReleaseInfo",
    "RunnableVersion",
    "Settings",
    "Version",
    "VersionKeys",
    "VersionRegistry",
    "VersionSource",
    "VersionStore",
    "format_error",
    "format_suggestion",
    "get_default_version",
    "get_release_channel",
    "get_version_state",
    "load_settings",
    "make_runnable",
    "normalize_version",
    "open_registry",
    "parse_releases",
    "setup_logging",
]
