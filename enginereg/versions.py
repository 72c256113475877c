"""Version normalization, classification and selection utilities."""

import logging
import re
from typing import Protocol, Sequence

from packaging.version import InvalidVersion
from packaging.version import Version as ParsedVersion

from .errors import CorruptedVersionDataError
from .layout import EngineLayout
from .models import (
    InstallState,
    ReleaseChannel,
    RunnableVersion,
    Version,
    VersionSource,
)

_logging = logging.getLogger(__name__)


class HasVersion(Protocol):
    version: str


def normalize_version(version_str: str) -> str:
    """Normalize a loosely formatted tag to its canonical form.

    Strips surrounding whitespace, leading ``v``/``=`` markers and ``+build``
    metadata: ``" v10.1.0+abc "`` becomes ``"10.1.0"``.
    """
    if not version_str:
        return ""

    normalized = version_str.strip()
    normalized = re.sub(r"^[=vV]+", "", normalized)
    return normalized.split("+", 1)[0]


def get_release_channel(value: HasVersion | str) -> ReleaseChannel:
    """Return the release channel for a version or tag.

    A tag carrying both a pre-release marker and "nightly" is beta.
    """
    tag = value if isinstance(value, str) else (value.version or "")

    if "beta" in tag or "alpha" in tag:
        return ReleaseChannel.BETA

    if "nightly" in tag:
        return ReleaseChannel.NIGHTLY

    return ReleaseChannel.STABLE


def get_version_state(ver: Version, layout: EngineLayout) -> InstallState:
    """Get the install state of a version.

    Only local builds whose executable is present on disk right now are
    installed.
    """
    if ver.local_path is not None:
        if layout.exists(layout.exec_path(ver.local_path)):
            return InstallState.INSTALLED

    return InstallState.MISSING


def make_runnable(ver: Version, layout: EngineLayout) -> RunnableVersion:
    return RunnableVersion(
        version=normalize_version(ver.version),
        source=VersionSource.LOCAL if ver.local_path else VersionSource.REMOTE,
        state=get_version_state(ver, layout),
        name=ver.name,
        local_path=ver.local_path,
    )


def _parse_stable(version_str: str) -> ParsedVersion | None:
    try:
        return ParsedVersion(version_str)
    except InvalidVersion:
        _logging.debug(f"Skipping unparseable version: {version_str}")
        return None


def get_default_version(
    candidates: Sequence[HasVersion], preferred: str | None = None
) -> str:
    """Pick the version to pre-select.

    Args:
        candidates: Versions to choose from
        preferred: Previously stored user preference

    Returns:
        The preference if it names a candidate, else the newest stable one

    Raises:
        CorruptedVersionDataError: If no stable candidate exists
    """
    if preferred and any(c.version == preferred for c in candidates):
        return preferred

    stable = []
    for candidate in candidates:
        if "-" in candidate.version:
            continue
        parsed = _parse_stable(candidate.version)
        if parsed is not None:
            stable.append((parsed, candidate.version))

    stable.sort(key=lambda item: item[0], reverse=True)
    if stable:
        return stable[0][1]

    raise CorruptedVersionDataError("Corrupted version data")


__all__ = [
    "normalize_version",
    "get_release_channel",
    "get_version_state",
    "make_runnable",
    "get_default_version",
]
