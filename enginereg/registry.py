"""Version registry: the session-owned view of known and local versions.

A ``VersionRegistry`` is created once per application session. It loads the
local entries lazily on first use, keeps them in memory, and writes them
back on every mutation. Install state is never cached: each assembly checks
the disk again.
"""

import logging
import re
from dataclasses import replace

from .catalog import ReleaseCatalog
from .config import Settings, load_settings
from .layout import EngineLayout
from .models import ReleaseInfo, RunnableVersion, Version
from .paths import get_store_path
from .store import JsonFileStore, VersionKeys, VersionStore
from .versions import get_default_version, make_runnable

_logging = logging.getLogger(__name__)


class VersionRegistry:
    def __init__(
        self,
        store: VersionStore,
        catalog: ReleaseCatalog,
        settings: Settings,
        layout: EngineLayout | None = None,
    ):
        self.store = store
        self.catalog = catalog
        self.settings = settings
        self.layout = layout or EngineLayout()
        self._local: list[Version] | None = None

    def get_local_versions(self) -> list[Version]:
        """Local versions configured by the user, in order of addition."""
        if self._local is None:
            self._local = self.store.load(VersionKeys.LOCAL, list)
        return list(self._local)

    def save_local_versions(self, versions: list[Version | RunnableVersion]) -> None:
        self.store.save(VersionKeys.LOCAL, versions)
        self._local = None

    def add_local_version(self, ver: Version) -> list[Version]:
        """Register a local build; a path that is already registered is kept as is.

        Returns:
            The updated list of local versions
        """
        if not ver.local_path:
            raise ValueError("local version must have a local_path")

        versions = self.get_local_versions()
        if not any(v.local_path == ver.local_path for v in versions):
            versions.append(replace(ver))
            _logging.info(f"Added local version {ver.version} at {ver.local_path}")
        else:
            _logging.debug(f"Local build at {ver.local_path} already registered")

        self.save_local_versions(versions)
        return self.get_local_versions()

    def remove_local_version(self, folder_path: str) -> list[Version]:
        versions = self.get_local_versions()
        remaining = [v for v in versions if v.local_path != folder_path]
        if len(remaining) != len(versions):
            _logging.info(f"Removed local version at {folder_path}")
        self.save_local_versions(remaining)
        return self.get_local_versions()

    def find_local_version_by_path(self, folder_path: str) -> Version | None:
        for ver in self.get_local_versions():
            if ver.local_path == folder_path:
                return ver
        return None

    def get_released_versions(self) -> list[Version]:
        return [Version(version=v) for v in self.catalog.get_known_versions()]

    async def fetch_versions(self) -> list[Version]:
        """Refresh the catalog from the releases feed."""
        versions = [
            Version(version=v) for v in await self.catalog.refresh_known_versions()
        ]
        _logging.info(f"Catalog holds {len(versions)} engine versions")
        return versions

    def assemble(self) -> list[RunnableVersion]:
        """Return catalog versions followed by local versions, annotated.

        Duplicates across the two sources are kept.
        """
        versions = self.get_released_versions() + self.get_local_versions()
        return [make_runnable(ver, self.layout) for ver in versions]

    def default_version(self, candidates: list[RunnableVersion]) -> str:
        """The stored preference if it is a candidate, else the newest stable.

        Raises:
            CorruptedVersionDataError: If no stable candidate exists
        """
        return get_default_version(candidates, self.store.get_preference())

    def set_preferred_version(self, version: str) -> None:
        self.store.set_preference(version)

    def is_released_major(self, major: int) -> bool:
        """Whether any catalog release belongs to the given major.

        Local builds can use majors that were never released, e.g. 999.0.0.
        """
        prefix = f"{major}."
        return any(v.startswith(prefix) for v in self.catalog.get_known_versions())

    def oldest_supported_major(self) -> int | None:
        """Oldest major still inside the supported branch window.

        Returns None when the catalog has fewer branches than the window.
        """
        majors = []
        for version in self.catalog.get_known_versions():
            if not version.endswith(".0.0"):
                continue
            match = re.match(r"\d+", version)
            if match:
                majors.append(int(match.group(0)))

        majors.sort()
        index = len(majors) - self.settings.supported_branch_count
        if index < 0:
            return None
        return majors[index]

    def release_info(self, ver: Version | RunnableVersion) -> ReleaseInfo | None:
        return self.catalog.get_release_info(ver.version)


def open_registry(settings: Settings | None = None) -> VersionRegistry:
    """Create a registry backed by the user's data directory."""
    settings = settings or load_settings()
    store = VersionStore(JsonFileStore(get_store_path()))
    catalog = ReleaseCatalog(store, settings)
    return VersionRegistry(store, catalog, settings)


__all__ = ["VersionRegistry", "open_registry"]
