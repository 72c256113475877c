"""Remote release catalog.

The catalog is the ordered list of engine releases published in the
releases feed. It is seeded from a bundled copy of the feed, cached in the
store, and replaced wholesale by ``refresh_known_versions``.
"""

import json
import logging
from pathlib import Path
from typing import Any

from .config import Settings
from .execution import fetch_url
from .models import ReleaseInfo, Version
from .paths import get_packaged_releases_path
from .store import RELEASE_INFO_KEY, VersionKeys, VersionStore
from .versions import normalize_version

_logging = logging.getLogger(__name__)


def parse_releases(data: Any) -> list[ReleaseInfo]:
    """Parse a releases feed into ReleaseInfo records, keeping feed order.

    Raises:
        ValueError: If the feed is not a JSON array
    """
    if not isinstance(data, list):
        raise ValueError(f"Releases feed must be an array, got {type(data).__name__}")

    releases = []
    for i, entry in enumerate(data):
        if not isinstance(entry, dict) or not isinstance(entry.get("version"), str) or not entry["version"]:
            _logging.debug(f"Skipping malformed release entry at index {i}")
            continue
        releases.append(ReleaseInfo.from_dict(entry))
    return releases


class ReleaseCatalog:
    """Known engine releases, backed by the store and the releases feed."""

    def __init__(
        self,
        store: VersionStore,
        settings: Settings,
        seed_path: Path | None = None,
    ):
        self.store = store
        self.settings = settings
        self.seed_path = seed_path or get_packaged_releases_path()
        self._known: list[Version] | None = None
        self._release_info: dict[str, ReleaseInfo] | None = None
        self._seed: list[ReleaseInfo] | None = None

    def _load_seed(self) -> list[ReleaseInfo]:
        if self._seed is None:
            try:
                self._seed = parse_releases(
                    json.loads(self.seed_path.read_text(encoding="utf-8"))
                )
            except (OSError, ValueError) as e:
                _logging.warning(f"Could not read bundled releases {self.seed_path}: {e}")
                self._seed = []
        return self._seed

    def _seed_versions(self) -> list[Version]:
        return [Version(version=release.version) for release in self._load_seed()]

    def known(self) -> list[Version]:
        if self._known is None:
            self._known = self.store.load(VersionKeys.KNOWN, self._seed_versions)
        return self._known

    def get_known_versions(self) -> list[str]:
        return [ver.version for ver in self.known()]

    async def refresh_known_versions(self) -> list[str]:
        """Re-fetch the releases feed and replace the cached catalog.

        On any failure the current catalog is kept and returned.
        """
        body, status = await fetch_url(
            self.settings.releases_url, timeout=self.settings.fetch_timeout
        )
        if body is None:
            _logging.warning(f"Refreshing engine versions failed: {status}")
            return self.get_known_versions()

        try:
            releases = parse_releases(json.loads(body))
        except ValueError as e:
            _logging.warning(f"Releases feed from {self.settings.releases_url} is invalid: {e}")
            return self.get_known_versions()

        if not releases:
            _logging.warning("Releases feed is empty, keeping cached versions")
            return self.get_known_versions()

        self._known = [Version(version=release.version) for release in releases]
        self._release_info = self._index(releases)
        self.store.save(VersionKeys.KNOWN, self._known)
        self.store.save_json(RELEASE_INFO_KEY, [release.to_dict() for release in releases])

        _logging.info(f"Fetched {len(self._known)} engine versions")
        return self.get_known_versions()

    @staticmethod
    def _index(releases: list[ReleaseInfo]) -> dict[str, ReleaseInfo]:
        return {normalize_version(release.version): release for release in releases}

    def _release_index(self) -> dict[str, ReleaseInfo]:
        if self._release_info is None:
            stored = self.store.load_json(RELEASE_INFO_KEY)
            releases: list[ReleaseInfo] = []
            if stored is not None:
                try:
                    releases = parse_releases(stored)
                except ValueError as e:
                    _logging.warning(f"Stored release info is invalid: {e}")
            self._release_info = self._index(releases or self._load_seed())
        return self._release_info

    def get_release_info(self, version: str) -> ReleaseInfo | None:
        return self._release_index().get(normalize_version(version))
