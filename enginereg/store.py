"""Persistence for catalog and local version records.

Two record sets are stored under independent keys: the catalog cache
(always re-derivable from the releases feed) and the user's local builds
(only ever written by user action). Broken catalog data is treated as a
cache miss; broken local data is migrated and rewritten on read.
"""

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Sequence

from .migration import (
    CURRENT_SCHEMA,
    UnknownSchemaError,
    is_expected_format,
    migrate,
    unwrap,
    wrap,
)
from .models import RunnableVersion, Version, VersionSource

_logging = logging.getLogger(__name__)


class VersionKeys(Enum):
    LOCAL = "local-engine-versions"
    KNOWN = "known-engine-versions"


PREFERENCE_KEY = "version"
RELEASE_INFO_KEY = "engine-release-info"


class KeyValueStore(ABC):
    """String key/value storage."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class MemoryStore(KeyValueStore):
    def __init__(self, initial: dict[str, str] | None = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileStore(KeyValueStore):
    """Key/value store kept in a single JSON object file.

    The file is re-read on every ``get`` and replaced atomically on every
    ``set``. An unreadable file behaves like an empty store.
    """

    def __init__(self, path: Path):
        self.path = path

    def _read(self) -> dict[str, str]:
        try:
            text = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as e:
            _logging.warning(f"Could not read store {self.path}: {e}")
            return {}

        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            _logging.warning(f"Store {self.path} is not valid JSON: {e}")
            return {}

        if not isinstance(data, dict):
            _logging.warning(f"Store {self.path} is not a JSON object, ignoring it")
            return {}
        return {k: v for k, v in data.items() if isinstance(v, str)}

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".store-")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
                f.write("\n")
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise


def serialize_versions(versions: Sequence[Version]) -> str:
    entries = [ver.to_dict() for ver in versions]
    return json.dumps(wrap(entries), indent=2, sort_keys=True)


class VersionStore:
    """Loads and saves version record sets on top of a KeyValueStore."""

    def __init__(self, backend: KeyValueStore):
        self.backend = backend

    def load(
        self, key: VersionKeys, fallback: Callable[[], list[Version]]
    ) -> list[Version]:
        """Load the record set stored under ``key``.

        Never raises for bad data: absent, unparsable and invalid catalog
        payloads return ``fallback()``. Invalid local payloads are migrated
        and written back before being returned.
        """
        raw = self.backend.get(key.value)
        if raw is None:
            _logging.debug(f"No stored data for {key.value}, using fallback")
            return fallback()

        try:
            schema, entries = unwrap(json.loads(raw))
        except (json.JSONDecodeError, UnknownSchemaError) as e:
            _logging.warning(
                f"Parsing stored {key.value} failed, returning fallback: {e}"
            )
            return fallback()

        if is_expected_format(entries):
            versions = [Version.from_dict(entry) for entry in entries]
            if key is VersionKeys.LOCAL and schema < CURRENT_SCHEMA:
                _logging.info(f"Upgrading {key.value} to schema {CURRENT_SCHEMA}")
                self.save(key, versions)
            return versions

        if key is VersionKeys.KNOWN:
            # Catalog data can always be fetched again.
            _logging.warning(
                f"Stored {key.value} does not match expected format, returning fallback"
            )
            return fallback()

        try:
            migrated = migrate(schema, entries)
        except UnknownSchemaError as e:
            _logging.warning(f"Could not migrate {key.value}: {e}")
            return fallback()

        versions = [Version.from_dict(entry) for entry in migrated]
        self.save(key, versions)
        return versions

    def save(
        self, key: VersionKeys, versions: Sequence[Version | RunnableVersion]
    ) -> None:
        """Overwrite the record set stored under ``key``.

        Runnable versions from a remote source never reach the local store.
        """
        kept: list[Version] = []
        for ver in versions:
            if isinstance(ver, RunnableVersion):
                if key is VersionKeys.LOCAL and ver.source is not VersionSource.LOCAL:
                    continue
                ver = ver.to_version()
            kept.append(ver)

        self.backend.set(key.value, serialize_versions(kept))

    def get_preference(self) -> str | None:
        return self.backend.get(PREFERENCE_KEY)

    def set_preference(self, version: str) -> None:
        self.backend.set(PREFERENCE_KEY, version)

    def load_json(self, key: str) -> Any:
        """Load an auxiliary JSON value, returning None when absent or broken."""
        raw = self.backend.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            _logging.warning(f"Stored {key} is not valid JSON: {e}")
            return None

    def save_json(self, key: str, value: Any) -> None:
        self.backend.set(key, json.dumps(value, indent=2, sort_keys=True))


__all__ = [
    "VersionKeys",
    "PREFERENCE_KEY",
    "RELEASE_INFO_KEY",
    "KeyValueStore",
    "MemoryStore",
    "JsonFileStore",
    "VersionStore",
    "serialize_versions",
]
