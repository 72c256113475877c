"""Data models for engine versions."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class VersionSource(Enum):
    LOCAL = "local"
    REMOTE = "remote"


class InstallState(Enum):
    INSTALLED = "installed"
    MISSING = "missing"


class ReleaseChannel(Enum):
    STABLE = "stable"
    BETA = "beta"
    NIGHTLY = "nightly"


@dataclass
class Version:
    """A known or user-added engine version.

    ``local_path`` is the root directory of a local build. Catalog entries
    never carry one.
    """
    version: str
    name: str | None = None
    local_path: str | None = None

    def to_dict(self) -> dict[str, str]:
        data = {"version": self.version}
        if self.name is not None:
            data["name"] = self.name
        if self.local_path is not None:
            data["localPath"] = self.local_path
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Version":
        return cls(
            version=data["version"],
            name=data.get("name"),
            local_path=data.get("localPath"),
        )


@dataclass
class RunnableVersion:
    """A Version annotated with its source and install state.

    Always derived from a Version during assembly; ``source`` is the
    discriminant that separates it from a plain Version.
    """
    version: str
    source: VersionSource
    state: InstallState
    name: str | None = None
    local_path: str | None = None

    def to_version(self) -> Version:
        return Version(version=self.version, name=self.name, local_path=self.local_path)


@dataclass
class ReleaseInfo:
    """Catalog metadata for a single released version."""
    version: str
    date: str | None = None
    node: str | None = None
    chrome: str | None = None
    v8: str | None = None
    modules: str | None = None
    files: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "date": self.date,
            "node": self.node,
            "chrome": self.chrome,
            "v8": self.v8,
            "modules": self.modules,
            "files": list(self.files),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ReleaseInfo":
        files = data.get("files")
        return cls(
            version=str(data["version"]),
            date=data.get("date"),
            node=data.get("node"),
            chrome=data.get("chrome"),
            v8=data.get("v8"),
            modules=data.get("modules"),
            files=[str(f) for f in files] if isinstance(files, list) else [],
        )


__all__ = [
    "VersionSource",
    "InstallState",
    "ReleaseChannel",
    "Version",
    "RunnableVersion",
    "ReleaseInfo",
]
