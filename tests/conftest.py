"""Pytest fixtures and utilities for enginereg tests."""

import json
import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest

from enginereg.catalog import ReleaseCatalog
from enginereg.config import Settings
from enginereg.layout import EngineLayout
from enginereg.registry import VersionRegistry
from enginereg.store import MemoryStore, VersionStore


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def version_store(memory_store: MemoryStore) -> VersionStore:
    return VersionStore(memory_store)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def layout() -> EngineLayout:
    """Linux layout: the executable is <root>/electron."""
    return EngineLayout(platform="linux")


@pytest.fixture
def make_build(temp_dir: Path) -> Callable[..., str]:
    """Factory creating a local build directory, optionally with its executable."""

    def _create(name: str, with_executable: bool = True) -> str:
        root = temp_dir / "builds" / name
        root.mkdir(parents=True, exist_ok=True)
        if with_executable:
            (root / "electron").write_text("#!/bin/sh\n")
        return str(root)

    return _create


@pytest.fixture
def write_seed(temp_dir: Path) -> Callable[[list[str]], Path]:
    """Factory writing a bundled releases seed containing the given versions."""

    def _write(versions: list[str]) -> Path:
        path = temp_dir / "releases.json"
        path.write_text(
            json.dumps([{"version": v, "node": "20.0.0"} for v in versions])
        )
        return path

    return _write


@pytest.fixture
def make_registry(
    version_store: VersionStore,
    settings: Settings,
    layout: EngineLayout,
    write_seed: Callable[[list[str]], Path],
) -> Callable[..., VersionRegistry]:
    """Factory for a registry whose catalog is seeded with ``known`` versions."""

    def _create(known: list[str], branch_count: int | None = None) -> VersionRegistry:
        registry_settings = settings
        if branch_count is not None:
            registry_settings = Settings(supported_branch_count=branch_count)
        catalog = ReleaseCatalog(
            version_store, registry_settings, seed_path=write_seed(known)
        )
        return VersionRegistry(version_store, catalog, registry_settings, layout)

    return _create
