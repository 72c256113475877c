"""Tests for version utilities."""

import os

import pytest

from enginereg.errors import CorruptedVersionDataError
from enginereg.models import (
    InstallState,
    ReleaseChannel,
    RunnableVersion,
    Version,
    VersionSource,
)
from enginereg.versions import (
    get_default_version,
    get_release_channel,
    get_version_state,
    make_runnable,
    normalize_version,
)


def _candidates(*versions: str) -> list[Version]:
    return [Version(version=v) for v in versions]


class TestNormalizeVersion:
    """Tests for normalize_version function."""

    def test_plain_version_unchanged(self):
        assert normalize_version("10.0.0") == "10.0.0"

    def test_leading_v_removed(self):
        assert normalize_version("v10.0.0") == "10.0.0"

    def test_build_metadata_removed(self):
        assert normalize_version("10.0.0+build.42") == "10.0.0"

    def test_prerelease_kept(self):
        assert normalize_version(" v11.0.0-beta.1 ") == "11.0.0-beta.1"

    def test_empty_string(self):
        assert normalize_version("") == ""


class TestGetReleaseChannel:
    """Tests for get_release_channel function."""

    def test_beta(self):
        assert get_release_channel("10.0.0-beta.1") is ReleaseChannel.BETA

    def test_alpha_is_beta(self):
        assert get_release_channel("10.0.0-alpha.3") is ReleaseChannel.BETA

    def test_nightly(self):
        assert get_release_channel("10.0.0-nightly.1") is ReleaseChannel.NIGHTLY

    def test_stable(self):
        assert get_release_channel("10.0.0") is ReleaseChannel.STABLE

    def test_prerelease_marker_wins_over_nightly(self):
        """A tag with both alpha and nightly tokens resolves to beta."""
        assert get_release_channel("10.0.0-alpha-nightly") is ReleaseChannel.BETA

    def test_accepts_version_objects(self):
        assert get_release_channel(Version(version="12.0.0-beta.2")) is ReleaseChannel.BETA


class TestGetVersionState:
    """Tests for get_version_state function."""

    def test_local_build_with_executable_is_installed(self, layout, make_build):
        ver = Version(version="12.0.0", local_path=make_build("good"))
        assert get_version_state(ver, layout) is InstallState.INSTALLED

    def test_local_build_without_executable_is_missing(self, layout, make_build):
        ver = Version(version="12.0.0", local_path=make_build("empty", with_executable=False))
        assert get_version_state(ver, layout) is InstallState.MISSING

    def test_remote_version_is_always_missing(self, layout):
        assert get_version_state(Version(version="12.0.0"), layout) is InstallState.MISSING

    def test_reflects_current_disk_state(self, layout, make_build):
        """Removing the executable between checks is observed immediately."""
        root = make_build("transient")
        ver = Version(version="12.0.0", local_path=root)
        assert get_version_state(ver, layout) is InstallState.INSTALLED

        os.remove(layout.exec_path(root))
        assert get_version_state(ver, layout) is InstallState.MISSING


class TestMakeRunnable:
    """Tests for make_runnable function."""

    def test_remote_version(self, layout):
        runnable = make_runnable(Version(version="v10.0.0"), layout)
        assert runnable == RunnableVersion(
            version="10.0.0",
            source=VersionSource.REMOTE,
            state=InstallState.MISSING,
        )

    def test_local_version(self, layout, make_build):
        root = make_build("local")
        runnable = make_runnable(
            Version(version="13.0.0-local", name="my build", local_path=root), layout
        )
        assert runnable.source is VersionSource.LOCAL
        assert runnable.state is InstallState.INSTALLED
        assert runnable.name == "my build"
        assert runnable.local_path == root

    def test_empty_local_path_is_remote(self, layout):
        runnable = make_runnable(Version(version="10.0.0", local_path=""), layout)
        assert runnable.source is VersionSource.REMOTE


class TestGetDefaultVersion:
    """Tests for get_default_version function."""

    def test_newest_stable(self):
        candidates = _candidates("10.0.0", "11.0.0-beta.1", "9.0.0")
        assert get_default_version(candidates) == "10.0.0"

    def test_semantic_ordering_not_lexical(self):
        candidates = _candidates("9.4.4", "10.0.0", "10.10.0", "10.2.0")
        assert get_default_version(candidates) == "10.10.0"

    def test_preference_wins_over_newer_stable(self):
        candidates = _candidates("12.0.0", "9.0.0")
        assert get_default_version(candidates, preferred="9.0.0") == "9.0.0"

    def test_preference_can_be_prerelease(self):
        candidates = _candidates("12.0.0", "13.0.0-beta.2")
        assert get_default_version(candidates, preferred="13.0.0-beta.2") == "13.0.0-beta.2"

    def test_unknown_preference_ignored(self):
        candidates = _candidates("12.0.0", "9.0.0")
        assert get_default_version(candidates, preferred="99.0.0") == "12.0.0"

    def test_all_prereleases_is_fatal(self):
        candidates = _candidates("11.0.0-beta.1", "12.0.0-nightly.20210101")
        with pytest.raises(CorruptedVersionDataError, match="Corrupted version data"):
            get_default_version(candidates)

    def test_empty_candidates_is_fatal(self):
        with pytest.raises(CorruptedVersionDataError):
            get_default_version([])

    def test_unparseable_stable_candidates_skipped(self):
        candidates = _candidates("not.a.version!", "8.0.0")
        assert get_default_version(candidates) == "8.0.0"
