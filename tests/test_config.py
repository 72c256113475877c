"""Tests for settings loading."""

import pytest

from enginereg.config import (
    DEFAULT_RELEASES_URL,
    DEFAULT_SUPPORTED_BRANCH_COUNT,
    ConfigError,
    Settings,
    load_settings,
    parse_branch_count,
)
from enginereg.paths import get_data_dir, get_settings_path, get_store_path


class TestParseBranchCount:
    """Tests for parse_branch_count function."""

    def test_numeric(self):
        assert parse_branch_count("6") == 6

    def test_unset(self):
        assert parse_branch_count(None) == DEFAULT_SUPPORTED_BRANCH_COUNT
        assert parse_branch_count("") == DEFAULT_SUPPORTED_BRANCH_COUNT

    def test_non_numeric(self):
        assert parse_branch_count("lots") == DEFAULT_SUPPORTED_BRANCH_COUNT

    def test_zero_uses_default(self):
        assert parse_branch_count("0") == DEFAULT_SUPPORTED_BRANCH_COUNT

    def test_leading_digits(self):
        assert parse_branch_count("3 branches") == 3


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_defaults_without_file(self, temp_dir):
        settings = load_settings(temp_dir / "settings.json", environ={})
        assert settings == Settings()
        assert settings.releases_url == DEFAULT_RELEASES_URL

    def test_values_from_file(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": 3, "fetch_timeout": 10}')

        settings = load_settings(path, environ={})

        assert settings.supported_branch_count == 3
        assert settings.fetch_timeout == 10

    def test_environment_overrides_file(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": 3}')

        settings = load_settings(
            path,
            environ={
                "NUM_STABLE_BRANCHES": "5",
                "ENGINEREG_RELEASES_URL": "https://mirror.example/releases.json",
            },
        )

        assert settings.supported_branch_count == 5
        assert settings.releases_url == "https://mirror.example/releases.json"

    def test_non_numeric_environment_uses_default(self, temp_dir):
        settings = load_settings(
            temp_dir / "settings.json", environ={"NUM_STABLE_BRANCHES": "many"}
        )
        assert settings.supported_branch_count == DEFAULT_SUPPORTED_BRANCH_COUNT

    def test_syntax_error_reports_position(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{\n  "fetch_timeout": ,\n}')

        with pytest.raises(ConfigError) as exc_info:
            load_settings(path, environ={})

        message = str(exc_info.value)
        assert "line 2" in message
        assert '"fetch_timeout": ,' in message
        assert "^" in message

    def test_non_object_rejected(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text("[4]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_settings(path, environ={})

    def test_non_numeric_branch_count_uses_default(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": "six"}')
        settings = load_settings(path, environ={})
        assert settings.supported_branch_count == DEFAULT_SUPPORTED_BRANCH_COUNT

    def test_zero_branch_count_uses_default(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": 0}')
        settings = load_settings(path, environ={})
        assert settings.supported_branch_count == DEFAULT_SUPPORTED_BRANCH_COUNT

    def test_numeric_string_branch_count(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": "6"}')
        assert load_settings(path, environ={}).supported_branch_count == 6

    def test_empty_environment_keeps_file_value(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": 3}')
        settings = load_settings(path, environ={"NUM_STABLE_BRANCHES": ""})
        assert settings.supported_branch_count == 3

    def test_invalid_value_rejected(self, temp_dir):
        path = temp_dir / "settings.json"
        path.write_text('{"supported_branch_count": -2}')
        with pytest.raises(ConfigError, match="supported_branch_count"):
            load_settings(path, environ={})


class TestPaths:
    """Tests for data directory resolution."""

    def test_env_override(self, monkeypatch, temp_dir):
        monkeypatch.setenv("ENGINEREG_HOME", str(temp_dir))
        assert get_data_dir() == temp_dir
        assert get_store_path() == temp_dir / "store.json"
        assert get_settings_path() == temp_dir / "settings.json"

    def test_default_location(self, monkeypatch):
        monkeypatch.delenv("ENGINEREG_HOME", raising=False)
        assert get_data_dir().parts[-2:] == (".config", "enginereg")
