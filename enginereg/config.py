"""Settings loading for enginereg."""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from .paths import get_settings_path

DEFAULT_SUPPORTED_BRANCH_COUNT = 4
DEFAULT_RELEASES_URL = "https://releases.electronjs.org/releases.json"
DEFAULT_FETCH_TIMEOUT = 30

_logging = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when settings loading or parsing fails.

    Syntax errors carry the line number, column and a caret pointing at the
    offending position.
    """
    pass


@dataclass
class Settings:
    """Process configuration for the version registry."""
    supported_branch_count: int = DEFAULT_SUPPORTED_BRANCH_COUNT
    releases_url: str = DEFAULT_RELEASES_URL
    fetch_timeout: int = DEFAULT_FETCH_TIMEOUT

    def __post_init__(self):
        if not isinstance(self.supported_branch_count, int) or self.supported_branch_count < 1:
            raise ValueError("supported_branch_count must be a positive integer")
        if not self.releases_url or not isinstance(self.releases_url, str):
            raise ValueError("releases_url must be a non-empty string")
        if not isinstance(self.fetch_timeout, int) or self.fetch_timeout < 1:
            raise ValueError("fetch_timeout must be a positive integer")


def parse_branch_count(raw: str | None) -> int:
    """Parse a supported branch count, falling back to the default.

    Leading digits are honoured ("6 branches" -> 6). Unset, non-numeric and
    zero values yield the default.
    """
    if not raw:
        return DEFAULT_SUPPORTED_BRANCH_COUNT

    digits = ""
    for char in raw.strip():
        if not char.isdigit():
            break
        digits += char

    count = int(digits) if digits else 0
    return count or DEFAULT_SUPPORTED_BRANCH_COUNT


def _format_syntax_error(original_text: str, error: json.JSONDecodeError) -> str:
    """Format a JSON syntax error with line, caret, and context."""
    lines = original_text.split("\n")
    msg_parts = [
        f"Settings syntax error at line {error.lineno}, col {error.colno}: {error.msg}"
    ]

    if 1 <= error.lineno <= len(lines):
        msg_parts.append(lines[error.lineno - 1])
        msg_parts.append(" " * (error.colno - 1) + "^")

    return "\n".join(msg_parts)


def _read_settings_file(path: Path) -> dict:
    try:
        text = path.read_text(encoding="utf-8")
    except PermissionError:
        raise ConfigError(f"Permission denied reading settings file: {path}")
    except UnicodeDecodeError:
        raise ConfigError(f"Settings file is not valid UTF-8: {path}")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise ConfigError(_format_syntax_error(text, e)) from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings must be a JSON object, got {type(data).__name__}")
    return data


def load_settings(
    path: Path | None = None, environ: Mapping[str, str] | None = None
) -> Settings:
    """Load settings from defaults, the settings file and the environment.

    Args:
        path: Settings file to read; defaults to the data directory's
            settings.json. A missing file is not an error.
        environ: Environment mapping; defaults to os.environ

    Returns:
        Validated Settings

    Raises:
        ConfigError: If the settings file is malformed or holds invalid values
    """
    path = path or get_settings_path()
    environ = os.environ if environ is None else environ

    data: dict = {}
    if path.exists():
        _logging.debug(f"Reading settings from {path}")
        data = _read_settings_file(path)

    unknown = set(data) - {"supported_branch_count", "releases_url", "fetch_timeout"}
    if unknown:
        _logging.warning(f"Ignoring unknown settings: {', '.join(sorted(unknown))}")

    branch_count = data.get("supported_branch_count", DEFAULT_SUPPORTED_BRANCH_COUNT)
    if not isinstance(branch_count, int) or isinstance(branch_count, bool) or branch_count == 0:
        parsed = parse_branch_count(str(branch_count))
        if not str(branch_count).strip()[:1].isdigit():
            _logging.warning(
                f"supported_branch_count {branch_count!r} is not a number, using {parsed}"
            )
        branch_count = parsed

    values = {
        "supported_branch_count": branch_count,
        "releases_url": data.get("releases_url", DEFAULT_RELEASES_URL),
        "fetch_timeout": data.get("fetch_timeout", DEFAULT_FETCH_TIMEOUT),
    }

    if environ.get("NUM_STABLE_BRANCHES"):
        values["supported_branch_count"] = parse_branch_count(
            environ["NUM_STABLE_BRANCHES"]
        )
    if environ.get("ENGINEREG_RELEASES_URL"):
        values["releases_url"] = environ["ENGINEREG_RELEASES_URL"]

    try:
        return Settings(**values)
    except ValueError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}")


__all__ = [
    "ConfigError",
    "Settings",
    "DEFAULT_SUPPORTED_BRANCH_COUNT",
    "DEFAULT_RELEASES_URL",
    "parse_branch_count",
    "load_settings",
]
