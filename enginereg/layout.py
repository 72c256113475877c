"""Platform-specific layout of a local engine build."""

import os
import sys

EXEC_PATHS = {
    "darwin": ("Electron.app", "Contents", "MacOS", "Electron"),
    "win32": ("electron.exe",),
}
DEFAULT_EXEC_PATH = ("electron",)


class EngineLayout:
    """Locates the engine executable inside a local build directory."""

    def __init__(self, platform: str | None = None):
        self.platform = platform or sys.platform

    def exec_path(self, local_root: str) -> str:
        parts = EXEC_PATHS.get(self.platform, DEFAULT_EXEC_PATH)
        return os.path.join(local_root, *parts)

    def exists(self, path: str) -> bool:
        return os.path.exists(path)
