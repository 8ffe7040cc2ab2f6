import os
import sys
from pathlib import Path
from dataclasses import dataclass

# Lil helper function to create missing directories if missing, and optionally error out when a path
# doesn't exist.
def ensure_directory(path: Path,must_exist=False):
    if must_exist:
        if not path.exists():
            raise FileNotFoundError(f"Required directory is missing: {path}")
        if not path.is_dir():
            raise NotADirectoryError(f"Expected a directory, got a file: {path}")
    else:
        path.mkdir(parents=True,exist_ok=True)
    return path

# Figures out where the user-specific stopwatch folder lives. STOPWATCH_HOME always wins, otherwise we follow
# the platform's usual per-user data location.
def _resolve_data_dir():
    override = os.getenv("STOPWATCH_HOME")
    if override:
        return Path(override)

    if sys.platform == "win32":
        appdata = os.getenv("APPDATA")
        if not appdata:
            raise RuntimeError("Missing APPDATA environment variable, cannot determine data directories.")
        return Path(appdata) / "Stopwatch"

    xdg = os.getenv("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "stopwatch"
    return Path.home() / ".local" / "share" / "stopwatch"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    root: Path
    data: Path
    logs: Path

    @staticmethod
    def build():
        # Folder for the source tree itself, nothing user-specific
        root = Path(__file__).resolve().parents[2]

        # Folder for settings and logs
        data = ensure_directory(_resolve_data_dir())
        logs = ensure_directory(data / "logs")

        return ProjectPaths(
            root = root,
            data = data,
            logs = logs,
        )
PATHS = ProjectPaths.build()
