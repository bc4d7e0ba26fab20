import os
from pathlib import Path
from dataclasses import dataclass

# Creates `path` (and parents) if missing and hands it back.
def ensure_directory(path: Path):
    path.mkdir(parents=True,exist_ok=True)
    return path

# Picks the folder all user data lives in. TASKTIMER_HOME wins, then APPDATA on Windows, then a dot folder in home.
def resolve_data_root() -> Path:
    override = os.getenv("TASKTIMER_HOME")
    if override:
        return Path(override)
    appdata = os.getenv("APPDATA")
    if appdata:
        return Path(appdata) / "TaskTimer"
    return Path.home() / ".tasktimer"

# Dataclass for accessing paths across program.
@dataclass(frozen=False)
class ProjectPaths:

    data: Path
    logs: Path

    @staticmethod
    def build():
        data = ensure_directory(resolve_data_root())
        logs = ensure_directory(data / "logs")
        return ProjectPaths(data = data, logs = logs)
PATHS = ProjectPaths.build()
