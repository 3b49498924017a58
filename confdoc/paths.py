from __future__ import annotations

from pathlib import Path

from .errors import HomeDirectoryError


def home_dir() -> Path:
    try:
        return Path.home()
    except (RuntimeError, KeyError) as e:
        raise HomeDirectoryError("No valid home directory path could be retrieved from OS") from e


def ensure_dir(path: Path) -> Path:
    path.mkdir(parents=True, exist_ok=True)
    return path


def under_home(relative_path: str | Path) -> Path:
    return home_dir() / relative_path
