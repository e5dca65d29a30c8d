"""Environment helper utilities.

Loads a `.env` file from the project root so that analytics settings
(``INVENTORY_ANALYTICS_*``) defined there become available via ``os.getenv``.
Variables already present in the process environment always win.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

__all__ = ["find_project_root", "load_project_dotenv"]

_MAX_PARENT_HOPS = 10


def find_project_root(start: Path | None = None) -> Path:
    """Walk upwards until a directory containing `pyproject.toml` is found."""
    current = start or Path(__file__).resolve().parent
    for _ in range(_MAX_PARENT_HOPS):
        if (current / "pyproject.toml").exists():
            return current
        if current.parent == current:
            break
        current = current.parent
    return Path(__file__).resolve().parent


def load_project_dotenv(start: Path | None = None) -> bool:
    """Load the project-level `.env` if present. Returns True when a file was loaded."""
    dotenv_path = find_project_root(start) / ".env"
    if not dotenv_path.exists():
        return False
    return load_dotenv(dotenv_path=dotenv_path, override=False)
