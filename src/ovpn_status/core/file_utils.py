from __future__ import annotations

from pathlib import Path
from typing import Optional


def find_project_root(marker: str = "pyproject.toml", start: Optional[Path] = None) -> Path:
    """
    Find the project root by searching upwards for a marker file.

    The search starts at ``start``, or the current working directory.
    """
    current_dir = (start or Path.cwd()).resolve()
    for candidate in (current_dir, *current_dir.parents):
        if (candidate / marker).exists():
            return candidate
    raise FileNotFoundError(f"Project root marker '{marker}' not found.")
