"""
Filesystem helpers
"""

from pathlib import Path
from typing import Union


def ensure_dir(path: Union[str, Path]) -> Path:
    """Create a directory (and parents) if missing, return it as Path

    Safe to call concurrently for the same directory.
    """
    directory = Path(path)
    directory.mkdir(parents=True, exist_ok=True)
    return directory
