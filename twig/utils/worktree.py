"""Working tree file listing helpers."""

from pathlib import Path
from typing import List


def plain_files(directory: Path) -> List[str]:
    """
    List the plain files directly inside a directory.

    Subdirectories (including .twig) and their contents are not listed.

    Args:
        directory: Directory to scan

    Returns:
        Sorted list of file names
    """
    return sorted(item.name for item in Path(directory).iterdir() if item.is_file())
