"""Index (staging area) implementation."""

import logging
from pathlib import Path
from typing import Dict, Iterator, Mapping, Optional

from .errors import FileNotFound

logger = logging.getLogger(__name__)


class Index:
    """
    Twig index (staging area) implementation.

    The index maps working-tree paths (POSIX, relative to the repository
    root) to the blob hash each path will have in the next commit.
    """

    def __init__(self, entries: Optional[Mapping[str, str]] = None):
        """
        Initialize index.

        Args:
            entries: Optional initial path -> blob hash mapping
        """
        self.entries: Dict[str, str] = dict(entries or {})

    def add_entry(self, path: str, blob_hash: str) -> None:
        """
        Add or update entry in index.

        Args:
            path: File path relative to repository root
            blob_hash: Hash of the staged content
        """
        self.entries[path] = blob_hash

    def add_file(self, repo, filepath) -> str:
        """
        Stage a file for commit.

        The file content is written to the blob store before staging, so
        every staged hash is always retrievable.

        Args:
            repo: Repository instance
            filepath: Path to file (absolute or relative to the current directory)

        Returns:
            str: SHA-1 hash of staged content

        Raises:
            FileNotFound: If the path does not name an existing file
        """
        file_path = Path(filepath)

        if not file_path.is_absolute():
            file_path = Path.cwd() / file_path

        if not file_path.is_file():
            raise FileNotFound()

        rel_path = repo.relative_path(file_path)
        blob_hash = repo.blobs.put(file_path.read_bytes())

        previous = self.entries.get(rel_path)
        self.add_entry(rel_path, blob_hash)

        if previous and previous != blob_hash:
            logger.debug("Restaged %s: %s -> %s", rel_path, previous[:7], blob_hash[:7])
        else:
            logger.debug("Staged %s as %s", rel_path, blob_hash[:7])

        return blob_hash

    def remove_entry(self, path: str) -> bool:
        """
        Remove entry from index.

        Args:
            path: Path to remove

        Returns:
            True if the path was staged
        """
        if path in self.entries:
            del self.entries[path]
            return True
        return False

    def get_entry(self, path: str) -> Optional[str]:
        """Get staged blob hash by path."""
        return self.entries.get(path)

    def replace(self, tree: Mapping[str, str]) -> None:
        """Replace every entry with a copy of the given snapshot."""
        self.entries = dict(tree)

    def snapshot(self) -> Dict[str, str]:
        """Return a copy of the staged mapping."""
        return dict(self.entries)

    def matches(self, tree: Mapping[str, str]) -> bool:
        """Whether the staged mapping equals the given tree exactly."""
        return self.entries == dict(tree)

    def __contains__(self, path: str) -> bool:
        return path in self.entries

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.entries))

    def __len__(self) -> int:
        """Number of entries in index."""
        return len(self.entries)

    def __repr__(self) -> str:
        """String representation."""
        return f"Index(entries={len(self.entries)})"
