"""Twig objects: blobs and commits."""

import time
from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from .hash import hash_object


class TwigObject(ABC):
    """Base class for all Twig objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize the identifying content of the object.

        Returns:
            bytes: The bytes the object hash is computed over
        """
        pass

    @property
    def type(self) -> str:
        """
        Return object type name.

        Returns:
            str: Object type (blob, commit)
        """
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        Returns:
            str: 40-character SHA-1 hash of serialize()
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """
        Get object hash.

        Returns:
            str: 40-character SHA-1 hash
        """
        return self.compute_hash()


class Blob(TwigObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions. Its hash is the digest of the raw bytes.
    """

    def __init__(self, data: Optional[bytes] = None):
        """
        Initialize a blob.

        Args:
            data: File content as bytes
        """
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    @classmethod
    def from_file(cls, filepath: str) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        """String representation of blob."""
        size = len(self.data)
        return f"Blob(hash={self.hash[:7]}, size={size})"


class Commit(TwigObject):
    """
    Represents a commit.

    A commit captures:
    - Full snapshot of the project (path -> blob hash)
    - Parent commit(s) for history, first parent is the mainline
    - Timestamp
    - Commit message

    Only the snapshot and the parents identify a commit. Message and
    timestamp are carried along but are not hashed.
    """

    def __init__(self):
        """Initialize empty commit."""
        super().__init__()
        self.tree: Dict[str, str] = {}
        self.parents: List[str] = []
        self.timestamp: int = 0
        self.message: str = ''

    def serialize(self) -> bytes:
        """
        Serialize the commit identity.

        Format (every field ends with a NUL byte, which no path can contain):
        <blob-hash> <path>\\0     (one per file, sorted by path)
        parent <parent-hash>\\0   (zero or more, in parent order)

        An empty root commit serializes to no bytes at all.

        Returns:
            bytes: Serialized commit identity
        """
        fields = []

        for path in sorted(self.tree):
            fields.append(f'{self.tree[path]} {path}\0')

        for parent in self.parents:
            fields.append(f'parent {parent}\0')

        return ''.join(fields).encode()

    def to_dict(self) -> dict:
        """Convert commit to a JSON-friendly dictionary."""
        return {
            'hash': self.hash,
            'message': self.message,
            'timestamp': self.timestamp,
            'parents': list(self.parents),
            'tree': dict(sorted(self.tree.items())),
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'Commit':
        """
        Rebuild a commit from its stored dictionary.

        Args:
            data: Dictionary produced by to_dict()

        Returns:
            Commit: Commit object

        Raises:
            ValueError: If the stored hash does not match the content
        """
        commit = cls()
        commit.message = data['message']
        commit.timestamp = int(data['timestamp'])
        commit.parents = list(data['parents'])
        commit.tree = dict(data['tree'])

        if commit.hash != data['hash']:
            raise ValueError(f"Commit hash mismatch: expected {data['hash']}, got {commit.hash}")

        return commit

    @classmethod
    def create(
        cls,
        tree: Dict[str, str],
        parent_hashes: List[str],
        message: str,
        timestamp: Optional[int] = None
    ) -> 'Commit':
        """
        Create a new commit.

        Args:
            tree: Mapping of working-tree path to blob hash
            parent_hashes: List of parent commit hashes
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: New commit object
        """
        commit = cls()
        commit.tree = dict(tree)
        commit.parents = list(parent_hashes)
        commit.message = message

        if timestamp is None:
            timestamp = int(time.time())

        commit.timestamp = timestamp

        return commit

    @property
    def is_merge(self) -> bool:
        """Whether this commit has more than one parent."""
        return len(self.parents) > 1

    def __repr__(self) -> str:
        """String representation."""
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self.message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
