"""Repository management for Twig VCS."""

import json
import logging
import os
import zlib
from pathlib import Path
from typing import Dict, Iterator, List, Optional

from .errors import (AlreadyInitialized, AmbiguousCommitId, CommitNotFound, CorruptRepository,
                     EmptyMessage, FileNotFound, NoReasonToRemove, NotInitialized,
                     NothingToCommit, ObjectNotFound)
from .hash import HASH_LENGTH, hash_object
from .index import Index
from .objects import Commit

logger = logging.getLogger(__name__)

STATE_FORMAT_VERSION = 1
INITIAL_COMMIT_MESSAGE = 'initial commit'


class BlobStore:
    """
    Content-addressed file content storage.

    Blobs are stored compressed with zlib under .twig/objects, in
    subdirectories named by the first 2 characters of the hash.
    The stored format is: blob <size>\\0<content>
    """

    def __init__(self, objects_dir: Path):
        """
        Initialize blob store.

        Args:
            objects_dir: Directory holding the object files
        """
        self.objects_dir = objects_dir

    def object_path(self, hash: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            Path: Full path to object file
        """
        return self.objects_dir / hash[:2] / hash[2:]

    def put(self, data: bytes) -> str:
        """
        Store content, returning its hash.

        Writing the same content twice is a no-op.

        Args:
            data: Raw file content

        Returns:
            str: SHA-1 hash of the content
        """
        hash = hash_object(data)
        path = self.object_path(hash)

        if path.exists():
            return hash

        header = f"blob {len(data)}\0".encode()
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(zlib.compress(header + data))
        logger.debug("Wrote blob %s (%d bytes)", hash[:7], len(data))

        return hash

    def get(self, hash: str) -> bytes:
        """
        Read content by hash.

        Args:
            hash: 40-character SHA-1 hash

        Returns:
            bytes: Raw file content

        Raises:
            ObjectNotFound: If the blob is missing or damaged
        """
        path = self.object_path(hash)

        if not path.is_file():
            raise ObjectNotFound(f"Object {hash} not found")

        try:
            content = zlib.decompress(path.read_bytes())
        except zlib.error as e:
            raise ObjectNotFound(f"Object {hash} is damaged: {e}")

        null_idx = content.find(b'\0')
        header = content[:null_idx].decode(errors='replace')
        data = content[null_idx + 1:]

        if null_idx < 0 or header != f"blob {len(data)}":
            raise ObjectNotFound(f"Object {hash} has an invalid header")

        return data

    def exists(self, hash: str) -> bool:
        """Check if a blob exists in the store."""
        return self.object_path(hash).is_file()

    def __contains__(self, hash: str) -> bool:
        return self.exists(hash)


class Repository:
    """
    Represents a Twig repository.

    The repository is one aggregate: commit graph, branch table, current
    branch, HEAD, staging area and blob store. Commands load it with
    open(), mutate it in memory, and write it back with store().

    Layout:
    .twig/
    ├── objects/       # Blob store
    ├── state          # Commits, branches, HEAD and staging area (JSON)
    └── config         # Repository configuration

    Concurrent commands from several processes are not coordinated; the
    last process to store wins.
    """

    def __init__(self, path: str = '.'):
        """
        Initialize repository.

        Args:
            path: Path to repository root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.twig_dir = self.work_tree / '.twig'
        self.objects_dir = self.twig_dir / 'objects'
        self.state_file = self.twig_dir / 'state'
        self.config_file = self.twig_dir / 'config'

        self.blobs = BlobStore(self.objects_dir)
        self.commits: Dict[str, Commit] = {}
        self.branches: Dict[str, str] = {}
        self.current_branch: Optional[str] = None
        self.head: Optional[str] = None
        self.index = Index()

        # Lazily created to avoid circular imports
        self._ref_manager = None
        self._reconciler = None
        self._merge_engine = None
        self._status_reporter = None
        self._config = None

    @property
    def refs(self):
        """Get RefManager instance."""
        if self._ref_manager is None:
            from .refs import RefManager
            self._ref_manager = RefManager(self)
        return self._ref_manager

    @property
    def checkout(self):
        """Get Reconciler instance."""
        if self._reconciler is None:
            from twig.operations.checkout import Reconciler
            self._reconciler = Reconciler(self)
        return self._reconciler

    @property
    def merge(self):
        """Get MergeEngine instance."""
        if self._merge_engine is None:
            from twig.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def status(self):
        """Get StatusReporter instance."""
        if self._status_reporter is None:
            from twig.operations.status import StatusReporter
            self._status_reporter = StatusReporter(self)
        return self._status_reporter

    @property
    def config(self):
        """Get Config instance for this repository."""
        if self._config is None:
            from .config import get_config
            self._config = get_config(self)
        return self._config

    def init(self) -> 'Repository':
        """
        Initialize a new repository.

        Creates the .twig directory, a root commit ("initial commit" at the
        epoch, no parents, empty tree) and a single branch pointing at it.

        Returns:
            Repository: self for method chaining

        Raises:
            AlreadyInitialized: If repository already exists
        """
        if self.twig_dir.exists():
            raise AlreadyInitialized()

        self.twig_dir.mkdir(parents=True)
        self.objects_dir.mkdir()

        self.config.set('core', 'repositoryformatversion', '0')
        branch = self.config.default_branch

        root = Commit.create({}, [], INITIAL_COMMIT_MESSAGE, timestamp=0)
        self.commits = {root.hash: root}
        self.branches = {branch: root.hash}
        self.current_branch = branch
        self.head = root.hash
        self.index = Index()

        self.store()
        logger.debug("Initialized repository at %s on branch %s", self.twig_dir, branch)

        return self

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['Repository']:
        """
        Find repository by searching up the directory tree.

        Searches from the given path upwards until it finds a .twig directory
        or reaches the filesystem root.

        Args:
            path: Starting path for search

        Returns:
            Repository if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            twig_dir = current / '.twig'
            if twig_dir.is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    @classmethod
    def open(cls, path: str = '.') -> 'Repository':
        """
        Find the enclosing repository and load its state.

        Raises:
            NotInitialized: If no repository encloses path
        """
        repo = cls.find_repository(path)
        if repo is None:
            raise NotInitialized()
        return repo.load()

    def load(self) -> 'Repository':
        """
        Read the full repository state from disk.

        Returns:
            Repository: self for method chaining

        Raises:
            NotInitialized: If the state record is missing
            CorruptRepository: If the state record cannot be decoded
        """
        if not self.state_file.is_file():
            raise NotInitialized()

        try:
            state = json.loads(self.state_file.read_text(encoding='utf-8'))
            version = state.get('version')
            if version != STATE_FORMAT_VERSION:
                raise ValueError(f"unsupported state version {version}")

            commits = {}
            for data in state['commits']:
                commit = Commit.from_dict(data)
                commits[commit.hash] = commit

            branches = dict(state['branches'])
            current_branch = state['current_branch']
            head = state['head']
            staged = dict(state['staged'])
        except (ValueError, KeyError, TypeError) as e:
            raise CorruptRepository(f"Repository state is unreadable: {e}")

        if head not in commits:
            raise CorruptRepository(f"HEAD points to unknown commit {head}")
        for name, commit_hash in branches.items():
            if commit_hash not in commits:
                raise CorruptRepository(f"Branch '{name}' points to unknown commit {commit_hash}")
        if current_branch not in branches:
            raise CorruptRepository(f"Current branch '{current_branch}' does not exist")

        self.commits = commits
        self.branches = branches
        self.current_branch = current_branch
        self.head = head
        self.index = Index(staged)

        logger.debug("Loaded %d commit(s), %d branch(es), HEAD %s",
                     len(commits), len(branches), head[:7])
        return self

    def store(self) -> None:
        """Write the full repository state to disk."""
        state = {
            'version': STATE_FORMAT_VERSION,
            'current_branch': self.current_branch,
            'head': self.head,
            'branches': dict(sorted(self.branches.items())),
            'staged': dict(sorted(self.index.entries.items())),
            'commits': [commit.to_dict() for commit in self.commits.values()],
        }

        tmp_file = self.state_file.with_name(self.state_file.name + '.tmp')
        tmp_file.write_text(json.dumps(state, indent=2), encoding='utf-8')
        os.replace(tmp_file, self.state_file)

        logger.debug("Stored repository state (HEAD %s)", self.head[:7])

    def relative_path(self, path) -> str:
        """
        Convert a path to its repository-relative POSIX form.

        Relative paths are taken relative to the current directory.

        Raises:
            FileNotFound: If the path lies outside the working tree
        """
        full_path = Path(path)
        if not full_path.is_absolute():
            full_path = Path.cwd() / full_path

        try:
            return full_path.resolve().relative_to(self.work_tree).as_posix()
        except ValueError:
            raise FileNotFound(f"File is outside the repository: {path}")

    def get_commit(self, commit_hash: str) -> Commit:
        """
        Get a commit by its full hash.

        Raises:
            ObjectNotFound: If the commit is not in the graph
        """
        commit = self.commits.get(commit_hash)
        if commit is None:
            raise ObjectNotFound(f"Commit {commit_hash} not found")
        return commit

    def head_commit(self) -> Commit:
        """Get the commit HEAD points to."""
        return self.get_commit(self.head)

    def add_commit(self, commit: Commit) -> str:
        """
        Record a commit in the graph.

        Returns:
            str: The commit hash
        """
        self.commits[commit.hash] = commit
        return commit.hash

    def find_commits_by_prefix(self, prefix: str) -> List[str]:
        """
        Find all commit hashes starting with prefix, in creation order.

        Args:
            prefix: Hash prefix

        Returns:
            List of matching hashes
        """
        prefix = prefix.lower()
        return [commit_hash for commit_hash in self.commits if commit_hash.startswith(prefix)]

    def resolve_prefix(self, partial: str, strict: bool = False) -> Commit:
        """
        Resolve a full or abbreviated commit id.

        A full-length id must match exactly. A shorter id matches any
        commit whose hash starts with it. When several commits match, the
        earliest created one wins and a warning is logged; pass strict=True
        to refuse ambiguous ids instead.

        Args:
            partial: Full hash or hash prefix
            strict: Raise AmbiguousCommitId when several commits match

        Returns:
            Commit: The resolved commit

        Raises:
            CommitNotFound: If nothing matches
            AmbiguousCommitId: If strict and the prefix is ambiguous
        """
        if not partial:
            raise CommitNotFound()

        if len(partial) == HASH_LENGTH:
            commit = self.commits.get(partial.lower())
            if commit is None:
                raise CommitNotFound()
            return commit

        matches = self.find_commits_by_prefix(partial)
        if not matches:
            raise CommitNotFound()

        if len(matches) > 1:
            if strict:
                raise AmbiguousCommitId(
                    f"Commit id '{partial}' is ambiguous: matches {len(matches)} commits"
                )
            logger.warning("Commit id '%s' matches %d commits; using %s",
                           partial, len(matches), matches[0])

        return self.commits[matches[0]]

    def add(self, path) -> str:
        """
        Stage a file's current content.

        Returns:
            str: Hash of the staged blob
        """
        return self.index.add_file(self, path)

    def remove(self, path) -> bool:
        """
        Unstage a file, deleting it from disk when HEAD tracks it.

        Args:
            path: Path to remove

        Returns:
            True if the file was deleted from the working tree

        Raises:
            NoReasonToRemove: If the path is neither tracked nor staged
        """
        rel_path = self.relative_path(path)
        head = self.head_commit()

        if rel_path in head.tree:
            self.index.remove_entry(rel_path)
            file_path = self.work_tree / rel_path
            if file_path.is_file():
                file_path.unlink()
                logger.debug("Removed %s from index and working tree", rel_path)
                return True
            logger.debug("Removed %s from index", rel_path)
            return False

        if self.index.remove_entry(rel_path):
            logger.debug("Unstaged %s", rel_path)
            return False

        raise NoReasonToRemove()

    def commit(self, message: str, timestamp: Optional[int] = None) -> Commit:
        """
        Commit the staging area.

        Args:
            message: Commit message
            timestamp: Unix timestamp (defaults to current time)

        Returns:
            Commit: The new commit

        Raises:
            EmptyMessage: If message is empty
            NothingToCommit: If the staging area equals HEAD's tree
        """
        if not message:
            raise EmptyMessage()

        if not self.status.has_staged_changes():
            raise NothingToCommit()

        commit = Commit.create(
            tree=self.index.snapshot(),
            parent_hashes=[self.head],
            message=message,
            timestamp=timestamp
        )
        self.add_commit(commit)
        self.refs.advance_head(commit.hash)

        logger.debug("Committed %s on %s with %d file(s)",
                     commit.hash[:7], self.current_branch, len(commit.tree))
        return commit

    def log(self) -> Iterator[Commit]:
        """Walk history from HEAD following first parents."""
        commit_hash = self.head
        while commit_hash is not None:
            commit = self.get_commit(commit_hash)
            yield commit
            commit_hash = commit.parents[0] if commit.parents else None

    def all_commits(self) -> List[Commit]:
        """Every commit ever made, in creation order."""
        return list(self.commits.values())

    def find(self, message: str) -> List[Commit]:
        """Find every commit whose message is exactly message."""
        return [commit for commit in self.commits.values() if commit.message == message]

    def __repr__(self) -> str:
        """String representation of repository."""
        return f"Repository(path={self.work_tree})"
