"""Checkout and reset operations for Twig VCS.

The Reconciler makes the working tree and the staging area match a commit.
"""

import logging
from typing import Callable, List, Optional

from twig.core.errors import (AlreadyOnBranch, BranchNotFound, FileNotInCommit,
                              UntrackedFileWouldBeOverwritten)
from twig.core.objects import Commit
from twig.utils.worktree import plain_files

logger = logging.getLogger(__name__)


def is_untracked(repo, path: str) -> bool:
    """
    Decide whether a working-tree file is untracked.

    A file counts as tracked when its path is staged. HEAD's tree is not
    consulted, so a file that is staged but never committed passes.

    Args:
        repo: Repository instance
        path: Repository-relative path

    Returns:
        True if the file would be lost by a checkout
    """
    return path not in repo.index


class Reconciler:
    """
    Materializes commits into the working tree.

    Handles:
    - The untracked-file guard
    - Full checkout of a commit (branch checkout, reset, fast-forward)
    - Single-file checkout from a commit
    """

    def __init__(self, repo, guard: Callable[..., bool] = is_untracked):
        """
        Initialize reconciler.

        Args:
            repo: Repository instance
            guard: Predicate (repo, path) -> bool deciding if a file is untracked
        """
        self.repo = repo
        self.guard = guard

    def untracked_files(self) -> List[str]:
        """Top-level plain files the guard considers untracked."""
        return [name for name in plain_files(self.repo.work_tree) if self.guard(self.repo, name)]

    def check_untracked(self) -> None:
        """
        Refuse to continue when an untracked file is in the way.

        Raises:
            UntrackedFileWouldBeOverwritten: If any untracked file exists
        """
        untracked = self.untracked_files()
        if untracked:
            logger.debug("Untracked files in the way: %s", ', '.join(untracked))
            raise UntrackedFileWouldBeOverwritten()

    def write_file(self, path: str, blob_hash: str) -> None:
        """Write a blob's content to a working-tree path."""
        full_path = self.repo.work_tree / path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(self.repo.blobs.get(blob_hash))

    def delete_file(self, path: str) -> None:
        """Delete a working-tree file if present."""
        full_path = self.repo.work_tree / path
        if full_path.is_file():
            full_path.unlink()

    def materialize(self, commit_hash: str) -> Commit:
        """
        Make the working tree, HEAD and staging area match a commit.

        1. Fail if an untracked file is in the way
        2. Delete every top-level plain file
        3. Write every file of the commit's tree
        4. Point HEAD at the commit and stage a copy of its tree

        The current branch is not moved.

        Args:
            commit_hash: Full hash of the commit to materialize

        Returns:
            Commit: The materialized commit
        """
        commit = self.repo.get_commit(commit_hash)
        self.check_untracked()

        # Fetch every blob before touching the working tree
        contents = {path: self.repo.blobs.get(blob_hash) for path, blob_hash in commit.tree.items()}

        for name in plain_files(self.repo.work_tree):
            (self.repo.work_tree / name).unlink()

        for path in sorted(contents):
            full_path = self.repo.work_tree / path
            full_path.parent.mkdir(parents=True, exist_ok=True)
            full_path.write_bytes(contents[path])

        self.repo.head = commit.hash
        self.repo.index.replace(commit.tree)

        logger.debug("Checked out %s (%d file(s))", commit.hash[:7], len(commit.tree))
        return commit

    def checkout_branch(self, branch_name: str) -> Commit:
        """
        Switch to a branch.

        Raises:
            AlreadyOnBranch: If branch_name is the current branch
            BranchNotFound: If the branch does not exist
            UntrackedFileWouldBeOverwritten: If an untracked file is in the way
        """
        if branch_name == self.repo.current_branch:
            raise AlreadyOnBranch()
        if not self.repo.refs.branch_exists(branch_name):
            raise BranchNotFound("No such branch exists.")

        commit = self.materialize(self.repo.refs.get_branch(branch_name))
        self.repo.refs.set_current_branch(branch_name)
        return commit

    def checkout_file(self, path, commit_id: Optional[str] = None) -> str:
        """
        Overwrite one working-tree file with its version in a commit.

        HEAD, the staging area and the current branch are left alone, and
        the untracked-file guard does not apply.

        Args:
            path: File path
            commit_id: Full or abbreviated commit id (defaults to HEAD)

        Returns:
            str: Repository-relative path that was written

        Raises:
            CommitNotFound: If commit_id resolves to nothing
            FileNotInCommit: If the commit does not contain the file
        """
        if commit_id is None:
            commit = self.repo.head_commit()
        else:
            commit = self.repo.resolve_prefix(commit_id)

        rel_path = self.repo.relative_path(path)
        blob_hash = commit.tree.get(rel_path)
        if blob_hash is None:
            raise FileNotInCommit()

        self.write_file(rel_path, blob_hash)
        logger.debug("Restored %s from %s", rel_path, commit.hash[:7])
        return rel_path

    def reset(self, commit_id: str) -> Commit:
        """
        Check out an arbitrary commit and move the current branch to it.

        Raises:
            CommitNotFound: If commit_id resolves to nothing
            UntrackedFileWouldBeOverwritten: If an untracked file is in the way
        """
        commit = self.repo.resolve_prefix(commit_id)
        self.materialize(commit.hash)
        self.repo.refs.advance_head(commit.hash)
        return commit
