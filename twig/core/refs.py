"""Reference management for Twig VCS."""

import logging
from typing import List, Optional, Tuple

from .errors import (BranchAlreadyExists, BranchNotFound, CannotRemoveCurrentBranch,
                     ObjectNotFound)

logger = logging.getLogger(__name__)


class RefManager:
    """
    Manages branch references and HEAD.

    References live in the repository aggregate:
    - Branch table (branch name -> commit hash)
    - Current branch name
    - HEAD commit hash

    The manager keeps branches[current_branch] == HEAD whenever HEAD moves
    on behalf of the current branch.
    """

    def __init__(self, repo):
        """
        Initialize reference manager.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def read_ref(self, ref_name: str) -> Optional[str]:
        """
        Read a reference and return its commit hash.

        Args:
            ref_name: 'HEAD' or a branch name

        Returns:
            Commit hash or None if reference doesn't exist
        """
        if ref_name == 'HEAD':
            return self.resolve_head()
        return self.repo.branches.get(ref_name)

    def resolve_head(self) -> Optional[str]:
        """Resolve HEAD to a commit hash."""
        return self.repo.head

    def get_current_branch(self) -> Optional[str]:
        """Get the current branch name."""
        return self.repo.current_branch

    def branch_exists(self, branch_name: str) -> bool:
        """Check if a branch exists."""
        return branch_name in self.repo.branches

    def get_branch(self, branch_name: str) -> str:
        """
        Get the commit a branch points to.

        Raises:
            BranchNotFound: If the branch does not exist
        """
        commit_hash = self.repo.branches.get(branch_name)
        if commit_hash is None:
            raise BranchNotFound()
        return commit_hash

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples sorted by name
        """
        return sorted(self.repo.branches.items(), key=lambda x: x[0])

    def create_branch(self, branch_name: str, commit_hash: Optional[str] = None) -> str:
        """
        Create a new branch.

        Args:
            branch_name: Branch name
            commit_hash: Commit to point to (defaults to HEAD)

        Returns:
            The commit hash the branch points to

        Raises:
            BranchAlreadyExists: If the name is taken
        """
        if branch_name in self.repo.branches:
            raise BranchAlreadyExists()

        if commit_hash is None:
            commit_hash = self.repo.head
        elif commit_hash not in self.repo.commits:
            raise ObjectNotFound(f"Commit {commit_hash} not found")

        self.repo.branches[branch_name] = commit_hash
        logger.debug("Created branch %s at %s", branch_name, commit_hash[:7])
        return commit_hash

    def delete_branch(self, branch_name: str) -> str:
        """
        Delete a branch pointer. Commits stay in the graph.

        Returns:
            The commit hash the branch pointed to

        Raises:
            BranchNotFound: If the branch does not exist
            CannotRemoveCurrentBranch: If it is the current branch
        """
        if branch_name not in self.repo.branches:
            raise BranchNotFound()
        if branch_name == self.repo.current_branch:
            raise CannotRemoveCurrentBranch()

        commit_hash = self.repo.branches.pop(branch_name)
        logger.debug("Deleted branch %s (was %s)", branch_name, commit_hash[:7])
        return commit_hash

    def set_current_branch(self, branch_name: str) -> None:
        """
        Make branch_name the current branch without touching HEAD.

        Raises:
            BranchNotFound: If the branch does not exist
        """
        if branch_name not in self.repo.branches:
            raise BranchNotFound()
        self.repo.current_branch = branch_name

    def advance_head(self, commit_hash: str) -> None:
        """Move HEAD and the current branch to commit_hash."""
        if commit_hash not in self.repo.commits:
            raise ObjectNotFound(f"Commit {commit_hash} not found")
        self.repo.head = commit_hash
        self.repo.branches[self.repo.current_branch] = commit_hash
