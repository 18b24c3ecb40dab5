"""Status computation for Twig VCS."""

from dataclasses import dataclass, field
from typing import List, Tuple

from twig.core.hash import hash_file
from twig.utils.worktree import plain_files


@dataclass
class StatusReport:
    """Differences between the staging area, HEAD and the working tree."""
    branches: List[Tuple[str, bool]] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    modified: List[Tuple[str, str]] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        """Whether nothing is staged, removed, modified or untracked."""
        return not (self.staged or self.removed or self.modified or self.untracked)


class StatusReporter:
    """
    Read-only comparison of staging area, HEAD commit and working tree.

    Nothing here mutates the repository.
    """

    def __init__(self, repo):
        """
        Initialize status reporter.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def has_staged_changes(self) -> bool:
        """Whether the staging area differs from HEAD's tree as a mapping."""
        return not self.repo.index.matches(self.repo.head_commit().tree)

    def staged_files(self) -> List[str]:
        """Staged paths that are new or changed relative to HEAD."""
        head_tree = self.repo.head_commit().tree
        return sorted(
            path for path, blob_hash in self.repo.index.entries.items()
            if head_tree.get(path) != blob_hash
        )

    def removed_files(self) -> List[str]:
        """Paths in HEAD's tree that are no longer staged."""
        head_tree = self.repo.head_commit().tree
        return sorted(path for path in head_tree if path not in self.repo.index)

    def unstaged_modifications(self) -> List[Tuple[str, str]]:
        """
        Staged paths whose working-tree file differs from the staged blob.

        Returns:
            List of (path, 'deleted' | 'modified') tuples sorted by path
        """
        changes = []
        for path in self.repo.index:
            full_path = self.repo.work_tree / path
            if not full_path.is_file():
                changes.append((path, 'deleted'))
            elif hash_file(str(full_path)) != self.repo.index.get_entry(path):
                changes.append((path, 'modified'))
        return changes

    def untracked_files(self) -> List[str]:
        """Top-level plain files that are not staged."""
        return [name for name in plain_files(self.repo.work_tree) if name not in self.repo.index]

    def report(self) -> StatusReport:
        """Compute the full status report."""
        current = self.repo.current_branch
        return StatusReport(
            branches=[(name, name == current) for name, _ in self.repo.refs.list_branches()],
            staged=self.staged_files(),
            removed=self.removed_files(),
            modified=self.unstaged_modifications(),
            untracked=self.untracked_files(),
        )
