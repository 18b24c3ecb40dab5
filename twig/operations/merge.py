"""Merge operations for Twig VCS."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from twig.core.errors import (BranchNotFound, CannotMergeSelf, TwigError,
                              UncommittedChanges)
from twig.core.objects import Commit

logger = logging.getLogger(__name__)

ANCESTOR_MESSAGE = "Given branch is an ancestor of the current branch."
FAST_FORWARD_MESSAGE = "Current branch fast-forwarded."
CONFLICT_MESSAGE = "Encountered a merge conflict."


@dataclass
class MergeConflict:
    """Represents a merge conflict in a file."""
    path: str
    ours_content: Optional[bytes]
    theirs_content: Optional[bytes]

    def __repr__(self) -> str:
        """String representation."""
        return f"MergeConflict({self.path})"


@dataclass
class MergeResult:
    """Result of a merge operation."""
    conflicts: List[MergeConflict] = field(default_factory=list)
    commit_hash: Optional[str] = None
    merge_base: Optional[str] = None
    is_fast_forward: bool = False
    is_up_to_date: bool = False
    message: str = ""

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    def __repr__(self) -> str:
        """String representation."""
        if self.is_up_to_date:
            return "MergeResult(up-to-date)"
        if self.is_fast_forward:
            return "MergeResult(fast-forward)"
        return f"MergeResult(commit={self.commit_hash and self.commit_hash[:7]}, conflicts={len(self.conflicts)})"


class MergeEngine:
    """
    Handles merge operations for Twig VCS.

    Supports:
    - Merge base finding (common ancestor)
    - Fast-forward merges
    - Three-way merges at whole-file granularity
    - Conflict marker synthesis
    """

    def __init__(self, repo):
        """
        Initialize merge engine.

        Args:
            repo: Repository instance
        """
        self.repo = repo

    def find_merge_base(self, head_hash: str, other_hash: str,
                        strategy: Optional[str] = None) -> Optional[str]:
        """
        Find the common ancestor (merge base) of two commits.

        The default 'first' strategy walks breadth-first from head_hash
        through parents in list order and returns the first commit that is
        an ancestor of other_hash. In criss-cross histories this is not
        necessarily the lowest common ancestor.

        The 'lowest' strategy returns the common ancestor with the smallest
        combined distance to both commits, breaking ties by breadth-first
        order from head_hash.

        Args:
            head_hash: Current commit hash
            other_hash: Commit hash being merged in
            strategy: 'first' or 'lowest' (defaults to merge.base config)

        Returns:
            Hash of merge base commit, or None if no common ancestor
        """
        if strategy is None:
            strategy = self.repo.config.merge_base_strategy

        other_ancestors = self._get_ancestors(other_hash)

        if strategy == 'lowest':
            head_distances = self._distances_from(head_hash)
            other_distances = self._distances_from(other_hash)
            best_ancestor = None
            min_distance = None

            # head_distances is in breadth-first discovery order
            for ancestor, distance in head_distances.items():
                if ancestor not in other_ancestors:
                    continue
                total = distance + other_distances[ancestor]
                if min_distance is None or total < min_distance:
                    min_distance = total
                    best_ancestor = ancestor

            return best_ancestor

        to_visit = deque([head_hash])
        visited = set()

        while to_visit:
            current = to_visit.popleft()

            if current in other_ancestors:
                return current

            if current in visited:
                continue
            visited.add(current)

            to_visit.extend(self.repo.get_commit(current).parents)

        return None

    def _get_ancestors(self, commit_hash: str) -> Set[str]:
        """
        Get all ancestors of a commit.

        Args:
            commit_hash: Starting commit hash

        Returns:
            Set of ancestor commit hashes (including the commit itself)
        """
        ancestors = set()
        to_visit = [commit_hash]

        while to_visit:
            current = to_visit.pop()

            if current in ancestors:
                continue

            ancestors.add(current)
            for parent in self.repo.get_commit(current).parents:
                if parent not in ancestors:
                    to_visit.append(parent)

        return ancestors

    def _distances_from(self, start_hash: str) -> Dict[str, int]:
        """
        Shortest number of parent steps from start to each ancestor.

        Returns:
            Dict of ancestor hash -> distance, in breadth-first order
        """
        distances = {start_hash: 0}
        to_visit = deque([start_hash])

        while to_visit:
            current = to_visit.popleft()
            for parent in self.repo.get_commit(current).parents:
                if parent not in distances:
                    distances[parent] = distances[current] + 1
                    to_visit.append(parent)

        return distances

    def check_preconditions(self, branch_name: str) -> str:
        """
        Validate a merge before anything is touched.

        Checks run in this order: uncommitted changes, self merge, missing
        branch, untracked files in the way.

        Returns:
            Hash of the branch tip being merged

        Raises:
            UncommittedChanges: If staged paths differ from HEAD's paths
            CannotMergeSelf: If branch_name is the current branch
            BranchNotFound: If the branch does not exist
            UntrackedFileWouldBeOverwritten: If an untracked file is in the way
        """
        head_tree = self.repo.head_commit().tree
        if set(self.repo.index.entries) != set(head_tree):
            raise UncommittedChanges()

        if branch_name == self.repo.current_branch:
            raise CannotMergeSelf()

        if not self.repo.refs.branch_exists(branch_name):
            raise BranchNotFound()

        self.repo.checkout.check_untracked()

        return self.repo.refs.get_branch(branch_name)

    def merge(self, branch_name: str) -> MergeResult:
        """
        Merge a branch into the current branch.

        Args:
            branch_name: Name of branch to merge

        Returns:
            MergeResult describing what happened
        """
        other_hash = self.check_preconditions(branch_name)
        head_hash = self.repo.head

        merge_base = self.find_merge_base(head_hash, other_hash)
        if merge_base is None:
            raise TwigError("No common ancestor found.")

        logger.debug("Merge base of %s and %s is %s",
                     head_hash[:7], other_hash[:7], merge_base[:7])

        if merge_base == other_hash:
            return MergeResult(
                merge_base=merge_base,
                is_up_to_date=True,
                message=ANCESTOR_MESSAGE
            )

        if merge_base == head_hash:
            return self.fast_forward(other_hash, merge_base)

        return self.three_way_merge(merge_base, head_hash, other_hash, branch_name)

    def fast_forward(self, target_hash: str, merge_base: Optional[str] = None) -> MergeResult:
        """
        Move HEAD and the current branch to target and check it out.

        Args:
            target_hash: Target commit hash
            merge_base: Merge base that allowed the fast-forward

        Returns:
            MergeResult indicating a fast-forward
        """
        self.repo.checkout.materialize(target_hash)
        self.repo.refs.advance_head(target_hash)

        return MergeResult(
            commit_hash=target_hash,
            merge_base=merge_base,
            is_fast_forward=True,
            message=FAST_FORWARD_MESSAGE
        )

    def three_way_merge(self, base_hash: str, ours_hash: str, theirs_hash: str,
                        theirs_branch: str) -> MergeResult:
        """
        Perform a three-way merge.

        Changes from 'theirs' are applied on top of the working tree and the
        staging area. Conflicting files receive conflict markers and are
        staged as they are. A merge commit is made whenever any file was
        touched, conflicts included.

        Args:
            base_hash: Common ancestor commit hash
            ours_hash: Our current commit hash
            theirs_hash: Their commit hash to merge in
            theirs_branch: Name of the branch being merged in

        Returns:
            MergeResult with the merge commit and any conflicts
        """
        base_files = self.repo.get_commit(base_hash).tree
        ours_files = self.repo.get_commit(ours_hash).tree
        theirs_files = self.repo.get_commit(theirs_hash).tree

        takes, conflict_paths = self._merge_files(base_files, ours_files, theirs_files)

        conflicts = [
            MergeConflict(
                path=path,
                ours_content=self._get_blob_content(ours_files.get(path)),
                theirs_content=self._get_blob_content(theirs_files.get(path))
            )
            for path in conflict_paths
        ]

        for path, blob_hash in takes.items():
            if blob_hash is None:
                self.repo.checkout.delete_file(path)
                self.repo.index.remove_entry(path)
                logger.debug("Merge deleted %s", path)
            else:
                self.repo.checkout.write_file(path, blob_hash)
                self.repo.index.add_entry(path, blob_hash)
                logger.debug("Merge took %s from %s", path, theirs_branch)

        self.write_conflicts_to_working_tree(conflicts)

        result = MergeResult(conflicts=conflicts, merge_base=base_hash)

        if not takes and not conflicts:
            logger.debug("Merge of %s touched no files; no commit made", theirs_branch)
            return result

        message = f"Merged {theirs_branch} into {self.repo.current_branch}."
        commit = Commit.create(
            tree=self.repo.index.snapshot(),
            parent_hashes=[ours_hash, theirs_hash],
            message=message
        )
        self.repo.add_commit(commit)
        self.repo.refs.advance_head(commit.hash)

        result.commit_hash = commit.hash
        result.message = CONFLICT_MESSAGE if conflicts else message
        logger.debug("Created merge commit %s with %d conflict(s)", commit.hash[:7], len(conflicts))

        return result

    def _merge_files(
        self,
        base_files: Dict[str, str],
        ours_files: Dict[str, str],
        theirs_files: Dict[str, str]
    ) -> Tuple[Dict[str, Optional[str]], List[str]]:
        """
        Classify every path using three-way merge logic.

        Paths in base:
        - unchanged in ours, changed in theirs: take theirs
        - unchanged in ours, removed in theirs: delete
        - changed differently on both sides: conflict
        - anything else: leave as staged

        Paths only in theirs:
        - absent from ours: take theirs
        - different in ours: conflict

        Args:
            base_files: Files in base (common ancestor)
            ours_files: Files in our commit
            theirs_files: Files in their commit

        Returns:
            Tuple of (takes, conflicts) where takes maps path -> their blob
            hash, or None for a deletion
        """
        takes: Dict[str, Optional[str]] = {}
        conflicts: List[str] = []

        for path in sorted(base_files):
            base_hash = base_files[path]
            ours_hash = ours_files.get(path)
            theirs_hash = theirs_files.get(path)

            if ours_hash == base_hash:
                if theirs_hash is None:
                    takes[path] = None
                elif theirs_hash != base_hash:
                    takes[path] = theirs_hash
            elif theirs_hash != base_hash and theirs_hash != ours_hash:
                conflicts.append(path)

        for path in sorted(theirs_files):
            if path in base_files:
                continue

            ours_hash = ours_files.get(path)
            theirs_hash = theirs_files[path]

            if ours_hash is None:
                takes[path] = theirs_hash
            elif ours_hash != theirs_hash:
                conflicts.append(path)

        return takes, sorted(conflicts)

    def _get_blob_content(self, blob_hash: Optional[str]) -> Optional[bytes]:
        """Get content of a blob, or None for an absent file."""
        if blob_hash is None:
            return None
        return self.repo.blobs.get(blob_hash)

    def generate_conflict_markers(self, ours_content: Optional[bytes],
                                  theirs_content: Optional[bytes]) -> bytes:
        """
        Generate conflicted file content.

        Content is inserted verbatim between the marker lines, so a side
        without a trailing newline runs into the next marker. An absent
        side contributes nothing.

        Args:
            ours_content: Content from the current branch
            theirs_content: Content from the branch being merged

        Returns:
            File content with conflict markers
        """
        return b''.join([
            b"<<<<<<< HEAD\n",
            ours_content or b'',
            b"=======\n",
            theirs_content or b'',
            b">>>>>>>\n",
        ])

    def write_conflicts_to_working_tree(self, conflicts: List[MergeConflict]) -> None:
        """
        Store, write and stage conflict-marked content for each conflict.

        Args:
            conflicts: List of merge conflicts
        """
        for conflict in conflicts:
            content = self.generate_conflict_markers(conflict.ours_content, conflict.theirs_content)
            blob_hash = self.repo.blobs.put(content)
            self.repo.checkout.write_file(conflict.path, blob_hash)
            self.repo.index.add_entry(conflict.path, blob_hash)
            logger.debug("Conflict in %s", conflict.path)
