"""Unit tests for reference management."""

import pytest
from twig.core.refs import RefManager
from twig.core.errors import (BranchAlreadyExists, BranchNotFound,
                              CannotRemoveCurrentBranch, ObjectNotFound)


def test_ref_manager_init(repo):
    """Test RefManager initialization."""
    refs = RefManager(repo)
    assert refs.repo == repo
    assert repo.refs.repo is repo


def test_current_branch_and_head(repo):
    """Test reading the current branch and HEAD."""
    assert repo.refs.get_current_branch() == 'master'
    assert repo.refs.resolve_head() == repo.head
    assert repo.refs.read_ref('HEAD') == repo.head
    assert repo.refs.read_ref('master') == repo.head
    assert repo.refs.read_ref('nope') is None


def test_create_branch_at_head(repo_with_commits):
    """Test a new branch points at HEAD and is not checked out."""
    repo = repo_with_commits
    commit_hash = repo.refs.create_branch('feature')
    assert commit_hash == repo.head
    assert repo.branches['feature'] == repo.head
    assert repo.current_branch == 'master'


def test_create_branch_at_commit(repo_with_commits):
    """Test creating a branch at an explicit commit."""
    repo = repo_with_commits
    parent = repo.head_commit().parents[0]
    repo.refs.create_branch('old', parent)
    assert repo.refs.get_branch('old') == parent


def test_create_branch_unknown_commit(repo):
    """Test creating a branch at a commit that does not exist."""
    with pytest.raises(ObjectNotFound):
        repo.refs.create_branch('bad', 'f' * 40)


def test_create_existing_branch(repo):
    """Test creating a branch that already exists."""
    repo.refs.create_branch('feature')
    with pytest.raises(BranchAlreadyExists):
        repo.refs.create_branch('feature')


def test_list_branches_sorted(repo):
    """Test branches are listed by name."""
    repo.refs.create_branch('zeta')
    repo.refs.create_branch('alpha')
    names = [name for name, _ in repo.refs.list_branches()]
    assert names == ['alpha', 'master', 'zeta']


def test_delete_branch(repo_with_commits):
    """Test deleting a branch keeps its commits."""
    repo = repo_with_commits
    repo.refs.create_branch('feature')
    commit_hash = repo.refs.delete_branch('feature')
    assert 'feature' not in repo.branches
    assert commit_hash in repo.commits


def test_delete_missing_branch(repo):
    """Test deleting a branch that does not exist."""
    with pytest.raises(BranchNotFound):
        repo.refs.delete_branch('nope')


def test_delete_current_branch(repo):
    """Test the current branch cannot be deleted."""
    with pytest.raises(CannotRemoveCurrentBranch):
        repo.refs.delete_branch('master')


def test_advance_head_moves_current_branch(repo_with_commits):
    """Test HEAD and the current branch move together."""
    repo = repo_with_commits
    parent = repo.head_commit().parents[0]
    repo.refs.advance_head(parent)
    assert repo.head == parent
    assert repo.branches['master'] == parent


def test_set_current_branch_missing(repo):
    """Test switching the current branch pointer to a missing branch."""
    with pytest.raises(BranchNotFound):
        repo.refs.set_current_branch('nope')
