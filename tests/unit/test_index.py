"""Unit tests for the index (staging area)."""

import pytest
from twig.core.index import Index
from twig.core.hash import hash_object
from twig.core.errors import FileNotFound


def test_index_empty():
    """Test a new index has no entries."""
    index = Index()
    assert len(index) == 0
    assert index.get_entry('a.txt') is None


def test_add_and_remove_entry():
    """Test adding and removing entries."""
    index = Index()
    index.add_entry('a.txt', 'a' * 40)
    assert 'a.txt' in index
    assert index.remove_entry('a.txt') is True
    assert index.remove_entry('a.txt') is False
    assert 'a.txt' not in index


def test_iteration_is_sorted():
    """Test iteration yields paths in sorted order."""
    index = Index({'b.txt': 'b' * 40, 'a.txt': 'a' * 40, 'sub/c.txt': 'c' * 40})
    assert list(index) == ['a.txt', 'b.txt', 'sub/c.txt']


def test_replace_and_snapshot_are_copies():
    """Test replace and snapshot do not share state with callers."""
    tree = {'a.txt': 'a' * 40}
    index = Index()
    index.replace(tree)
    tree['b.txt'] = 'b' * 40
    assert index.entries == {'a.txt': 'a' * 40}

    snapshot = index.snapshot()
    snapshot['c.txt'] = 'c' * 40
    assert 'c.txt' not in index


def test_matches_compares_hashes():
    """Test matches compares whole mappings, not only paths."""
    index = Index({'a.txt': 'a' * 40})
    assert index.matches({'a.txt': 'a' * 40})
    assert not index.matches({'a.txt': 'b' * 40})
    assert not index.matches({})


def test_add_file_stores_blob(repo):
    """Test staging a file stores its content."""
    (repo.work_tree / 'a.txt').write_text('x\n')
    blob_hash = repo.index.add_file(repo, 'a.txt')

    assert blob_hash == hash_object(b'x\n')
    assert repo.index.get_entry('a.txt') == blob_hash
    assert repo.blobs.get(blob_hash) == b'x\n'


def test_add_file_nested_path(repo):
    """Test nested files are staged with POSIX repository-relative paths."""
    nested = repo.work_tree / 'sub' / 'dir' / 'c.txt'
    nested.parent.mkdir(parents=True)
    nested.write_text('c')
    repo.index.add_file(repo, nested)
    assert 'sub/dir/c.txt' in repo.index


def test_add_file_relative_to_cwd(repo, monkeypatch):
    """Test relative paths are taken from the current directory."""
    subdir = repo.work_tree / 'sub'
    subdir.mkdir()
    (subdir / 'c.txt').write_text('c')
    monkeypatch.chdir(subdir)
    repo.index.add_file(repo, 'c.txt')
    assert 'sub/c.txt' in repo.index


def test_add_file_missing(repo):
    """Test staging a missing file."""
    with pytest.raises(FileNotFound):
        repo.index.add_file(repo, 'missing.txt')


def test_add_directory_is_refused(repo):
    """Test staging a directory."""
    (repo.work_tree / 'sub').mkdir()
    with pytest.raises(FileNotFound):
        repo.index.add_file(repo, 'sub')


def test_add_twice_keeps_latest(repo):
    """Test restaging replaces the hash and keeps the older blob in the store."""
    path = repo.work_tree / 'a.txt'
    path.write_text('first\n')
    first = repo.add('a.txt')
    path.write_text('second\n')
    second = repo.add('a.txt')

    assert first != second
    assert repo.index.entries == {'a.txt': second}
    assert repo.blobs.get(first) == b'first\n'
    assert first not in repo.index.entries.values()
