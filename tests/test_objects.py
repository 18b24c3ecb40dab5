"""Object model tests."""

import pytest
from twig.core.hash import hash_object
from twig.core.objects import Blob, Commit


def test_blob_hash_is_content_digest(sample_blob):
    """Test blob identity is the digest of its bytes."""
    assert sample_blob.hash == hash_object(b"Hello, World!\n")
    assert sample_blob.type == 'blob'


def test_blob_from_file(temp_dir):
    """Test creating a blob from a file."""
    path = temp_dir / 'data.bin'
    path.write_bytes(b'\x00\x01binary')
    blob = Blob.from_file(str(path))
    assert blob.data == b'\x00\x01binary'


def test_root_commit_hash():
    """Test an empty commit without parents hashes like empty content."""
    commit = Commit.create({}, [], 'initial commit', timestamp=0)
    assert commit.hash == hash_object(b'')


def test_commit_hash_ignores_insertion_order():
    """Test the same tree built in a different order hashes identically."""
    tree1 = {}
    tree1['b.txt'] = 'b' * 40
    tree1['a.txt'] = 'a' * 40
    tree1['sub/c.txt'] = 'c' * 40

    tree2 = {}
    tree2['sub/c.txt'] = 'c' * 40
    tree2['a.txt'] = 'a' * 40
    tree2['b.txt'] = 'b' * 40

    commit1 = Commit.create(tree1, ['1' * 40], 'one', timestamp=1)
    commit2 = Commit.create(tree2, ['1' * 40], 'one', timestamp=1)
    assert commit1.hash == commit2.hash


def test_commit_hash_ignores_message_and_time():
    """Test message and timestamp do not take part in the hash."""
    tree = {'a.txt': 'a' * 40}
    commit1 = Commit.create(tree, ['1' * 40], 'first', timestamp=1)
    commit2 = Commit.create(tree, ['1' * 40], 'second', timestamp=2)
    assert commit1.hash == commit2.hash


def test_commit_hash_depends_on_parents():
    """Test identical content with different parents hashes differently."""
    tree = {'a.txt': 'a' * 40}
    commit1 = Commit.create(tree, ['1' * 40], 'msg', timestamp=1)
    commit2 = Commit.create(tree, ['2' * 40], 'msg', timestamp=1)
    commit3 = Commit.create(tree, ['1' * 40, '2' * 40], 'msg', timestamp=1)
    commit4 = Commit.create(tree, ['2' * 40, '1' * 40], 'msg', timestamp=1)
    assert len({commit1.hash, commit2.hash, commit3.hash, commit4.hash}) == 4


def test_commit_hash_depends_on_content():
    """Test different content with the same parents hashes differently."""
    commit1 = Commit.create({'a.txt': 'a' * 40}, ['1' * 40], 'msg', timestamp=1)
    commit2 = Commit.create({'a.txt': 'b' * 40}, ['1' * 40], 'msg', timestamp=1)
    commit3 = Commit.create({'b.txt': 'a' * 40}, ['1' * 40], 'msg', timestamp=1)
    assert len({commit1.hash, commit2.hash, commit3.hash}) == 3


def test_commit_create_copies_tree():
    """Test later changes to the source mapping do not leak into the commit."""
    tree = {'a.txt': 'a' * 40}
    commit = Commit.create(tree, [], 'msg', timestamp=1)
    tree['b.txt'] = 'b' * 40
    assert commit.tree == {'a.txt': 'a' * 40}


def test_commit_dict_roundtrip():
    """Test a commit survives conversion to and from a dictionary."""
    commit = Commit.create({'a.txt': 'a' * 40}, ['1' * 40, '2' * 40], 'Merge', timestamp=42)
    restored = Commit.from_dict(commit.to_dict())

    assert restored.hash == commit.hash
    assert restored.message == 'Merge'
    assert restored.timestamp == 42
    assert restored.parents == ['1' * 40, '2' * 40]
    assert restored.is_merge


def test_commit_from_dict_rejects_tampering():
    """Test a stored hash that does not match the content is refused."""
    data = Commit.create({'a.txt': 'a' * 40}, [], 'msg', timestamp=1).to_dict()
    data['tree']['a.txt'] = 'b' * 40

    with pytest.raises(ValueError):
        Commit.from_dict(data)


def test_commit_hash_path_cannot_pose_as_parent():
    """Test a file name containing a newline cannot mimic a parent field."""
    parent = 'b' * 40
    with_parent = Commit.create({'x': 'a' * 40}, [parent], 'msg', timestamp=1)
    lookalike = Commit.create({'x\nparent ' + parent: 'a' * 40}, [], 'msg', timestamp=1)
    assert with_parent.hash != lookalike.hash


def test_commit_hash_path_cannot_pose_as_file():
    """Test a file name containing a newline cannot mimic a second file."""
    parent = '1' * 40
    two_files = Commit.create({'x': 'a' * 40, 'y': 'a' * 40}, [parent], 'msg', timestamp=1)
    lookalike = Commit.create({'x\n' + 'a' * 40 + ' y': 'a' * 40}, [parent], 'msg', timestamp=1)
    assert two_files.hash != lookalike.hash


def test_commit_serialization_format():
    """Test each field of the identity ends with a NUL byte."""
    commit = Commit.create({'a.txt': 'a' * 40}, ['1' * 40], 'msg', timestamp=1)
    assert commit.serialize() == f"{'a' * 40} a.txt\0parent {'1' * 40}\0".encode()
