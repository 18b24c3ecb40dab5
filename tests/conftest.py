"""Shared pytest fixtures for Twig tests."""

import os
import shutil
import tempfile
from pathlib import Path

import pytest

from twig.core.config import Config
from twig.core.objects import Blob
from twig.core.repository import Repository


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep tests away from the user's global config and TWIG_* variables."""
    home = tmp_path_factory.mktemp('home')
    monkeypatch.setattr(Config, 'GLOBAL_CONFIG_PATH', home / '.twigconfig')
    for key in list(os.environ):
        if key.startswith('TWIG_'):
            monkeypatch.delenv(key)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    tmpdir = tempfile.mkdtemp()
    yield Path(tmpdir).resolve()
    shutil.rmtree(tmpdir, ignore_errors=True)


@pytest.fixture
def repo(temp_dir, monkeypatch):
    """Create an initialized repository and run the test from its root."""
    monkeypatch.chdir(temp_dir)
    repo = Repository(str(temp_dir))
    repo.init()
    return repo


@pytest.fixture
def commit_file():
    """Return a helper that writes, stages and commits one file."""
    def _commit_file(repo, path, content, message=None):
        full_path = repo.work_tree / path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, str):
            content = content.encode()
        full_path.write_bytes(content)
        repo.add(path)
        return repo.commit(message or f"Update {path}")
    return _commit_file


@pytest.fixture
def repo_with_commits(repo, commit_file):
    """Repository with two commits on master."""
    commit_file(repo, 'file1.txt', 'Hello, World!\n', 'First commit')
    commit_file(repo, 'file2.txt', 'Second file\n', 'Second commit')
    return repo


@pytest.fixture
def sample_blob():
    """Create a sample blob object."""
    return Blob(b"Hello, World!\n")

