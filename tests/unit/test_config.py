"""Unit tests for configuration."""

import pytest
from twig.core.config import (Config, DEFAULT_BRANCH, DEFAULT_LOG_DATE_FORMAT,
                              get_config)
from twig.core.errors import TwigError


def test_defaults(temp_dir):
    """Test values fall back to their defaults."""
    config = Config(temp_dir / 'config')
    assert config.default_branch == DEFAULT_BRANCH
    assert config.merge_base_strategy == 'first'
    assert config.log_date_format == DEFAULT_LOG_DATE_FORMAT
    assert config.get('core', 'missing') is None
    assert config.get('core', 'missing', 'x') == 'x'


def test_repo_config_written_on_init(repo):
    """Test init records the repository format version."""
    assert repo.config.get('core', 'repositoryformatversion') == '0'
    assert '[core]' in repo.config_file.read_text()


def test_set_and_get_repo_value(repo):
    """Test repository values persist to the config file."""
    repo.config.set('merge', 'base', 'lowest')
    assert get_config(repo).merge_base_strategy == 'lowest'


def test_global_config(temp_dir):
    """Test global values are used when the repository has none."""
    config = Config(temp_dir / 'config')
    config.set('init', 'defaultbranch', 'trunk', global_config=True)
    assert Config.GLOBAL_CONFIG_PATH.exists()
    assert Config(temp_dir / 'config').default_branch == 'trunk'


def test_repo_overrides_global(repo):
    """Test repository values take precedence over global ones."""
    repo.config.set('merge', 'base', 'lowest', global_config=True)
    repo.config.set('merge', 'base', 'first')
    assert get_config(repo).merge_base_strategy == 'first'


def test_environment_overrides_files(repo, monkeypatch):
    """Test TWIG_<SECTION>_<KEY> wins over config files."""
    repo.config.set('merge', 'base', 'first')
    monkeypatch.setenv('TWIG_MERGE_BASE', 'Lowest')
    assert get_config(repo).merge_base_strategy == 'lowest'


def test_invalid_merge_base(repo, monkeypatch):
    """Test an unknown strategy is rejected."""
    monkeypatch.setenv('TWIG_MERGE_BASE', 'octopus')
    with pytest.raises(TwigError, match='octopus'):
        get_config(repo).merge_base_strategy


def test_log_date_format_read_raw(repo):
    """Test date formats with '%' are not interpolated."""
    repo.config_file.write_text('[core]\nlogdateformat = %Y-%m-%d\n')
    assert get_config(repo).log_date_format == '%Y-%m-%d'


def test_set_without_repo_path():
    """Test writing repository config without a repository."""
    with pytest.raises(ValueError):
        Config().set('core', 'x', 'y')
