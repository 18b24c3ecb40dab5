"""Configuration management for Twig.

This module provides a clean interface for reading and writing
both repository-local and global configuration files.
"""

import os
import configparser
from pathlib import Path
from typing import List, Optional, Tuple

from .errors import TwigError

DEFAULT_BRANCH = 'master'
DEFAULT_LOG_DATE_FORMAT = '%a %b %d %H:%M:%S %Y %z'
MERGE_BASE_STRATEGIES = ('first', 'lowest')


class Config:
    """
    Manages Twig configuration files.

    Configuration is stored in INI format:
    - Global config: ~/.twigconfig
    - Repository config: .twig/config

    Repository config takes precedence over global config.
    Environment variables take highest precedence.
    """

    GLOBAL_CONFIG_PATH = Path.home() / '.twigconfig'

    def __init__(self, repo_config_path: Optional[Path] = None):
        """
        Initialize Config manager.

        Args:
            repo_config_path: Path to repository config file, if in a repo
        """
        self.repo_config_path = repo_config_path
        self._global_config = None
        self._repo_config = None

    @property
    def global_config(self) -> configparser.ConfigParser:
        """Load and return global configuration."""
        if self._global_config is None:
            self._global_config = configparser.ConfigParser(interpolation=None)
            if self.GLOBAL_CONFIG_PATH.exists():
                self._global_config.read(self.GLOBAL_CONFIG_PATH)
        return self._global_config

    @property
    def repo_config(self) -> Optional[configparser.ConfigParser]:
        """Load and return repository configuration."""
        if self._repo_config is None and self.repo_config_path:
            self._repo_config = configparser.ConfigParser(interpolation=None)
            if self.repo_config_path.exists():
                self._repo_config.read(self.repo_config_path)
        return self._repo_config

    def get(self, section: str, key: str, fallback: Optional[str] = None) -> Optional[str]:
        """
        Get a configuration value.

        Priority order (highest to lowest):
        1. Environment variables (TWIG_<SECTION>_<KEY>)
        2. Repository config
        3. Global config
        4. Fallback value

        Args:
            section: Config section (e.g., 'merge', 'core')
            key: Config key (e.g., 'base', 'logdateformat')
            fallback: Default value if not found

        Returns:
            Configuration value or fallback
        """
        env_key = f"TWIG_{section.upper()}_{key.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is not None:
            return env_value

        if self.repo_config and self.repo_config.has_option(section, key):
            return self.repo_config.get(section, key)

        if self.global_config.has_option(section, key):
            return self.global_config.get(section, key)

        return fallback

    def set(self, section: str, key: str, value: str, global_config: bool = False) -> None:
        """
        Set a configuration value.

        Args:
            section: Config section
            key: Config key
            value: Value to set
            global_config: If True, write to global config; otherwise repo config
        """
        if global_config:
            config = self.global_config
            config_path = self.GLOBAL_CONFIG_PATH
        else:
            if not self.repo_config_path:
                raise ValueError("No repository config path available")
            config = self.repo_config
            config_path = self.repo_config_path

        if not config.has_section(section):
            config.add_section(section)

        config.set(section, key, value)

        with open(config_path, 'w') as f:
            config.write(f)

    def items(self, global_config: bool = False) -> List[Tuple[str, str]]:
        """
        List the values stored in one config file.

        Args:
            global_config: If True, list global config; otherwise repo config

        Returns:
            List of ('section.key', value) tuples in file order
        """
        config = self.global_config if global_config else self.repo_config
        if config is None:
            return []
        return [(f"{section}.{key}", value)
                for section in config.sections()
                for key, value in config.items(section)]

    @property
    def default_branch(self) -> str:
        """Name given to the first branch of a new repository."""
        return self.get('init', 'defaultbranch', DEFAULT_BRANCH)

    @property
    def merge_base_strategy(self) -> str:
        """
        Merge-base search strategy.

        'first' picks the first common ancestor found breadth-first from
        HEAD. 'lowest' picks the common ancestor closest to both tips.
        """
        strategy = self.get('merge', 'base', 'first').strip().lower()
        if strategy not in MERGE_BASE_STRATEGIES:
            raise TwigError(
                f"Invalid merge.base '{strategy}', expected one of: {', '.join(MERGE_BASE_STRATEGIES)}"
            )
        return strategy

    @property
    def log_date_format(self) -> str:
        """strftime format used for commit dates in log output."""
        return self.get('core', 'logdateformat', DEFAULT_LOG_DATE_FORMAT)


def get_config(repo=None) -> Config:
    """
    Get a Config instance.

    Args:
        repo: Repository instance, or None for global-only config

    Returns:
        Config instance
    """
    if repo:
        return Config(repo.config_file)
    return Config()
