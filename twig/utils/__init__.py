"""Utility modules for Twig.

This module contains helper utilities:
- Working tree listing
"""

from twig.utils.worktree import plain_files

__all__ = ['plain_files']
