"""Core functionality for Twig.

This module contains the core data structures:
- Twig objects (Blob, Commit)
- Repository management and the blob store
- Index/staging area
- Reference management
- Configuration management
- Hashing utilities
- Error types

For checkout, merge and status, see twig.operations
"""

from twig.core.objects import TwigObject, Blob, Commit
from twig.core.repository import Repository, BlobStore
from twig.core.hash import hash_object, hash_file
from twig.core.index import Index
from twig.core.refs import RefManager
from twig.core.config import Config, get_config
from twig.core.errors import TwigError

__all__ = [
    'TwigObject',
    'Blob',
    'Commit',
    'Repository',
    'BlobStore',
    'Index',
    'RefManager',
    'Config',
    'get_config',
    'hash_object',
    'hash_file',
    'TwigError',
]
