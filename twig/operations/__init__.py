"""Operations module for high-level Twig operations.

This module contains the business logic for Twig operations like:
- Checkout and reset (working tree reconciliation)
- Merge algorithms
- Status computation
"""

from twig.operations.checkout import Reconciler, is_untracked
from twig.operations.merge import MergeEngine, MergeResult, MergeConflict
from twig.operations.status import StatusReporter, StatusReport

__all__ = [
    'Reconciler', 'is_untracked',
    'MergeEngine', 'MergeResult', 'MergeConflict',
    'StatusReporter', 'StatusReport',
]
