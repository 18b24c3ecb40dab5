"""Exceptions raised by Twig operations.

Every failure a command can hit is a subclass of TwigError. The message of
each exception is the single line shown to the user by the CLI.
"""

from typing import Optional


class TwigError(Exception):
    """Base class for all Twig errors."""

    default_message = "Twig operation failed."

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)


class AlreadyInitialized(TwigError):
    default_message = ("A Twig version-control system already exists "
                       "in the current directory.")


class NotInitialized(TwigError):
    default_message = "Not in an initialized Twig directory."


class CorruptRepository(TwigError):
    default_message = "Repository state is unreadable."


class FileNotFound(TwigError):
    default_message = "File does not exist."


class NothingToCommit(TwigError):
    default_message = "No changes added to the commit."


class EmptyMessage(TwigError):
    default_message = "Please enter a commit message."


class NoReasonToRemove(TwigError):
    default_message = "No reason to remove the file."


class BranchNotFound(TwigError):
    default_message = "A branch with that name does not exist."


class BranchAlreadyExists(TwigError):
    default_message = "A branch with that name already exists."


class CannotRemoveCurrentBranch(TwigError):
    default_message = "Cannot remove the current branch."


class AlreadyOnBranch(TwigError):
    default_message = "No need to checkout the current branch."


class CommitNotFound(TwigError):
    default_message = "No commit with that id exists."


class AmbiguousCommitId(CommitNotFound):
    default_message = "Commit id prefix matches more than one commit."


class FileNotInCommit(TwigError):
    default_message = "File does not exist in that commit."


class UntrackedFileWouldBeOverwritten(TwigError):
    default_message = ("There is an untracked file in the way; "
                       "delete it or add it first.")


class CannotMergeSelf(TwigError):
    default_message = "Cannot merge a branch with itself."


class UncommittedChanges(TwigError):
    default_message = "You have uncommitted changes."


class ObjectNotFound(TwigError):
    """A live pointer references a blob or commit that is missing."""

    default_message = "Object not found; the repository may be corrupt."
