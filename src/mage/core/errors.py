"""Exceptions raised by mage."""

from typing import Optional


class MageError(Exception):
    """Base class for all mage errors."""


class InvalidPathError(MageError):
    """A path could not be expanded or escapes the repository root."""


class ManifestFormatError(MageError):
    """The magefile is malformed or an entry is missing a required field.

    Attributes:
        key: The manifest entry that caused the error, if known.
    """

    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.key = key


class ManifestNotFoundError(MageError):
    """No magefile was found in the repository root."""


class RepositoryMissingError(MageError):
    """The repository root does not exist."""


class CloneError(MageError):
    """Cloning the dotfiles repository failed."""


class InvalidOriginError(MageError):
    """The dotfiles origin is neither a directory nor a repository URL."""
