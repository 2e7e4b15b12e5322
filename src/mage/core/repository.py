"""Dotfiles repository handling."""

from __future__ import annotations

import logging
import re
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .errors import CloneError, InvalidOriginError
from .paths import expand_path

logger = logging.getLogger(__name__)

REPO_URL_PATTERNS = [
    re.compile(r"git@github\.com:[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+\.git"),
    re.compile(r"https://github\.com/[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+\.git"),
]
GITHUB_SHORTHAND_PATTERN = re.compile(r"[A-Za-z0-9_.-]+/[A-Za-z0-9_.-]+")


class GitRepository:
    """A local clone of a dotfiles repository.

    mage treats the clone as a read-only source tree: it is created by
    :meth:`clone` when missing and is never modified or removed afterwards.

    Attributes:
        path (Path): Absolute path to the repository root.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path).absolute()

    def __str__(self) -> str:
        return f"GitRepository({self.path})"

    def __repr__(self) -> str:
        return self.__str__()

    def exists(self) -> bool:
        """Check if the repository root exists as a directory."""
        return self.path.is_dir()

    @classmethod
    def clone(cls, url: str, dest: Union[str, Path]) -> "GitRepository":
        """Clone ``url`` into ``dest``.

        Args:
            url: Repository URL understood by ``git clone``.
            dest: Destination directory. Must not exist yet.

        Returns:
            GitRepository: The new clone.

        Raises:
            CloneError: If ``dest`` already exists, git is not installed, or
                the clone fails.
        """
        dest = Path(dest)
        if dest.exists():
            raise CloneError(f"Target path {dest} already exists")

        logger.debug("Cloning %s into %s", url, dest)
        try:
            subprocess.run(
                ["git", "clone", url, str(dest)],
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise CloneError(f"git is not installed: {e}") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or e.stdout or "").strip()
            message = f"Failed to clone repository {url}"
            raise CloneError(f"{message}: {detail}" if detail else message) from e

        logger.info("Cloned %s into %s", url, dest)
        return cls(dest)


@dataclass(frozen=True)
class DotfilesOrigin:
    """Where the dotfiles come from.

    ``url`` is ``None`` for a local directory, which is used in place.
    """

    path: Path
    url: Optional[str] = None

    @property
    def is_remote(self) -> bool:
        return self.url is not None


def is_valid_repo_url(value: str) -> bool:
    """Check for a full GitHub SSH or HTTPS clone URL."""
    return any(pattern.fullmatch(value) for pattern in REPO_URL_PATTERNS)


def is_github_repo(value: str) -> bool:
    """Check for a full GitHub URL or an ``owner/repo`` shorthand that is not a local path."""
    if is_valid_repo_url(value):
        return True
    if Path(value).exists():
        return False
    return GITHUB_SHORTHAND_PATTERN.fullmatch(value) is not None


def full_repo_url(shorthand: str) -> str:
    """Expand ``owner/repo`` to an SSH clone URL."""
    return f"git@github.com:{shorthand}.git"


def parse_origin(
    value: str,
    clone_path: Union[str, Path],
    home: Optional[Union[str, Path]] = None,
) -> DotfilesOrigin:
    """Work out whether ``value`` is a local directory or a repository to clone.

    Args:
        value: Directory path, GitHub clone URL, or ``owner/repo``.
        clone_path: Where a remote origin is cloned. ``~`` is expanded.
        home: Home directory for ``~`` expansion.

    Raises:
        InvalidOriginError: If ``value`` is none of the accepted forms.
    """
    local = expand_path(value, home)
    if local.is_dir():
        origin = DotfilesOrigin(local)
    elif is_valid_repo_url(value):
        origin = DotfilesOrigin(expand_path(clone_path, home), value)
    elif is_github_repo(value):
        origin = DotfilesOrigin(expand_path(clone_path, home), full_repo_url(value))
    else:
        raise InvalidOriginError(f"This url seems to be invalid: {value}")

    logger.debug("Parsed origin %r as %s", value, origin)
    return origin
