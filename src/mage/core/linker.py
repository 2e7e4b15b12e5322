"""Symlink creation for magefile entries."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from .errors import InvalidPathError, RepositoryMissingError
from .manifest import ManifestEntry
from .paths import resolve_source, resolve_target

logger = logging.getLogger(__name__)

TARGET_EXISTS = "target exists"
SOURCE_MISSING = "source missing"


class LinkStatus(str, Enum):
    """Terminal outcome for a single entry."""

    LINKED = "linked"
    SKIPPED = "skipped"
    FAILED = "failed"
    UNLINKED = "unlinked"


@dataclass(frozen=True)
class LinkResult:
    """Outcome of linking or unlinking one manifest entry."""

    key: str
    status: LinkStatus
    reason: Optional[str] = None
    source: Optional[Path] = None
    target: Optional[Path] = None
    installed: Optional[bool] = None


class Linker:
    """Create and remove symlinks from the home directory into a dotfiles repository.

    Every entry is handled on its own: a skipped or failed entry never stops
    the ones after it. Existing files, directories and symlinks at a target
    path are never modified.

    Attributes:
        home: Home directory used to expand ``~`` in target paths. ``None``
            means the current user's home directory.
        install_checker: Optional callable run for entries that carry an
            ``is_installed_cmd``. Its result is reported, never acted on.
    """

    def __init__(
        self,
        home: Optional[Union[str, Path]] = None,
        install_checker: Optional[Callable[[str], bool]] = None,
    ) -> None:
        self.home = Path(home) if home is not None else None
        self.install_checker = install_checker

    def link_all(
        self, repo_root: Union[str, Path], entries: Iterable[ManifestEntry]
    ) -> List[LinkResult]:
        """Link every entry and return one result per entry, in order.

        Raises:
            RepositoryMissingError: If ``repo_root`` is not a directory.
        """
        root = self._check_root(repo_root)
        results = []
        for entry in entries:
            result = self.link_entry(root, entry)
            logger.debug("%s: %s %s", entry.key, result.status.value, result.reason or "")
            results.append(result)
        return results

    def link_entry(self, repo_root: Path, entry: ManifestEntry) -> LinkResult:
        """Decide and perform the link for a single entry."""
        try:
            target = resolve_target(entry.target_path, self.home)
            source = resolve_source(repo_root, entry.key)
        except InvalidPathError as e:
            return self._finish(entry, LinkStatus.FAILED, str(e))

        if os.path.lexists(target):
            return self._finish(entry, LinkStatus.SKIPPED, TARGET_EXISTS, source, target)

        if not source.exists():
            return self._finish(entry, LinkStatus.FAILED, SOURCE_MISSING, source, target)

        if not target.parent.is_dir():
            return self._finish(
                entry,
                LinkStatus.FAILED,
                f"parent directory missing: {target.parent}",
                source,
                target,
            )

        # os.symlink refuses to replace anything created since the check above
        try:
            os.symlink(source, target)
        except FileExistsError:
            return self._finish(entry, LinkStatus.SKIPPED, TARGET_EXISTS, source, target)
        except OSError as e:
            return self._finish(entry, LinkStatus.FAILED, str(e), source, target)

        logger.info("Linked %s -> %s", target, source)
        return self._finish(entry, LinkStatus.LINKED, None, source, target)

    def unlink_all(
        self, repo_root: Union[str, Path], entries: Iterable[ManifestEntry]
    ) -> List[LinkResult]:
        """Remove the symlinks created for the given entries.

        A target is removed only when it is a symlink pointing at the entry's
        source in this repository.

        Raises:
            RepositoryMissingError: If ``repo_root`` is not a directory.
        """
        root = self._check_root(repo_root)
        return [self.unlink_entry(root, entry) for entry in entries]

    def unlink_entry(self, repo_root: Path, entry: ManifestEntry) -> LinkResult:
        """Remove the symlink for a single entry if mage owns it."""
        try:
            target = resolve_target(entry.target_path, self.home)
            source = resolve_source(repo_root, entry.key)
        except InvalidPathError as e:
            return LinkResult(entry.key, LinkStatus.FAILED, str(e))

        if not os.path.lexists(target):
            return LinkResult(entry.key, LinkStatus.SKIPPED, "target missing", source, target)
        if not target.is_symlink():
            return LinkResult(entry.key, LinkStatus.SKIPPED, "not a symlink", source, target)

        destination = Path(os.path.normpath(target.parent / os.readlink(target)))
        if destination != source:
            return LinkResult(
                entry.key, LinkStatus.SKIPPED, "symlink points elsewhere", source, target
            )

        try:
            target.unlink()
        except OSError as e:
            return LinkResult(entry.key, LinkStatus.FAILED, str(e), source, target)

        logger.info("Removed symlink %s", target)
        return LinkResult(entry.key, LinkStatus.UNLINKED, None, source, target)

    def _check_root(self, repo_root: Union[str, Path]) -> Path:
        root = Path(repo_root).absolute()
        if not root.is_dir():
            raise RepositoryMissingError(f"Repository root does not exist: {root}")
        return root

    def _finish(
        self,
        entry: ManifestEntry,
        status: LinkStatus,
        reason: Optional[str],
        source: Optional[Path] = None,
        target: Optional[Path] = None,
    ) -> LinkResult:
        installed = None
        if entry.is_installed_cmd and self.install_checker is not None:
            installed = self.install_checker(entry.is_installed_cmd)
        return LinkResult(entry.key, status, reason, source, target, installed)
