"""Bootstrap functionality for mage."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, List, Optional, Tuple, Union

from .config import Config
from .errors import RepositoryMissingError
from .install_check import check_installed
from .linker import Linker, LinkResult, LinkStatus
from .manifest import find_manifest, load_manifest
from .repository import GitRepository

logger = logging.getLogger(__name__)

Cloner = Callable[[str, Path], object]


@dataclass
class BootstrapReport:
    """Everything a bootstrap run did, for presentation."""

    repo_root: Path
    manifest_path: Path
    cloned: bool = False
    results: List[LinkResult] = field(default_factory=list)

    def count(self, status: LinkStatus) -> int:
        return sum(1 for result in self.results if result.status is status)

    @property
    def linked(self) -> int:
        return self.count(LinkStatus.LINKED)

    @property
    def skipped(self) -> int:
        return self.count(LinkStatus.SKIPPED)

    @property
    def failed(self) -> int:
        return self.count(LinkStatus.FAILED)

    @property
    def ok(self) -> bool:
        return self.failed == 0


class BootstrapManager:
    """Manages cloning a dotfiles repository and linking its entries."""

    def __init__(
        self,
        config: Config,
        linker: Optional[Linker] = None,
        cloner: Optional[Cloner] = None,
    ):
        """Initialize bootstrap manager.

        Args:
            config: mage configuration.
            linker: Linker to use. Defaults to one for the current user's
                home, with install checks when the config enables them.
            cloner: Callable taking ``(url, dest)`` that clones a repository
                and raises ``CloneError`` on failure. Defaults to
                :meth:`GitRepository.clone`.
        """
        self.config = config
        if linker is None:
            linker = Linker(install_checker=check_installed if config.check_installed else None)
        self.linker = linker
        self.cloner = cloner if cloner is not None else GitRepository.clone

    def ensure_repository(
        self, repo_url: Optional[str], local_clone_path: Union[str, Path]
    ) -> Tuple[GitRepository, bool]:
        """Return the local repository, cloning it first if it is missing.

        An existing ``local_clone_path`` directory is used as is, whatever it
        contains.

        Returns:
            The repository and whether it was cloned by this call.

        Raises:
            CloneError: If cloning fails.
            RepositoryMissingError: If the path is missing and there is no
                URL to clone from.
        """
        repo = GitRepository(local_clone_path)
        if repo.exists():
            logger.debug("Using existing repository at %s", repo.path)
            return repo, False

        if repo_url is None:
            raise RepositoryMissingError(f"Repository root does not exist: {repo.path}")

        self.cloner(repo_url, repo.path)
        return repo, True

    def resolve_manifest(
        self, repo: GitRepository, manifest_path: Optional[Union[str, Path]] = None
    ) -> Path:
        """Locate the magefile, relative to the repository root unless absolute."""
        if manifest_path is None:
            return find_manifest(repo.path, self.config.manifest_prefix)
        return repo.path / Path(manifest_path)

    def run(
        self,
        repo_url: Optional[str],
        local_clone_path: Union[str, Path],
        manifest_path: Optional[Union[str, Path]] = None,
    ) -> BootstrapReport:
        """Clone (if needed) and link every entry of the magefile.

        Args:
            repo_url: URL to clone from. ``None`` for a local directory.
            local_clone_path: Where the repository lives or is cloned to.
            manifest_path: Magefile to use. Defaults to the first file in the
                repository root named after the configured prefix.

        Returns:
            BootstrapReport: One result per magefile entry.

        Raises:
            CloneError: If cloning fails.
            ManifestFormatError: If the magefile is invalid.
            ManifestNotFoundError: If no magefile is found.
            RepositoryMissingError: If there is no repository to link from.
        """
        repo, cloned = self.ensure_repository(repo_url, local_clone_path)
        manifest = self.resolve_manifest(repo, manifest_path)
        entries = load_manifest(manifest)

        logger.info("Linking %d entries from %s", len(entries), manifest)
        results = self.linker.link_all(repo.path, entries)

        report = BootstrapReport(repo.path, manifest, cloned, results)
        logger.info(
            "Linked %d, skipped %d, failed %d", report.linked, report.skipped, report.failed
        )
        return report

    def clean(
        self,
        local_path: Union[str, Path],
        manifest_path: Optional[Union[str, Path]] = None,
    ) -> List[LinkResult]:
        """Remove the symlinks that point into an existing local repository."""
        repo, _ = self.ensure_repository(None, local_path)
        entries = load_manifest(self.resolve_manifest(repo, manifest_path))
        return self.linker.unlink_all(repo.path, entries)
