"""Core functionality for mage."""

from .bootstrap import BootstrapManager, BootstrapReport
from .config import Config
from .linker import Linker, LinkResult, LinkStatus
from .manifest import ManifestEntry
from .repository import GitRepository

__all__ = [
    "BootstrapManager",
    "BootstrapReport",
    "Config",
    "GitRepository",
    "Linker",
    "LinkResult",
    "LinkStatus",
    "ManifestEntry",
]
