"""Magefile parsing.

A magefile is a TOML document with one table per entry. The table name is
the path of the source file or directory relative to the repository root:

    ["nested/.bashrc"]
    target_path = "~/.bashrc"

    ["nvim"]
    target_path = "~/.config/nvim"
    is_installed_cmd = "command -v nvim"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from .errors import ManifestFormatError, ManifestNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST_PREFIX = "magefile"
DEFAULT_MANIFEST_NAME = "magefile.toml"

EXAMPLE_MANIFEST = """\
["example.config"]
target_path = "~/.config/example.config"
"""


@dataclass(frozen=True)
class ManifestEntry:
    """One source to target link described by the magefile."""

    key: str
    target_path: str
    is_installed_cmd: Optional[str] = None


def parse(raw_mapping: Mapping[str, Any]) -> List[ManifestEntry]:
    """Build manifest entries from an already deserialized magefile.

    Args:
        raw_mapping: Mapping of entry key to entry table, in file order.

    Returns:
        Entries in the mapping's iteration order.

    Raises:
        ManifestFormatError: If an entry is not a table, has no string
            ``target_path``, or has a non-string ``is_installed_cmd``.
    """
    entries = []
    for key, item in raw_mapping.items():
        if not isinstance(item, Mapping):
            raise ManifestFormatError(f"Entry '{key}' must be a table", key=key)

        target_path = item.get("target_path")
        if target_path is None:
            raise ManifestFormatError(f"No target_path for '{key}'", key=key)
        if not isinstance(target_path, str):
            raise ManifestFormatError(f"target_path for '{key}' must be a string", key=key)
        if not target_path:
            raise ManifestFormatError(f"target_path for '{key}' must not be empty", key=key)

        is_installed_cmd = item.get("is_installed_cmd")
        if is_installed_cmd is not None and not isinstance(is_installed_cmd, str):
            raise ManifestFormatError(
                f"is_installed_cmd for '{key}' must be a string", key=key
            )

        entries.append(ManifestEntry(key, target_path, is_installed_cmd))

    logger.debug("Parsed %d manifest entries", len(entries))
    return entries


def load_manifest(path: Union[str, Path]) -> List[ManifestEntry]:
    """Read and parse a magefile."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ManifestFormatError(f"Failed to read magefile {path}: {e}") from e

    try:
        data = tomllib.loads(content)
    except tomllib.TOMLDecodeError as e:
        raise ManifestFormatError(f"Failed to parse magefile {path}:\n{e}") from e

    logger.debug("Loaded magefile %s", path)
    return parse(data)


def find_manifest(repo_root: Union[str, Path], prefix: str = DEFAULT_MANIFEST_PREFIX) -> Path:
    """Find the magefile in the root of a dotfiles repository.

    Raises:
        ManifestNotFoundError: If no file in the root starts with ``prefix``.
    """
    root = Path(repo_root)
    try:
        candidates = sorted(p for p in root.iterdir() if p.name.startswith(prefix))
    except OSError as e:
        raise ManifestNotFoundError(f"Cannot read repository {root}: {e}") from e

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise ManifestNotFoundError(f"Magefile not found in {root}")


def write_example_manifest(directory: Union[str, Path]) -> Path:
    """Write a starter magefile into ``directory``.

    Raises:
        FileExistsError: If the directory already contains ``magefile.toml``.
    """
    path = Path(directory) / DEFAULT_MANIFEST_NAME
    with open(path, "x", encoding="utf-8") as f:
        f.write(EXAMPLE_MANIFEST)
    logger.debug("Wrote example magefile %s", path)
    return path
