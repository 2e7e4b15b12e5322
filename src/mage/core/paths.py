"""Path resolution for manifest entries."""

from __future__ import annotations

import os
from pathlib import Path, PurePath
from typing import Optional, Union

from .errors import InvalidPathError

HOME_MARKER = "~"


def get_home(home: Optional[Union[str, Path]] = None) -> Path:
    """Return the given home directory, or the current user's one."""
    if home is not None:
        return Path(home)
    try:
        return Path.home()
    except RuntimeError as e:
        raise InvalidPathError(f"Could not determine home directory: {e}") from e


def resolve_target(raw: str, home: Optional[Union[str, Path]] = None) -> Path:
    """Expand a target path from the magefile to an absolute path.

    Only a leading ``~`` component is expanded. ``~user`` forms are left
    alone and, being relative, are rejected.

    Args:
        raw: Target path as written in the magefile.
        home: Home directory to expand ``~`` against. Defaults to the home
            directory of the current user.

    Returns:
        The absolute target path.

    Raises:
        InvalidPathError: If the path is empty, the home directory cannot be
            determined, or the result is not absolute.

    Example:
        ```python
        resolve_target("~/.bashrc", home="/home/u")  # Path("/home/u/.bashrc")
        resolve_target("/etc/x")  # Path("/etc/x")
        ```
    """
    if not raw:
        raise InvalidPathError("Target path is empty")

    path = PurePath(raw)
    if path.parts and path.parts[0] == HOME_MARKER:
        result = get_home(home).joinpath(*path.parts[1:])
    else:
        result = Path(path)

    if not result.is_absolute():
        raise InvalidPathError(f"Target path is not absolute: {raw}")
    return result


def resolve_source(repo_root: Union[str, Path], key: str) -> Path:
    """Resolve a magefile key to a path inside the repository.

    The key is a path relative to the repository root and may name a nested
    file such as ``nested/.bashrc``. The check is purely lexical; nothing is
    read from disk.

    Raises:
        InvalidPathError: If the key is empty or absolute, or if it resolves
            to the root itself or to anything outside it.
    """
    if not key:
        raise InvalidPathError("Source key is empty")
    if PurePath(key).is_absolute():
        raise InvalidPathError(f"Source key must be relative to the repository: {key}")

    root = os.path.normpath(str(repo_root))
    source = os.path.normpath(os.path.join(root, key))

    if source == root or os.path.commonpath([root, source]) != root:
        raise InvalidPathError(f"Source key escapes the repository root: {key}")
    return Path(source)


def expand_path(value: Union[str, Path], home: Optional[Union[str, Path]] = None) -> Path:
    """Expand a user-supplied path such as a clone directory.

    Unlike :func:`resolve_target`, relative paths are accepted and made
    absolute against the current working directory.
    """
    value = str(value)
    if PurePath(value).parts[:1] == (HOME_MARKER,):
        return resolve_target(value, home)
    return Path(value).absolute()
