"""Tests for path resolution."""

from pathlib import Path

import pytest

from mage.core.errors import InvalidPathError
from mage.core.paths import expand_path, resolve_source, resolve_target


def test_resolve_target_expands_home() -> None:
    """Test that a leading ~ is replaced by the home directory."""
    assert resolve_target("~/.bashrc", home="/home/u") == Path("/home/u/.bashrc")
    assert resolve_target("~/.config/nvim", home=Path("/home/u")) == Path(
        "/home/u/.config/nvim"
    )
    assert resolve_target("~", home="/home/u") == Path("/home/u")


def test_resolve_target_absolute_unchanged() -> None:
    """Test that absolute paths are returned as they are."""
    assert resolve_target("/etc/x", home="/home/u") == Path("/etc/x")


def test_resolve_target_uses_current_home(home: Path) -> None:
    """Test that HOME is used when no home is passed."""
    assert resolve_target("~/.bashrc") == home / ".bashrc"


@pytest.mark.parametrize("raw", ["", "relative/path", "~user/.bashrc", "x~/.bashrc"])
def test_resolve_target_rejects_invalid(raw: str) -> None:
    """Test that empty and relative targets are rejected."""
    with pytest.raises(InvalidPathError):
        resolve_target(raw, home="/home/u")


def test_resolve_target_rejects_relative_home() -> None:
    """Test that a relative home directory does not produce a relative target."""
    with pytest.raises(InvalidPathError):
        resolve_target("~/.bashrc", home="not/absolute")


def test_resolve_source_root_level() -> None:
    """Test resolving a key at the repository root."""
    assert resolve_source(Path("/repo"), ".bashrc") == Path("/repo/.bashrc")


def test_resolve_source_nested() -> None:
    """Test resolving a nested key."""
    assert resolve_source("/repo", "nested/.bashrc") == Path("/repo/nested/.bashrc")
    assert resolve_source("/repo", "a/../b/./c") == Path("/repo/b/c")


@pytest.mark.parametrize(
    "key", ["../../etc/passwd", "..", "nested/../../outside", "/etc/passwd", "", ".", "a/.."]
)
def test_resolve_source_rejects_traversal(key: str) -> None:
    """Test that keys outside the repository root are rejected."""
    with pytest.raises(InvalidPathError):
        resolve_source("/repo", key)


def test_resolve_source_rejects_sibling_prefix() -> None:
    """Test that a sibling directory sharing the root's prefix is outside the root."""
    with pytest.raises(InvalidPathError):
        resolve_source("/repo", "../repo-other/file")


def test_expand_path(home: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Test expanding user-supplied paths."""
    monkeypatch.chdir(tmp_path)
    assert expand_path("~/.mage") == home / ".mage"
    assert expand_path("dotfiles") == tmp_path / "dotfiles"
    assert expand_path("/abs/path") == Path("/abs/path")
