"""Test configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from mage.core.config import Config

MANIFEST = """\
["nested/.bashrc"]
target_path = "~/.bashrc"

["example.config"]
target_path = "~/.config/example.config"

["nvim"]
target_path = "~/.config/nvim"
is_installed_cmd = "true"
"""


@pytest.fixture
def home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a fake home directory and point HOME at it."""
    home_dir = tmp_path / "home"
    (home_dir / ".config").mkdir(parents=True)
    monkeypatch.setenv("HOME", str(home_dir))
    return home_dir


@pytest.fixture
def dotfiles_repo(tmp_path: Path) -> Path:
    """Create a dotfiles repository with a magefile."""
    repo_dir = tmp_path / "dotfiles"
    (repo_dir / "nested").mkdir(parents=True)
    (repo_dir / "nested" / ".bashrc").write_text("export EDITOR=nvim\n")
    (repo_dir / "example.config").write_text("key = value\n")
    (repo_dir / "nvim").mkdir()
    (repo_dir / "nvim" / "init.lua").write_text("vim.o.number = true\n")
    (repo_dir / "magefile.toml").write_text(MANIFEST)
    return repo_dir


@pytest.fixture
def write_manifest(dotfiles_repo: Path) -> Callable[[str], Path]:
    """Return a helper that replaces the repository's magefile."""

    def write(content: str) -> Path:
        path = dotfiles_repo / "magefile.toml"
        path.write_text(content)
        return path

    return write


@pytest.fixture
def test_config() -> Config:
    """Create a configuration without install checks."""
    config = Config()
    config._merge_config({"check_installed": False})
    return config
