"""Tests for install checks."""

import subprocess

import pytest

from mage.core.install_check import check_installed


def test_check_installed() -> None:
    """Test the exit status decides the result."""
    assert check_installed("true")
    assert not check_installed("false")
    assert not check_installed("exit 3")


def test_check_installed_without_shell(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that a shell that cannot start counts as not installed."""

    def mock_run(*args: object, **kwargs: object) -> None:
        raise FileNotFoundError("sh")

    monkeypatch.setattr(subprocess, "run", mock_run)
    assert not check_installed("true")
