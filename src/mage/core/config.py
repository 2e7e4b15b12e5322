"""Configuration management for mage."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from rich.console import Console
from rich.markup import escape

from .manifest import DEFAULT_MANIFEST_PREFIX

console = Console()
logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "~/.config/mage/config.yaml"

DEFAULT_CONFIG: Dict[str, Any] = {
    "clone_path": "~/.mage",
    "manifest_prefix": DEFAULT_MANIFEST_PREFIX,
    "check_installed": True,
    "log_file": None,
}


class Config:
    """Configuration class for mage."""

    def __init__(self) -> None:
        """Initialize configuration with the built-in defaults."""
        self.clone_path: str = DEFAULT_CONFIG["clone_path"]
        self.manifest_prefix: str = DEFAULT_CONFIG["manifest_prefix"]
        self.check_installed: bool = DEFAULT_CONFIG["check_installed"]
        self.log_file: Optional[str] = DEFAULT_CONFIG["log_file"]
        self.load_config()

    def load_config(self, config_file: Optional[Path] = None) -> None:
        """Load configuration from a YAML file on top of the defaults.

        A file that cannot be read or parsed, or that holds values of the
        wrong type, is reported and ignored.
        """
        self._merge_config(DEFAULT_CONFIG)

        if config_file is None:
            return

        try:
            with open(config_file, "r") as f:
                user_config = yaml.safe_load(f)
            if user_config:
                self._merge_config(user_config)
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.debug("Failed to load %s", config_file, exc_info=True)
            console.print(f"[red]Error loading config file: {escape(str(e))}[/red]")
            return

        logger.debug("Loaded config file %s", config_file)

    def _merge_config(self, config: Dict[str, Any]) -> None:
        """Merge configuration with current configuration.

        Every value is checked before any is applied, so a rejected
        configuration leaves the current one untouched.

        Raises:
            ValueError: If the configuration is not a mapping or a value has
                the wrong type.
        """
        if not isinstance(config, dict):
            raise ValueError("Configuration must be a dictionary")

        for key in ("clone_path", "manifest_prefix"):
            if key in config and (not isinstance(config[key], str) or not config[key]):
                raise ValueError(f"{key} must be a non-empty string")

        if "check_installed" in config and not isinstance(config["check_installed"], bool):
            raise ValueError("check_installed must be a boolean")

        if "log_file" in config:
            if config["log_file"] is not None and not isinstance(config["log_file"], str):
                raise ValueError("log_file must be a string")

        self.clone_path = config.get("clone_path", self.clone_path)
        self.manifest_prefix = config.get("manifest_prefix", self.manifest_prefix)
        self.check_installed = config.get("check_installed", self.check_installed)
        self.log_file = config.get("log_file", self.log_file)

    def validate(self) -> List[str]:
        """Validate configuration."""
        errors = []

        if not isinstance(self.clone_path, str) or not self.clone_path:
            errors.append("clone_path must be a non-empty string")

        if not isinstance(self.manifest_prefix, str) or not self.manifest_prefix:
            errors.append("manifest_prefix must be a non-empty string")
        elif "/" in self.manifest_prefix:
            errors.append("manifest_prefix must be a file name, not a path")

        if not isinstance(self.check_installed, bool):
            errors.append("check_installed must be a boolean")

        if self.log_file is not None and not isinstance(self.log_file, str):
            errors.append("log_file must be a string")

        return errors


def load_config(config_file: Optional[Path] = None) -> Config:
    """Build a Config from ``config_file``, or from the default location if it exists."""
    config = Config()
    if config_file is None:
        default = Path(DEFAULT_CONFIG_FILE).expanduser()
        if not default.exists():
            return config
        config_file = default
    config.load_config(config_file)
    return config
