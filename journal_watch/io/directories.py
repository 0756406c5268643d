"""XDG Base Directory support for journal-watch."""

import os
from pathlib import Path

APP_DIR_NAME = "journal-watch"


def get_config_dir() -> Path:
    """Get the configuration directory for journal-watch.

    Returns ~/.config/journal-watch/ by default, or respects $XDG_CONFIG_HOME
    if set. Does NOT create the directory: the tool never writes state.

    Returns:
        Path to the configuration directory
    """
    xdg_config_home = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config_home:
        return Path(xdg_config_home) / APP_DIR_NAME
    return Path.home() / ".config" / APP_DIR_NAME


def get_default_config_path() -> Path:
    """Location of the optional YAML configuration file."""
    return get_config_dir() / f"{APP_DIR_NAME}.yaml"
