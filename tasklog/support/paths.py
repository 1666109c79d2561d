"""
Path helpers for the tasklog data directory.

Provides utilities for deriving the data root and the files stored in it.
"""

import os
from pathlib import Path
from typing import Optional, Union

from tasklog.constants import CONFIG_FILE_NAME, DATA_DIR_NAME, HOME_ENV_VAR


def get_data_root(explicit: Optional[Union[str, Path]] = None) -> Path:
    """Get the absolute path to the data directory.

    Resolution order: explicit path, $TASKLOG_HOME, $XDG_CONFIG_HOME/tasklog,
    then ~/.config/tasklog.

    Args:
        explicit: Directory given on the command line, if any.

    Returns:
        Absolute Path to the data directory (not created).
    """
    if explicit:
        return Path(explicit).expanduser().resolve()

    env_home = os.environ.get(HOME_ENV_VAR)
    if env_home:
        return Path(env_home).expanduser().resolve()

    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return (base / DATA_DIR_NAME).resolve()


def get_config_path(root: Path) -> Path:
    """Get the path of the YAML configuration file inside a data root."""
    return root / CONFIG_FILE_NAME


def resolve_tasks_file(root: Path, tasks_file: Union[str, Path]) -> Path:
    """Resolve the configured tasks file; relative paths live under the data root."""
    path = Path(tasks_file).expanduser()
    if not path.is_absolute():
        path = root / path
    return path
