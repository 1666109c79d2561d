"""
User configuration stored as YAML in the data directory.

Only a handful of values influence behaviour: status aliases, the default
search case sensitivity, note history in the editor, the editor itself and
whether re-applying the current status is recorded.
"""

import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from tasklog.constants import (
    DEFAULT_CANCELLED_ALIAS,
    DEFAULT_DONE_ALIAS,
    DEFAULT_TASKS_FILE,
    DEFAULT_TODO_ALIAS,
    DEFAULT_WIP_ALIAS,
)
from tasklog.core.exceptions import ConfigError
from tasklog.core.models import Status
from tasklog.support.paths import get_config_path, get_data_root, resolve_tasks_file

logger = logging.getLogger(__name__)


@dataclass
class Config:
    """Configuration values with their defaults."""

    tasks_file: str = DEFAULT_TASKS_FILE
    todo_alias: str = DEFAULT_TODO_ALIAS
    wip_alias: str = DEFAULT_WIP_ALIAS
    done_alias: str = DEFAULT_DONE_ALIAS
    cancelled_alias: str = DEFAULT_CANCELLED_ALIAS
    case_insensitive_search: bool = True
    previous_notes_help: bool = True
    interactive_editor: Optional[str] = None
    record_self_transitions: bool = True

    root: Path = field(default_factory=get_data_root, repr=False, compare=False)

    KEY_TYPES = {
        "tasks_file": str,
        "todo_alias": str,
        "wip_alias": str,
        "done_alias": str,
        "cancelled_alias": str,
        "case_insensitive_search": bool,
        "previous_notes_help": bool,
        "interactive_editor": str,
        "record_self_transitions": bool,
    }

    @property
    def tasks_path(self) -> Path:
        return resolve_tasks_file(self.root, self.tasks_file)

    @property
    def config_path(self) -> Path:
        return get_config_path(self.root)

    def status_alias(self, status: Status) -> str:
        aliases = {
            Status.TODO: self.todo_alias,
            Status.WIP: self.wip_alias,
            Status.DONE: self.done_alias,
            Status.CANCELLED: self.cancelled_alias,
        }
        return aliases[status]

    @classmethod
    def from_dict(cls, data: Dict[str, Any], root: Path) -> "Config":
        """Create Config from a parsed YAML mapping.

        Raises:
            ConfigError: On unknown keys or values of the wrong type.
        """
        unknown = set(data) - set(cls.KEY_TYPES)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(sorted(unknown))}")

        for key, value in data.items():
            expected = cls.KEY_TYPES[key]
            if value is not None and not isinstance(value, expected):
                raise ConfigError(
                    f"Configuration key '{key}' must be a {expected.__name__}, got {value!r}"
                )

        values = {k: v for k, v in data.items() if v is not None}
        return cls(root=root, **values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert Config to a YAML-serializable dictionary."""
        data = asdict(self)
        data.pop("root")
        if data["interactive_editor"] is None:
            data.pop("interactive_editor")
        return data

    def save(self) -> Path:
        """Write the configuration file, creating the data directory if needed."""
        self.root.mkdir(parents=True, exist_ok=True)
        content = yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)
        self.config_path.write_text(content, encoding="utf-8")
        logger.info(f"Configuration written to {self.config_path}")
        return self.config_path


def load_config(root: Optional[Union[str, Path]] = None) -> Config:
    """Load the configuration for a data root.

    A missing file yields the defaults.

    Args:
        root: Data directory override (see ``get_data_root``).

    Returns:
        Config instance.

    Raises:
        ConfigError: If the file is unreadable or not valid YAML.
    """
    data_root = get_data_root(root)
    path = get_config_path(data_root)

    if not path.is_file():
        logger.debug(f"No configuration at {path}; using defaults")
        return Config(root=data_root)

    logger.debug(f"Reading configuration from {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}")

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {path} must be a YAML dictionary.")

    return Config.from_dict(data, data_root)
