"""
tasklog CLI command implementations.

This package contains individual command handlers for the tasklog CLI.
Commands are organized into separate modules for maintainability.

Public API:
- TaskLogCLI: Facade holding the configuration and the task repository
"""

import argparse
from typing import Optional

# Import command modules (not functions) to avoid namespace conflicts
from tasklog.cli import cmd_add as _cmd_add_module
from tasklog.cli import cmd_edit as _cmd_edit_module
from tasklog.cli import cmd_show as _cmd_show_module
from tasklog.cli import cmd_transitions as _cmd_transitions_module
from tasklog.cli import cmd_list as _cmd_list_module
from tasklog.cli import cmd_note as _cmd_note_module
from tasklog.cli import cmd_project as _cmd_project_module
from tasklog.cli import cmd_config as _cmd_config_module

from tasklog.store import TaskRepository
from tasklog.support.config import Config, load_config


class TaskLogCLI:
    """tasklog CLI interface.

    Each command loads the task collection once and, when it changed
    something, saves it once at the end.
    """

    def __init__(self, config: Optional[Config] = None):
        """Initialize CLI with configuration and task repository."""
        self.config = config or load_config()
        self.repository = TaskRepository(self.config.tasks_path)

    def cmd_add(self, args: argparse.Namespace) -> int:
        """Add a new task (delegates to cmd_add module)."""
        return _cmd_add_module.cmd_add(self, args)

    def cmd_edit(self, args: argparse.Namespace) -> int:
        """Edit a task's name or metadata (delegates to cmd_edit module)."""
        return _cmd_edit_module.cmd_edit(self, args)

    def cmd_show(self, args: argparse.Namespace) -> int:
        """Show task details (delegates to cmd_show module)."""
        return _cmd_show_module.cmd_show(self, args)

    def cmd_history(self, args: argparse.Namespace) -> int:
        """Show a task's event history (delegates to cmd_show module)."""
        return _cmd_show_module.cmd_history(self, args)

    def cmd_todo(self, args: argparse.Namespace) -> int:
        """Mark a task as todo (delegates to cmd_transitions module)."""
        return _cmd_transitions_module.cmd_todo(self, args)

    def cmd_start(self, args: argparse.Namespace) -> int:
        """Start working on a task (delegates to cmd_transitions module)."""
        return _cmd_transitions_module.cmd_start(self, args)

    def cmd_done(self, args: argparse.Namespace) -> int:
        """Mark a task as done (delegates to cmd_transitions module)."""
        return _cmd_transitions_module.cmd_done(self, args)

    def cmd_cancel(self, args: argparse.Namespace) -> int:
        """Cancel a task (delegates to cmd_transitions module)."""
        return _cmd_transitions_module.cmd_cancel(self, args)

    def cmd_list(self, args: argparse.Namespace) -> int:
        """List tasks (delegates to cmd_list module)."""
        return _cmd_list_module.cmd_list(self, args)

    def cmd_note_add(self, args: argparse.Namespace) -> int:
        """Add a note to a task (delegates to cmd_note module)."""
        return _cmd_note_module.cmd_note_add(self, args)

    def cmd_note_edit(self, args: argparse.Namespace) -> int:
        """Edit a task's note (delegates to cmd_note module)."""
        return _cmd_note_module.cmd_note_edit(self, args)

    def cmd_project_rename(self, args: argparse.Namespace) -> int:
        """Rename a project (delegates to cmd_project module)."""
        return _cmd_project_module.cmd_project_rename(self, args)

    def cmd_config_init(self, args: argparse.Namespace) -> int:
        """Write a default configuration (delegates to cmd_config module)."""
        return _cmd_config_module.cmd_config_init(self, args)


__all__ = [
    "TaskLogCLI",
]
