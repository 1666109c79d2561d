"""
tasklog config command implementation.
"""

import sys
import argparse

from tasklog.support.config import Config


def cmd_config_init(cli_instance, args: argparse.Namespace) -> int:
    """Write a configuration file holding the default values.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: force

    Returns:
        Exit code (0 on success, 1 on error)
    """
    path = cli_instance.config.config_path
    if path.exists() and not getattr(args, "force", False):
        print(f"Error: {path} already exists (use --force to overwrite)", file=sys.stderr)
        return 1

    try:
        written = Config(root=cli_instance.config.root).save()
    except OSError as e:
        print(f"Error: cannot write configuration: {e}", file=sys.stderr)
        return 1

    print(f"Configuration written: {written}")
    return 0
