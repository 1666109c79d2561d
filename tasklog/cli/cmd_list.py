"""
tasklog list command implementation.

Displays tasks filtered by status flags and metadata/free-text filters,
optionally as JSON.
"""

import sys
import json
import argparse

from tasklog.cli import render
from tasklog.core.exceptions import TaskLogError
from tasklog.core.metadata import metadata_tokens, tokenize
from tasklog.core.query import compile_query, select_statuses
from tasklog.pipeline.listing import list_tasks


def cmd_list(cli_instance, args: argparse.Namespace) -> int:
    """List tasks.

    Without status flags only active (todo and wip) tasks are listed. Free
    words must all appear in the task name; they ignore case unless
    --case-sensitive is given or the configuration says otherwise.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: todo, start, done,
            cancelled, all, case_sensitive, json, filter

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        tokens = tokenize(*(getattr(args, "filter", None) or []))
        statuses = select_statuses(
            todo=getattr(args, "todo", False),
            wip=getattr(args, "start", False),
            done=getattr(args, "done", False),
            cancelled=getattr(args, "cancelled", False),
            all_statuses=getattr(args, "all", False),
        )
        case_insensitive = cli_instance.config.case_insensitive_search and not getattr(
            args, "case_sensitive", False
        )
        query = compile_query(tokens, statuses, case_insensitive)

        store = cli_instance.repository.load()
        rows = list_tasks(store, query)

    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if getattr(args, "json", False):
        print(json.dumps([row.to_dict() for row in rows], indent=2, ensure_ascii=False))
        return 0

    summary = render.describe_query(metadata_tokens(tokens), query)
    if summary:
        print(summary)

    for line in render.render_rows(rows, cli_instance.config):
        print(line)
    return 0
