"""
tasklog note command implementations.

Handles adding and editing Markdown notes through the interactive editor.
"""

import sys
import argparse

from tasklog.core.exceptions import AbortedByUser, NoteNotFound, TaskLogError
from tasklog.core.models import NoteAdded, NoteEdited, utc_now
from tasklog.support.editor import edit_note


def _with_history(cli_instance, args: argparse.Namespace) -> bool:
    return cli_instance.config.previous_notes_help and not getattr(
        args, "no_history", False
    )


def record_new_note(cli_instance, task_uid: int, with_history: bool) -> int:
    """Open the editor and record its content as a new note on ``task_uid``.

    Returns:
        Exit code (0 on success or empty note, 1 on error)
    """
    try:
        store = cli_instance.repository.load()
        task = store.get(task_uid)
        text = edit_note(cli_instance.config, task.project(), "", with_history)

        note_uid = store.next_note_uid(task_uid)
        store.append_event(task_uid, NoteAdded(at=utc_now(), note_uid=note_uid, text=text))
        cli_instance.repository.save(store)
        print(f"Note {note_uid} added to task {task_uid}")
        return 0

    except AbortedByUser as e:
        print(str(e))
        return 0
    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_note_add(cli_instance, args: argparse.Namespace) -> int:
    """Add a note to a task.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: uid, no_history

    Returns:
        Exit code (0 on success, 1 on error)
    """
    return record_new_note(cli_instance, args.uid, _with_history(cli_instance, args))


def cmd_note_edit(cli_instance, args: argparse.Namespace) -> int:
    """Replace the content of an existing note.

    Args:
        cli_instance: TaskLogCLI instance with config and repository
        args: Parsed command-line arguments with: uid, note_uid, no_history

    Returns:
        Exit code (0 on success, 1 on error)
    """
    try:
        store = cli_instance.repository.load()
        task = store.get(args.uid)
        if not task.has_note(args.note_uid):
            raise NoteNotFound(args.uid, args.note_uid)

        projected = task.project()
        current = next(n for n in projected.notes if n.uid == args.note_uid)
        text = edit_note(
            cli_instance.config, projected, current.text, _with_history(cli_instance, args)
        )

        if text == current.text:
            print(f"Note {args.note_uid} of task {args.uid} unchanged")
            return 0

        store.append_event(
            args.uid, NoteEdited(at=utc_now(), note_uid=args.note_uid, text=text)
        )
        cli_instance.repository.save(store)
        print(f"Note {args.note_uid} of task {args.uid} updated")
        return 0

    except AbortedByUser as e:
        print(str(e))
        return 0
    except TaskLogError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
