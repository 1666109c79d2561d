"""
Interactive note editing.

Writes a temporary Markdown file, opens it in the user's editor and reads
the result back once the editor exits. When note history is enabled the
file starts with the previous notes quoted above a scissors marker; only
what follows the marker is kept.
"""

import logging
import subprocess
import tempfile
from pathlib import Path
from typing import List

from tasklog.constants import NOTE_FILE_NAME, PREVIOUS_NOTES_HELP_END_MARKER
from tasklog.core.exceptions import AbortedByUser, EditorError, NoteEditError
from tasklog.core.formatting import format_timestamp
from tasklog.core.models import ProjectedTask
from tasklog.support.config import Config
from tasklog.support.env import resolve_editor

logger = logging.getLogger(__name__)


def interactively_edit(editor: List[str], file_name: str, content: str) -> str:
    """Open ``editor`` on a temporary file pre-filled with ``content``.

    Args:
        editor: Editor argv (see ``resolve_editor``).
        file_name: Name of the temporary file (its extension helps editors).
        content: Initial file content.

    Returns:
        File content after the editor exits.

    Raises:
        EditorError: If the editor cannot be started or exits non-zero.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        file_path = Path(tmpdir) / file_name
        logger.debug(f"Creating temporary file {file_path}")
        file_path.write_text(content, encoding="utf-8")

        try:
            result = subprocess.run([*editor, str(file_path)])
        except OSError as e:
            raise EditorError(editor[0], str(e))

        if result.returncode != 0:
            raise EditorError(editor[0], f"exit code {result.returncode}")

        try:
            return file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise EditorError(editor[0], f"cannot read back {file_path.name}: {e}")


def build_note_prefill(task: ProjectedTask, prefill: str, with_history: bool) -> str:
    """Build the initial content of the note file."""
    if not with_history:
        return prefill

    blocks = []
    for note in task.notes:
        header = f"> Note #{note.uid}, on {format_timestamp(note.created_at)}"
        if note.edited:
            header += f", modified on {format_timestamp(note.modified_at)}"
        quoted = "\n".join(f"> {line}" for line in note.text.rstrip("\n").splitlines())
        blocks.append(f"{header}\n{quoted}" if quoted else header)

    parts = ["\n\n".join(blocks) + "\n" if blocks else ""]
    parts.append(
        "> Above are the previously recorded notes. They are only shown for reference.\n"
        "> Write your note under the following line. However, do not remove this line!\n"
    )
    parts.append(PREVIOUS_NOTES_HELP_END_MARKER)
    parts.append(prefill)
    return "".join(parts)


def extract_note(content: str, with_history: bool) -> str:
    """Extract the note text from the edited file.

    Raises:
        NoteEditError: If the history marker line was removed.
        AbortedByUser: If the note is empty.
    """
    if with_history:
        index = content.find(PREVIOUS_NOTES_HELP_END_MARKER)
        if index < 0:
            raise NoteEditError("the marker line separating previous notes was removed")
        content = content[index + len(PREVIOUS_NOTES_HELP_END_MARKER):]

    if not content.strip():
        raise AbortedByUser()
    return content.strip("\n") + "\n"


def edit_note(
    config: Config, task: ProjectedTask, prefill: str = "", with_history: bool = False
) -> str:
    """Interactively write (or rewrite) a note for ``task``.

    Args:
        config: Configuration (editor fallback).
        task: Projected task whose previous notes may be shown.
        prefill: Text placed where the note is written (existing note on edit).
        with_history: Quote the previous notes above a marker line.

    Returns:
        Note text ready to be recorded.

    Raises:
        EditorUnavailable: If no editor is configured.
        EditorError: If the editor fails.
        NoteEditError: If the marker line was removed.
        AbortedByUser: If the note came back empty.
    """
    editor = resolve_editor(config.interactive_editor)
    content = interactively_edit(
        editor, NOTE_FILE_NAME, build_note_prefill(task, prefill, with_history)
    )
    return extract_note(content, with_history)
