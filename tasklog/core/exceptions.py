"""Core exceptions: error taxonomy shared by the model, store, editor and CLI."""


class TaskLogError(Exception):
    """Base exception for all tasklog errors."""

    pass


class TaskNotFound(TaskLogError):
    """Raised when a referenced task UID does not exist."""

    def __init__(self, uid: int):
        self.uid = uid
        super().__init__(f"task {uid} doesn't exist")


class NoteNotFound(TaskLogError):
    """Raised when a referenced note UID does not exist on a task."""

    def __init__(self, task_uid: int, note_uid: int):
        self.task_uid = task_uid
        self.note_uid = note_uid
        super().__init__(f"note {note_uid} doesn't exist on task {task_uid}")


class AmbiguousMetadata(TaskLogError):
    """Raised when more than one project or priority is supplied."""

    def __init__(self, kind: str, count: int):
        self.kind = kind
        self.count = count
        plural = "projects" if kind == "project" else "priorities"
        super().__init__(f"too many {plural}: {count} (use at most one)")


class InvalidHistory(TaskLogError):
    """Raised when an event history cannot be projected (persistence defect)."""

    def __init__(self, message: str, uid: int = 0):
        self.uid = uid
        prefix = f"task {uid}: " if uid else ""
        super().__init__(f"{prefix}invalid history: {message}")


class MissingDescription(TaskLogError):
    """Raised when a task is added without any description text."""

    def __init__(self):
        super().__init__("a task needs a description")


class AbortedByUser(TaskLogError):
    """Raised when the edited note came back empty; nothing is recorded."""

    def __init__(self):
        super().__init__("the note was empty; nothing added")


class EditorUnavailable(TaskLogError):
    """Raised when neither $EDITOR nor the configuration names an editor."""

    def __init__(self):
        super().__init__(
            "no interactive editor was found; consider configuring either $EDITOR "
            "or interactive_editor in the configuration"
        )


class EditorError(TaskLogError):
    """Raised when the interactive editor fails to run."""

    def __init__(self, editor: str, message: str):
        self.editor = editor
        super().__init__(f"interactive editor '{editor}' failed: {message}")


class NoteEditError(TaskLogError):
    """Raised when an edited note file cannot be interpreted."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"cannot edit note: {reason}")


class StoreError(TaskLogError):
    """Raised when the task file cannot be read or written."""

    pass


class ConfigError(TaskLogError):
    """Raised when the configuration file is invalid."""

    pass


class ConflictingEdit(TaskLogError):
    """Raised when an edit both sets and removes the same field."""

    def __init__(self, field: str):
        self.field = field
        super().__init__(f"cannot set and remove the {field} at the same time")
