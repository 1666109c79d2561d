"""Core domain model: task events, projected task state and the projection fold.

A task is stored as its ordered event history only. Everything a user sees
(name, status, tags, spent time, notes...) is recomputed from that history by
``project``.
"""

from dataclasses import dataclass, field, fields, replace
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, ClassVar, Dict, FrozenSet, Iterable, List, Optional, Tuple, Union

from tasklog.core.exceptions import InvalidHistory


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Status(str, Enum):
    """Task lifecycle status.

    Any status may move to any other one.
    """

    TODO = "todo"
    WIP = "wip"
    DONE = "done"
    CANCELLED = "cancelled"

    @property
    def is_active(self) -> bool:
        return self in (Status.TODO, Status.WIP)

    @property
    def is_terminal(self) -> bool:
        return not self.is_active

    @property
    def listing_rank(self) -> int:
        """Rank used to order statuses in listings (lower comes first)."""
        order = {
            Status.WIP: 0,
            Status.TODO: 1,
            Status.CANCELLED: 2,
            Status.DONE: 3,
        }
        return order[self]


class Priority(str, Enum):
    """Task priority, ordered Critical > High > Medium > Low."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

    @property
    def rank(self) -> int:
        order = {
            Priority.LOW: 0,
            Priority.MEDIUM: 1,
            Priority.HIGH: 2,
            Priority.CRITICAL: 3,
        }
        return order[self]

    @property
    def short_name(self) -> str:
        names = {
            Priority.LOW: "LOW",
            Priority.MEDIUM: "MED",
            Priority.HIGH: "HIGH",
            Priority.CRITICAL: "CRIT",
        }
        return names[self]


# --------------------------------------------------------------------------
# Events
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class Created:
    at: datetime
    name: str
    project: Optional[str] = None
    priority: Priority = Priority.LOW
    tags: FrozenSet[str] = frozenset()

    kind: ClassVar[str] = "created"


@dataclass(frozen=True)
class NameChanged:
    at: datetime
    new_name: str

    kind: ClassVar[str] = "name_changed"


@dataclass(frozen=True)
class ProjectChanged:
    at: datetime
    new_project: Optional[str] = None

    kind: ClassVar[str] = "project_changed"


@dataclass(frozen=True)
class PriorityChanged:
    at: datetime
    new_priority: Priority

    kind: ClassVar[str] = "priority_changed"


@dataclass(frozen=True)
class TagsChanged:
    at: datetime
    added: FrozenSet[str] = frozenset()
    removed: FrozenSet[str] = frozenset()

    kind: ClassVar[str] = "tags_changed"


@dataclass(frozen=True)
class StatusChanged:
    at: datetime
    new_status: Status

    kind: ClassVar[str] = "status_changed"


@dataclass(frozen=True)
class NoteAdded:
    at: datetime
    note_uid: int
    text: str

    kind: ClassVar[str] = "note_added"


@dataclass(frozen=True)
class NoteEdited:
    at: datetime
    note_uid: int
    text: str

    kind: ClassVar[str] = "note_edited"


Event = Union[
    Created,
    NameChanged,
    ProjectChanged,
    PriorityChanged,
    TagsChanged,
    StatusChanged,
    NoteAdded,
    NoteEdited,
]

EVENT_TYPES: Dict[str, type] = {
    cls.kind: cls
    for cls in (
        Created,
        NameChanged,
        ProjectChanged,
        PriorityChanged,
        TagsChanged,
        StatusChanged,
        NoteAdded,
        NoteEdited,
    )
}

# Field name -> decoder applied when reading an event back from JSON.
_FIELD_DECODERS = {
    "at": lambda v: _parse_timestamp(v),
    "priority": Priority,
    "new_priority": Priority,
    "new_status": Status,
    "tags": lambda v: _parse_string_set(v),
    "added": lambda v: _parse_string_set(v),
    "removed": lambda v: _parse_string_set(v),
    "note_uid": int,
}


def _parse_string_set(value: Any) -> FrozenSet[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ValueError(f"Expected a list of strings, got {value!r}")
    return frozenset(value)


def _parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, frozenset):
        return sorted(value)
    return value


def event_to_dict(event: Event) -> Dict[str, Any]:
    """Convert an event to a JSON-friendly dictionary tagged with its kind."""
    data: Dict[str, Any] = {"kind": event.kind}
    for f in fields(event):
        data[f.name] = _encode_value(getattr(event, f.name))
    return data


def event_from_dict(data: Dict[str, Any]) -> Event:
    """Create an event from its dictionary form.

    Raises:
        ValueError: If the kind is unknown or fields are missing/invalid.
    """
    payload = dict(data)
    kind = payload.pop("kind", None)
    cls = EVENT_TYPES.get(kind)
    if cls is None:
        raise ValueError(f"Unknown event kind: {kind!r}")

    decoded = {}
    for name, value in payload.items():
        decoder = _FIELD_DECODERS.get(name)
        decoded[name] = decoder(value) if decoder and value is not None else value
    try:
        return cls(**decoded)
    except TypeError as e:
        raise ValueError(f"Invalid '{kind}' event: {e}")


# --------------------------------------------------------------------------
# Projection
# --------------------------------------------------------------------------


@dataclass(frozen=True)
class Note:
    """A Markdown note attached to a task."""

    uid: int
    text: str
    created_at: datetime
    modified_at: datetime

    @property
    def edited(self) -> bool:
        return self.modified_at != self.created_at


@dataclass(frozen=True)
class ProjectedTask:
    """Immutable, display-ready snapshot of a task at a given instant."""

    uid: int
    name: str
    project: Optional[str]
    priority: Priority
    tags: FrozenSet[str]
    status: Status
    created_at: datetime
    age: timedelta
    active_duration: timedelta
    completion_duration: Optional[timedelta]
    notes: Tuple[Note, ...] = ()

    @property
    def note_count(self) -> int:
        return len(self.notes)

    @property
    def spent(self) -> timedelta:
        """Time worked on the task: frozen once finished, live otherwise."""
        if self.status.is_terminal and self.completion_duration is not None:
            return self.completion_duration
        return self.active_duration

    @property
    def spent_is_stale(self) -> bool:
        """True when a task went back to todo but kept time from earlier work."""
        return self.status is Status.TODO and self.active_duration > timedelta(0)


def project(history: Iterable[Event], now: datetime, uid: int = 0) -> ProjectedTask:
    """Fold an event history into the task state visible at ``now``.

    Args:
        history: Events in chronological (insertion) order.
        now: Instant used for the age and for a still-open work interval.
        uid: Task UID carried into the snapshot and error messages.

    Returns:
        ProjectedTask snapshot; the history is left untouched.

    Raises:
        InvalidHistory: If the history is empty, does not start with a
            creation event, or refers to notes that were never added.
    """
    events = list(history)
    if not events:
        raise InvalidHistory("empty history", uid)

    first = events[0]
    if not isinstance(first, Created):
        raise InvalidHistory(f"first event is '{first.kind}', expected 'created'", uid)

    name = first.name
    project_name = first.project
    priority = first.priority
    tags = set(first.tags)
    status = Status.TODO
    accumulated = timedelta(0)
    wip_since: Optional[datetime] = None
    completion: Optional[timedelta] = None
    notes: Dict[int, Note] = {}

    for event in events[1:]:
        if isinstance(event, NameChanged):
            name = event.new_name
        elif isinstance(event, ProjectChanged):
            project_name = event.new_project
        elif isinstance(event, PriorityChanged):
            priority = event.new_priority
        elif isinstance(event, TagsChanged):
            tags |= event.added
            tags -= event.removed
        elif isinstance(event, StatusChanged):
            if wip_since is not None:
                accumulated += event.at - wip_since
                wip_since = None
            status = event.new_status
            if status is Status.WIP:
                wip_since = event.at
            elif status.is_terminal:
                completion = accumulated
        elif isinstance(event, NoteAdded):
            if event.note_uid in notes:
                raise InvalidHistory(f"note {event.note_uid} added twice", uid)
            notes[event.note_uid] = Note(event.note_uid, event.text, event.at, event.at)
        elif isinstance(event, NoteEdited):
            if event.note_uid not in notes:
                raise InvalidHistory(f"note {event.note_uid} edited before being added", uid)
            notes[event.note_uid] = replace(
                notes[event.note_uid], text=event.text, modified_at=event.at
            )
        elif isinstance(event, Created):
            raise InvalidHistory("task created twice", uid)
        else:
            raise InvalidHistory(f"unknown event {event!r}", uid)

    active = accumulated
    if wip_since is not None:
        active += max(now - wip_since, timedelta(0))

    return ProjectedTask(
        uid=uid,
        name=name,
        project=project_name,
        priority=priority,
        tags=frozenset(tags),
        status=status,
        created_at=first.at,
        age=now - first.at,
        active_duration=active,
        completion_duration=completion,
        notes=tuple(notes[k] for k in sorted(notes)),
    )


@dataclass
class Task:
    """A task: its UID and its append-only event history."""

    uid: int
    history: List[Event] = field(default_factory=list)

    def append(self, event: Event) -> None:
        self.history.append(event)

    def project(self, now: Optional[datetime] = None) -> ProjectedTask:
        return project(self.history, now or utc_now(), self.uid)

    def next_note_uid(self) -> int:
        """Return the UID the next added note gets (1-based, never reused)."""
        used = [e.note_uid for e in self.history if isinstance(e, NoteAdded)]
        return max(used, default=0) + 1

    def has_note(self, note_uid: int) -> bool:
        return any(
            isinstance(e, NoteAdded) and e.note_uid == note_uid for e in self.history
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Task":
        """Create Task from dictionary."""
        return cls(
            uid=int(data["uid"]),
            history=[event_from_dict(e) for e in data.get("history", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert Task to dictionary."""
        return {
            "uid": self.uid,
            "history": [event_to_dict(e) for e in self.history],
        }
