"""Metadata tokens: parse ``@project +h #tag free words`` style input.

The same tokenizer serves task creation, edition and listing filters.
"""

import logging
from dataclasses import dataclass
from typing import FrozenSet, List, Optional, Sequence, Union

from tasklog.core.exceptions import AmbiguousMetadata
from tasklog.core.models import Priority

logger = logging.getLogger(__name__)

PRIORITY_CODES = {
    "l": Priority.LOW,
    "m": Priority.MEDIUM,
    "h": Priority.HIGH,
    "c": Priority.CRITICAL,
}


@dataclass(frozen=True)
class ProjectToken:
    value: str

    def filter_like(self) -> str:
        return f"@{self.value}"


@dataclass(frozen=True)
class PriorityToken:
    value: Priority

    def filter_like(self) -> str:
        return f"+{self.value.short_name}"


@dataclass(frozen=True)
class TagToken:
    value: str

    def filter_like(self) -> str:
        return f"#{self.value}"


@dataclass(frozen=True)
class FreeWord:
    value: str


Token = Union[ProjectToken, PriorityToken, TagToken, FreeWord]
MetadataToken = Union[ProjectToken, PriorityToken, TagToken]


def parse_word(word: str) -> Token:
    """Classify a single whitespace-free word.

    ``+`` followed by anything but one of ``l m h c`` is not a priority and,
    like a lone ``@`` or ``#``, stays a free word.
    """
    if len(word) >= 2:
        sigil, rest = word[0], word[1:]
        if sigil == "@":
            return ProjectToken(rest)
        if sigil == "#":
            return TagToken(rest)
        if sigil == "+" and rest in PRIORITY_CODES:
            return PriorityToken(PRIORITY_CODES[rest])
    return FreeWord(word)


def tokenize(*texts: str) -> List[Token]:
    """Tokenize one or more strings into metadata tokens and free words.

    Input order is preserved. Never fails.
    """
    tokens = [parse_word(word) for text in texts for word in text.split()]
    logger.debug(f"Extracted tokens: {tokens}")
    return tokens


def free_text(tokens: Sequence[Token]) -> str:
    """Rejoin free words with single spaces, keeping their relative order."""
    return " ".join(t.value for t in tokens if isinstance(t, FreeWord))


def metadata_tokens(tokens: Sequence[Token]) -> List[MetadataToken]:
    return [t for t in tokens if not isinstance(t, FreeWord)]


def validate(tokens: Sequence[Token]) -> None:
    """Reject inputs carrying more than one project or more than one priority.

    Raises:
        AmbiguousMetadata: On duplicated project or priority tokens.
    """
    projects = sum(1 for t in tokens if isinstance(t, ProjectToken))
    priorities = sum(1 for t in tokens if isinstance(t, PriorityToken))

    if projects > 1:
        raise AmbiguousMetadata("project", projects)
    if priorities > 1:
        raise AmbiguousMetadata("priority", priorities)


@dataclass(frozen=True)
class MetadataSummary:
    """Validated, order-independent view over a token sequence."""

    project: Optional[str]
    priority: Optional[Priority]
    tags: FrozenSet[str]
    text: str


def split_metadata(tokens: Sequence[Token]) -> MetadataSummary:
    """Validate tokens and group them by kind.

    Raises:
        AmbiguousMetadata: On duplicated project or priority tokens.
    """
    validate(tokens)

    project = next((t.value for t in tokens if isinstance(t, ProjectToken)), None)
    priority = next((t.value for t in tokens if isinstance(t, PriorityToken)), None)
    tags = frozenset(t.value for t in tokens if isinstance(t, TagToken))

    return MetadataSummary(
        project=project, priority=priority, tags=tags, text=free_text(tokens)
    )
