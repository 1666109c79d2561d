"""Query compiler: turn listing tokens and status flags into a task predicate."""

import logging
from dataclasses import dataclass
from typing import FrozenSet, Optional, Sequence, Tuple

from tasklog.core.metadata import Token, split_metadata
from tasklog.core.models import Priority, ProjectedTask, Status

logger = logging.getLogger(__name__)

ACTIVE_STATUSES = frozenset({Status.TODO, Status.WIP})
ALL_STATUSES = frozenset(Status)


def select_statuses(
    todo: bool = False,
    wip: bool = False,
    done: bool = False,
    cancelled: bool = False,
    all_statuses: bool = False,
) -> FrozenSet[Status]:
    """Resolve status flags into the set of statuses to show.

    Flags add up. Without any flag only active tasks (todo, wip) are shown.
    """
    if all_statuses:
        return ALL_STATUSES

    selected = set()
    if todo:
        selected.add(Status.TODO)
    if wip:
        selected.add(Status.WIP)
    if done:
        selected.add(Status.DONE)
    if cancelled:
        selected.add(Status.CANCELLED)

    return frozenset(selected) if selected else ACTIVE_STATUSES


def _dedupe_terms(words: Sequence[str], case_insensitive: bool) -> Tuple[str, ...]:
    seen = set()
    terms = []
    for word in words:
        key = word.casefold() if case_insensitive else word
        if key not in seen:
            seen.add(key)
            terms.append(key)
    return tuple(terms)


@dataclass(frozen=True)
class TaskQuery:
    """Compiled listing predicate.

    Every constraint that is set must hold (logical AND). Search terms are
    stored already case-folded when matching is case-insensitive.
    """

    statuses: FrozenSet[Status] = ACTIVE_STATUSES
    project: Optional[str] = None
    priority: Optional[Priority] = None
    tags: FrozenSet[str] = frozenset()
    terms: Tuple[str, ...] = ()
    case_insensitive: bool = True

    def matches(self, task: ProjectedTask) -> bool:
        if task.status not in self.statuses:
            return False
        if self.project is not None and task.project != self.project:
            return False
        if self.priority is not None and task.priority is not self.priority:
            return False
        if not self.tags <= task.tags:
            return False
        return self.matches_text(task.name)

    def matches_text(self, name: str) -> bool:
        if not self.terms:
            return True
        haystack = name.casefold() if self.case_insensitive else name
        return all(term in haystack for term in self.terms)

    @property
    def has_filters(self) -> bool:
        return bool(
            self.project is not None or self.priority is not None or self.tags or self.terms
        )


def compile_query(
    tokens: Sequence[Token],
    statuses: FrozenSet[Status] = ACTIVE_STATUSES,
    case_insensitive: bool = True,
) -> TaskQuery:
    """Compile a listing query.

    Args:
        tokens: Output of ``tokenize`` for the filter text.
        statuses: Statuses to keep (see ``select_statuses``).
        case_insensitive: Whether free-text terms ignore case.

    Returns:
        TaskQuery predicate.

    Raises:
        AmbiguousMetadata: If more than one project or priority is given.
    """
    summary = split_metadata(tokens)
    query = TaskQuery(
        statuses=frozenset(statuses),
        project=summary.project,
        priority=summary.priority,
        tags=summary.tags,
        terms=_dedupe_terms(summary.text.split(), case_insensitive),
        case_insensitive=case_insensitive,
    )
    logger.debug(f"Compiled query: {query}")
    return query
