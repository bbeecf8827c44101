"""Read-only projection of tasks into render-ready rows.

Badge kinds: "completed", "overdue", "progress". Status is a closed enum, so
the progress fallback only fires on bad data and is logged when it does.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, Sequence, Tuple
from filters import Counts, StatusFilter, aggregate, categories, filter_tasks
from models import ALL, Status, Task

logger = logging.getLogger(__name__)

BADGE_COMPLETED = 'completed'
BADGE_OVERDUE = 'overdue'
BADGE_PROGRESS = 'progress'

BADGE_KINDS: Dict[str, str] = {
    Status.COMPLETED.value: BADGE_COMPLETED,
    Status.OVERDUE.value: BADGE_OVERDUE,
    Status.IN_PROGRESS.value: BADGE_PROGRESS,
}


@dataclass(frozen=True)
class Row:
    id: str
    name: str
    category: str
    deadline_or_blank: str
    status: str
    badge: str


@dataclass(frozen=True)
class BoardView:
    rows: Tuple[Row, ...]
    counts: Counts
    status_filter: str
    category_filter: str
    categories: Tuple[str, ...]


def badge_kind(status: object) -> str:
    raw = status.value if isinstance(status, Status) else status
    kind = BADGE_KINDS.get(raw)  # type: ignore[arg-type]
    if kind is None:
        logger.warning('Unrecognized status %r rendered as in progress', status)
        return BADGE_PROGRESS
    return kind


def to_row(task: Task) -> Row:
    status = task.status.value if isinstance(task.status, Status) else str(task.status)
    return Row(
        id=task.id,
        name=task.name,
        category=task.category,
        deadline_or_blank=task.deadline or '',
        status=status,
        badge=badge_kind(task.status),
    )


def project(tasks: Sequence[Task], status_filter: StatusFilter = ALL,
            category_filter: str = ALL) -> BoardView:
    visible = filter_tasks(tasks, status_filter, category_filter)
    status_label = status_filter.value if isinstance(status_filter, Status) else str(status_filter)
    return BoardView(
        rows=tuple(to_row(t) for t in visible),
        counts=aggregate(tasks),
        status_filter=status_label,
        category_filter=category_filter,
        categories=tuple(categories(tasks)),
    )
