"""Filtering and summary counts over the task list."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Union
from models import ALL, Status, Task

StatusFilter = Union[Status, str]


@dataclass(frozen=True)
class Counts:
    all: int = 0
    in_progress: int = 0
    completed: int = 0
    overdue: int = 0


def filter_tasks(tasks: Iterable[Task], status_filter: StatusFilter = ALL,
                 category_filter: str = ALL) -> List[Task]:
    """Tasks matching both filters, in their original order.

    Each filter is either "All" or an exact value; the input is never
    modified.
    """
    return [
        t for t in tasks
        if (status_filter == ALL or t.status == status_filter)
        and (category_filter == ALL or t.category == category_filter)
    ]


def aggregate(tasks: Sequence[Task]) -> Counts:
    """Counts over the full collection, independent of any active filter."""
    return Counts(
        all=len(tasks),
        in_progress=sum(1 for t in tasks if t.status == Status.IN_PROGRESS),
        completed=sum(1 for t in tasks if t.status == Status.COMPLETED),
        overdue=sum(1 for t in tasks if t.status == Status.OVERDUE),
    )


def categories(tasks: Iterable[Task]) -> List[str]:
    """Distinct categories in first-seen order (options for the category filter)."""
    seen: List[str] = []
    for t in tasks:
        if t.category not in seen:
            seen.append(t.category)
    return seen
