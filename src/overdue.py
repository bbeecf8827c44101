"""Overdue policy: pure functions, no I/O.

Dates are ISO "YYYY-MM-DD" strings, which sort chronologically, so plain
string comparison is enough. A task due today is not overdue.
"""
from dataclasses import replace
from datetime import date
from typing import Iterable, List, Tuple
from models import Status, Task


def today_iso() -> str:
    return date.today().isoformat()


def is_overdue(task: Task, today: str) -> bool:
    if task.status == Status.COMPLETED:
        return False
    if not task.deadline:
        return False
    return task.deadline < today


def sweep(tasks: Iterable[Task], today: str) -> Tuple[List[Task], bool]:
    """Escalate past-deadline tasks to Overdue.

    Returns copies of every task (escalated or not) plus whether anything
    changed. Only In Progress tasks can be escalated: Completed never is,
    and Overdue already is.
    """
    updated: List[Task] = []
    changed = False
    for task in tasks:
        if task.status != Status.OVERDUE and is_overdue(task, today):
            updated.append(replace(task, status=Status.OVERDUE))
            changed = True
        else:
            updated.append(replace(task))
    return updated, changed
