# tests/test_overdue.py

from __future__ import annotations

import pytest

from models import Status, Task
from overdue import is_overdue, sweep

TODAY = "2025-01-01"


def _task(deadline: str | None, status: Status = Status.IN_PROGRESS, tid: str = "t1") -> Task:
    return Task(id=tid, name="write report", category="work", deadline=deadline, status=status)


@pytest.mark.parametrize("deadline", ["2000-01-01", "2024-12-31", "2025-01-01", "2099-01-01", None])
def test_completed_is_never_overdue(deadline: str | None) -> None:
    assert is_overdue(_task(deadline, Status.COMPLETED), TODAY) is False


@pytest.mark.parametrize("status", list(Status))
def test_no_deadline_is_never_overdue(status: Status) -> None:
    assert is_overdue(_task(None, status), TODAY) is False


def test_due_today_is_not_overdue_but_yesterday_is() -> None:
    assert is_overdue(_task("2025-01-01"), TODAY) is False
    assert is_overdue(_task("2024-12-31"), TODAY) is True
    assert is_overdue(_task("2025-01-02"), TODAY) is False


def test_sweep_escalates_past_deadline() -> None:
    updated, changed = sweep([_task("2020-01-01")], TODAY)
    assert changed is True
    assert updated[0].status == Status.OVERDUE


def test_sweep_leaves_future_deadline_alone() -> None:
    original = _task("2099-01-01")
    updated, changed = sweep([original], TODAY)
    assert changed is False
    assert updated == [original]
    # copies, not the same objects
    assert updated[0] is not original


def test_sweep_is_idempotent() -> None:
    tasks = [
        _task("2020-01-01", tid="a"),
        _task("2099-01-01", tid="b"),
        _task("2020-01-01", Status.COMPLETED, tid="c"),
        _task(None, tid="d"),
    ]
    once, changed_once = sweep(tasks, TODAY)
    twice, changed_twice = sweep(once, TODAY)
    assert changed_once is True
    assert changed_twice is False
    assert twice == once
    assert [t.status for t in once] == [
        Status.OVERDUE, Status.IN_PROGRESS, Status.COMPLETED, Status.IN_PROGRESS,
    ]


def test_sweep_does_not_mutate_input() -> None:
    task = _task("2020-01-01")
    sweep([task], TODAY)
    assert task.status == Status.IN_PROGRESS
