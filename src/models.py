"""Data models for the terminal task tracker.

Status values are the closed set "In Progress", "Completed", "Overdue"; the
stored strings match the labels shown to the user so the JSON blob stays
readable and compatible with existing `tn_tasks_v1` data.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

ALL = "All"  # filter sentinel, never a real status or category


class Status(str, Enum):
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    OVERDUE = "Overdue"

    @classmethod
    def parse(cls, value: object) -> "Status":
        """Coerce a raw value to a Status or raise InvalidStatus."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise InvalidStatus(f"Invalid status: {value!r}") from None


STATUSES = tuple(Status)


@dataclass
class Task:
    """A single tracked task.

    Fields:
        id: Opaque unique id (uuid hex), assigned once and never reused.
        name: Non-empty display name.
        category: Free-form label used for filtering.
        deadline: ISO "YYYY-MM-DD" date or None.
        status: One of the three Status values.
    """
    id: str
    name: str
    category: str = ""
    deadline: Optional[str] = None
    status: Status = Status.IN_PROGRESS

    @property
    def short_id(self) -> str:
        return self.id[:8]


@dataclass(frozen=True)
class TaskDraft:
    """User input for a new task, before an id is assigned."""
    name: str
    category: str = ""
    deadline: Optional[str] = None


# -------------------- errors --------------------
class TrackerError(Exception):
    """Base class for task tracker errors."""


class CorruptState(TrackerError):
    """Persisted blob is unparsable or has the wrong shape."""


class ValidationError(TrackerError):
    """User input was rejected; nothing was changed."""


class NotFound(TrackerError):
    """No task has the requested id."""


class InvalidStatus(TrackerError):
    """Status value outside the legal set."""
