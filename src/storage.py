"""Persistence for the task tracker: storage media plus the TaskStore.

The store keeps the whole ordered task list as one JSON blob under a single
storage key. Media only know how to get/set a string by key; the store owns
(de)serialization and the in-memory collection.
"""
from __future__ import annotations
import json
import logging
import os
import re
import tempfile
import uuid
from datetime import date
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Protocol, Sequence

from models import ALL, CorruptState, Status, Task, TaskDraft, ValidationError

logger = logging.getLogger(__name__)

STORAGE_KEY = 'tn_tasks_v1'
ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

TaskRecord = Dict[str, Any]


class StorageMedium(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryMedium:
    """Dict-backed medium; nothing survives the process."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.values: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> None:
        self.values[key] = value


class FileMedium:
    """One JSON file per key inside `directory`.

    Writes go to a temp file in the same directory and are swapped in with
    os.replace, so a reader never sees a half-written blob.
    """

    def __init__(self, directory: Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f'{key}.json'

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding='utf-8')
        except UnicodeDecodeError as exc:
            raise CorruptState(f'{path.name} is not valid UTF-8: {exc}') from exc

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(dir=self.directory, prefix='.tmp-', suffix='.json')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(value)
            os.replace(tmp, self.path_for(key))
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise


# -------------------- (de)serialization --------------------
def task_to_record(task: Task) -> TaskRecord:
    return {
        'id': task.id,
        'name': task.name,
        'category': task.category,
        'deadline': task.deadline,
        'status': task.status.value,
    }


def task_from_record(raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise CorruptState(f'task record is not an object: {raw!r}')
    tid, name, category = raw.get('id'), raw.get('name'), raw.get('category', '')
    if not isinstance(tid, str) or not tid:
        raise CorruptState(f'task record has no id: {raw!r}')
    if not isinstance(name, str) or not name.strip():
        raise CorruptState(f'task {tid} has no name')
    if not isinstance(category, str):
        raise CorruptState(f'task {tid} has a non-string category')
    deadline = raw.get('deadline') or None  # "" from old saves means no deadline
    if deadline is not None and not (isinstance(deadline, str) and ISO_DATE_RE.match(deadline)):
        raise CorruptState(f'task {tid} has a malformed deadline: {deadline!r}')
    try:
        status = Status(raw.get('status'))
    except ValueError:
        raise CorruptState(f'task {tid} has an unknown status: {raw.get("status")!r}') from None
    return Task(id=tid, name=name, category=category, deadline=deadline, status=status)


def decode_blob(blob: str) -> List[Task]:
    """Parse a stored blob; raise CorruptState on any malformed content."""
    try:
        data = json.loads(blob)
    except (ValueError, RecursionError) as exc:
        raise CorruptState(f'blob is not valid JSON: {exc}') from exc
    if not isinstance(data, list):
        raise CorruptState(f'blob is a {type(data).__name__}, expected a list')
    tasks = [task_from_record(raw) for raw in data]
    seen = set()
    for task in tasks:
        if task.id in seen:
            raise CorruptState(f'duplicate task id {task.id}')
        seen.add(task.id)
    return tasks


def encode_blob(tasks: Sequence[Task]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], indent=4)


def new_task_id() -> str:
    return uuid.uuid4().hex


def normalize_deadline(value: Optional[str]) -> Optional[str]:
    """Blank -> None; otherwise require a real calendar date as YYYY-MM-DD."""
    value = (value or '').strip()
    if not value:
        return None
    if not ISO_DATE_RE.match(value):
        raise ValidationError(f'Deadline must be YYYY-MM-DD, got "{value}".')
    try:
        date.fromisoformat(value)
    except ValueError:
        raise ValidationError(f'Deadline "{value}" is not a valid date.') from None
    return value


class TaskStore:
    """Ordered task collection with an explicit load/save boundary.

    Every mutation builds the new list, writes it, and only then swaps it in;
    a failed write leaves memory and the stored blob untouched.
    """

    def __init__(self, medium: StorageMedium, key: str = STORAGE_KEY):
        self.medium = medium
        self.key = key
        self._tasks: List[Task] = []

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of the collection in insertion order."""
        return list(self._tasks)

    def __len__(self) -> int:
        return len(self._tasks)

    # -------------------- load / save --------------------
    def load(self) -> List[Task]:
        """Load tasks from the medium. Missing or corrupt blob -> empty list."""
        tasks: List[Task] = []
        try:
            blob = self.medium.get(self.key)
            if blob is None:
                logger.debug('No saved tasks under %r; starting empty', self.key)
            else:
                tasks = decode_blob(blob)
        except CorruptState as exc:
            logger.warning('Discarding corrupt task data under %r: %s', self.key, exc)
            tasks = []
        self._tasks = tasks
        logger.debug('Loaded %d task(s)', len(tasks))
        return self.tasks

    def save(self, tasks: Optional[Sequence[Task]] = None) -> None:
        """Overwrite the stored blob with `tasks` (default: current collection)."""
        new_tasks = list(self._tasks if tasks is None else tasks)
        self.medium.set(self.key, encode_blob(new_tasks))
        self._tasks = new_tasks
        logger.debug('Saved %d task(s) under %r', len(new_tasks), self.key)

    # -------------------- mutation --------------------
    def add(self, draft: TaskDraft,
            prepare: Optional[Callable[[List[Task]], List[Task]]] = None) -> Task:
        """Append a new In Progress task and persist.

        `prepare` may rewrite the new list (e.g. an overdue sweep) before the
        single write, so the task is stored with its final status.
        """
        name = draft.name.strip() if draft.name else ''
        if not name:
            raise ValidationError('Task name is required.')
        category = (draft.category or '').strip()
        if category == ALL:
            raise ValidationError(f'"{ALL}" is reserved for the category filter.')
        task = Task(
            id=new_task_id(),
            name=name,
            category=category,
            deadline=normalize_deadline(draft.deadline),
            status=Status.IN_PROGRESS,
        )
        new_tasks = self._tasks + [task]
        if prepare is not None:
            new_tasks = prepare(new_tasks)
        self.save(new_tasks)
        logger.info('Added task %s (%s)', task.short_id, task.name)
        return self.find_by_id(task.id) or task

    def remove(self, task_id: str) -> bool:
        """Delete by id. Returns False (and still persists) if absent."""
        remaining = [t for t in self._tasks if t.id != task_id]
        removed = len(remaining) != len(self._tasks)
        self.save(remaining)
        if removed:
            logger.info('Removed task %s', task_id[:8])
        return removed

    # -------------------- queries --------------------
    def find_by_id(self, task_id: str) -> Optional[Task]:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def find_by_prefix(self, prefix: str) -> Optional[Task]:
        """Resolve a full id or a unique id prefix (as shown in listings)."""
        prefix = prefix.strip()
        if not prefix:
            return None
        exact = self.find_by_id(prefix)
        if exact is not None:
            return exact
        folded = prefix.lower()
        matches = [t for t in self._tasks if t.id.lower().startswith(folded)]
        if len(matches) > 1:
            raise ValidationError(f'Id prefix "{prefix}" matches {len(matches)} tasks.')
        return matches[0] if matches else None
