"""Board: the single owner of task mutations.

Every user action runs mutate -> overdue sweep -> save before returning and
reports whether state changed; callers decide when to redraw. Manual status
changes are unrestricted (any status to any status). The sweep is the only
place a status is inferred, so a reopened task whose deadline has passed is
flagged Overdue again straight away.
"""
import logging
from dataclasses import replace
from typing import Callable, List, Optional
from filters import StatusFilter
from models import ALL, NotFound, Status, Task, TaskDraft
from overdue import sweep, today_iso
from storage import TaskStore
from view import BoardView, project

logger = logging.getLogger(__name__)


class Board:
    def __init__(self, store: TaskStore, today: Callable[[], str] = today_iso):
        self.store = store
        self.today = today

    @classmethod
    def open(cls, store: TaskStore, today: Callable[[], str] = today_iso) -> 'Board':
        """Load persisted tasks and correct stale statuses."""
        board = cls(store, today)
        store.load()
        board.refresh()
        return board

    # -------------------- queries --------------------
    def all_tasks(self) -> List[Task]:
        return self.store.tasks

    def get(self, task_id: str) -> Optional[Task]:
        return self.store.find_by_id(task_id)

    def view(self, status_filter: StatusFilter = ALL, category_filter: str = ALL) -> BoardView:
        return project(self.store.tasks, status_filter, category_filter)

    # -------------------- overdue --------------------
    def refresh(self) -> bool:
        """Run the overdue sweep; save only if something was escalated."""
        current = self.store.tasks
        updated, changed = sweep(current, self.today())
        if changed:
            escalated = sum(1 for old, new in zip(current, updated) if old.status != new.status)
            self.store.save(updated)
            logger.info('Marked %d task(s) overdue', escalated)
        return changed

    # -------------------- task operations --------------------
    def add_task(self, name: str, category: str = '', deadline: Optional[str] = None) -> Task:
        draft = TaskDraft(name=name, category=category, deadline=deadline)
        return self.store.add(draft, prepare=lambda tasks: sweep(tasks, self.today())[0])

    def set_status(self, task_id: str, new_status: object) -> bool:
        """Apply a manual status change. Raises NotFound / InvalidStatus."""
        task = self.store.find_by_id(task_id)
        if task is None:
            raise NotFound(f'Task id {task_id} not found.')
        status = Status.parse(new_status)
        if task.status == status:
            return self.refresh()
        updated = [replace(t, status=status) if t.id == task_id else t for t in self.store.tasks]
        updated, _ = sweep(updated, self.today())
        self.store.save(updated)
        logger.info('Task %s: %s -> %s', task.short_id, task.status.value, status.value)
        return True

    def delete_task(self, task_id: str) -> bool:
        """Remove a task; a missing id is a no-op."""
        removed = self.store.remove(task_id)
        if not removed:
            logger.debug('Delete of missing task %s ignored', task_id)
        return removed

    def __str__(self) -> str:
        c = self.view().counts
        return (f'All: {c.all} tasks, In Progress: {c.in_progress} tasks, '
                f'Completed: {c.completed} tasks, Overdue: {c.overdue} tasks')
