"""Todo store: the persisted snapshot and the operations over it.

Snapshot layout in the key-value backend:
    todos    -> JSON array of {"id": int, "task": str, "completed": bool}
    uniqueId -> decimal string, the id the next task receives

Every operation re-reads the snapshot from the backend and writes it back
in full. The backend is the only source of truth; nothing is cached here.
"""
import json
import logging
from typing import Any, Dict, List, Optional

from models import Task
from storage import TODOS_KEY, UNIQUE_ID_KEY

logger = logging.getLogger(__name__)

Snapshot = Dict[str, Any]


class TodoStore:
    def __init__(self, storage):
        self.storage = storage

    # -------------------- reading --------------------
    def load_all(self) -> List[Task]:
        """Return the persisted tasks in display order.

        The first call against an empty backend initialises the snapshot
        to {uniqueId: 0, todos: []}.
        """
        if self.storage.get_item(TODOS_KEY) is None:
            self.storage.set_item(UNIQUE_ID_KEY, 0)
            self.storage.set_item(TODOS_KEY, json.dumps([]))
            return []
        return self._read_tasks()

    def _read_tasks(self) -> List[Task]:
        raw = self.storage.get_item(TODOS_KEY)
        if raw is None:
            return []
        try:
            entries = json.loads(raw)
        except ValueError:
            logger.warning("Stored %r is not valid JSON; treating it as empty", TODOS_KEY)
            return []
        if not isinstance(entries, list):
            logger.warning("Stored %r is not a list; treating it as empty", TODOS_KEY)
            return []
        tasks: List[Task] = []
        for entry in entries:
            task = Task.from_dict(entry)
            if task is None:
                logger.warning("Skipping malformed task record: %r", entry)
                continue
            tasks.append(task)
        return tasks

    def _write_tasks(self, tasks: List[Task]) -> None:
        self.storage.set_item(TODOS_KEY, json.dumps([t.to_dict() for t in tasks]))

    def next_id(self) -> int:
        """Current counter value; does not advance it.

        Never below one past the highest persisted id: a missing, non-numeric
        or stale counter falls back to that floor so issued ids stay unique.
        """
        raw = self.storage.get_item(UNIQUE_ID_KEY)
        floor = max((t.id for t in self._read_tasks()), default=-1) + 1
        if raw is not None and raw.strip().isdecimal():
            counter = int(raw.strip())
            if counter < floor:
                logger.warning("Stored %r=%d is behind the persisted ids; using %d", UNIQUE_ID_KEY, counter, floor)
                return floor
            return counter
        if raw is not None:
            logger.warning("Stored %r=%r is not an integer; using %d", UNIQUE_ID_KEY, raw, floor)
        return floor

    # -------------------- mutation --------------------
    def append(self, task: str) -> Task:
        new_task = Task(id=self.next_id(), task=task)
        tasks = self._read_tasks()
        tasks.append(new_task)
        self._write_tasks(tasks)
        self.storage.set_item(UNIQUE_ID_KEY, new_task.id + 1)
        logger.debug("Appended task %d", new_task.id)
        return new_task

    def toggle(self, task_id: int) -> bool:
        """Flip a task's completion flag and return the new value.

        Ids only ever come from rendered items, so an unknown id is logged
        and ignored (returns False, nothing written).
        """
        tasks = self._read_tasks()
        for task in tasks:
            if task.id == task_id:
                task.completed = not task.completed
                self._write_tasks(tasks)
                logger.debug("Toggled task %d -> %s", task_id, task.completed)
                return task.completed
        logger.warning("Toggle for unknown task id %d ignored", task_id)
        return False

    def remove(self, task_id: int) -> None:
        tasks = self._read_tasks()
        remaining = [t for t in tasks if t.id != task_id]
        self._write_tasks(remaining)
        if len(remaining) != len(tasks):
            logger.debug("Removed task %d", task_id)

    def clear_completed(self) -> int:
        """Drop every completed task; returns how many were removed."""
        tasks = self._read_tasks()
        remaining = [t for t in tasks if not t.completed]
        self._write_tasks(remaining)
        return len(tasks) - len(remaining)

    # -------------------- snapshots --------------------
    def snapshot(self) -> Snapshot:
        return {'nextId': self.next_id(), 'tasks': [t.to_dict() for t in self._read_tasks()]}

    def restore(self, snapshot: Snapshot) -> None:
        """Overwrite the persisted state with a snapshot from snapshot()."""
        tasks: List[Task] = []
        for entry in snapshot.get('tasks', []):
            task = Task.from_dict(entry)
            if task is not None:
                tasks.append(task)
        next_id: Optional[int] = snapshot.get('nextId')
        floor = max((t.id for t in tasks), default=-1) + 1
        if not isinstance(next_id, int) or next_id < floor:
            next_id = floor
        self._write_tasks(tasks)
        self.storage.set_item(UNIQUE_ID_KEY, next_id)
