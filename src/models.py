"""Data models for the todo list.

Only exposes the Task dataclass. Field names mirror the persisted JSON
(`id`, `task`, `completed`) so records round-trip without renaming.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional

@dataclass
class Task:
    """A single todo entry.

    Fields:
        id: Counter-issued integer id; never reused, even after deletion.
        task: Free-form text (non-empty at input time, not re-validated).
        completed: Completion flag; False on creation.
    """
    id: int
    task: str
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {'id': self.id, 'task': self.task, 'completed': self.completed}

    @classmethod
    def from_dict(cls, raw: Any) -> Optional["Task"]:
        """Build a Task from a persisted entry; None if the entry is unusable."""
        if not isinstance(raw, dict):
            return None
        tid = raw.get('id')
        if isinstance(tid, bool) or not isinstance(tid, int):
            return None
        text = raw.get('task')
        if not isinstance(text, str):
            return None
        return cls(id=tid, task=text, completed=bool(raw.get('completed', False)))

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Task(id={self.id}, task={self.task}, completed={self.completed})"
