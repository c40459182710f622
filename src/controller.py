"""Controller: user input -> store mutation -> incremental view update.

Per-item states are Active and Completed; the toggle control flips between
them and the delete control ends the item. The store is the single source
of truth for completion: the checkbox's checked attribute and the label's
strike class are both set from the flag the store returns, never read back
from the markup.

The controller keeps its own {id -> ItemView} map, so event handlers never
search the document for an item.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from dom import Document, Element, Event
from models import Task
from renderer import (LIST_CLASS, SUBMIT_CLASS, STRIKE_CLASS,
                      render_item, render_toggle, render_delete)
from store import TodoStore

logger = logging.getLogger(__name__)


@dataclass
class ItemView:
    """Handles to one rendered item's elements."""
    item: Element
    label: Element
    toggle: Element
    delete: Element


class TodoController:
    def __init__(self, store: TodoStore, document: Document):
        self.store = store
        self.document = document
        submit = document.query_selector(f'input.{SUBMIT_CLASS}')
        task_list = document.query_selector(f'ul.{LIST_CLASS}')
        if submit is None or task_list is None:
            raise ValueError('document has no submit field or task list')
        self.submit_field: Element = submit
        self.task_list: Element = task_list
        self._items: Dict[int, ItemView] = {}
        self.submit_field.add_event_listener('keydown', self._on_keydown)

    @property
    def items(self) -> Dict[int, ItemView]:
        """Rendered items by id, in display order."""
        return dict(self._items)

    def ids(self) -> List[int]:
        return list(self._items)

    # -------------------- lifecycle --------------------
    def load(self) -> int:
        """Render every persisted task in order; the store is not modified beyond initialisation."""
        tasks = self.store.load_all()
        for task in tasks:
            self._materialize(task)
        logger.debug("Loaded %d task(s)", len(tasks))
        return len(tasks)

    def _materialize(self, task: Task) -> ItemView:
        doc = self.document
        li = render_item(doc, task)
        label = li.query_selector('span')
        toggle = render_toggle(doc, task.id, task.completed)
        delete = render_delete(doc, task.id)
        li.prepend(toggle)
        li.append_child(delete)
        self.task_list.append_child(li)

        tid = task.id
        toggle.add_event_listener('click', lambda e: self.toggle(tid))
        delete.add_event_listener('click', lambda e: self.delete(tid))

        view = ItemView(item=li, label=label, toggle=toggle, delete=delete)
        self._items[tid] = view
        return view

    # -------------------- handlers --------------------
    def _on_keydown(self, event: Event) -> None:
        if event.detail.get('key') == 'Enter':
            self.submit(event.target.value)

    def submit(self, text: str) -> Optional[Task]:
        """Add a task from the submit field's text; blank text is ignored."""
        if not text or not text.strip():
            return None
        task = self.store.append(text)
        self._materialize(task)
        self.submit_field.value = ''
        return task

    def toggle(self, task_id: int) -> Optional[bool]:
        view = self._items.get(task_id)
        if view is None:
            logger.debug("Toggle for unrendered id %d ignored", task_id)
            return None
        completed = self.store.toggle(task_id)
        self._apply_completed(view, completed)
        return completed

    @staticmethod
    def _apply_completed(view: ItemView, completed: bool) -> None:
        if completed:
            view.toggle.set_attribute('checked', '')
            view.label.class_list.add(STRIKE_CLASS)
        else:
            view.toggle.remove_attribute('checked')
            view.label.class_list.remove(STRIKE_CLASS)

    def delete(self, task_id: int) -> None:
        self.store.remove(task_id)
        view = self._items.pop(task_id, None)
        if view is not None:
            view.item.remove()

    def clear_completed(self) -> int:
        removed = self.store.clear_completed()
        kept = {t.id for t in self.store.load_all()}
        for tid in [tid for tid in self._items if tid not in kept]:
            self._items.pop(tid).item.remove()
        return removed
