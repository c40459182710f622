"""View construction: task records -> elements, elements -> terminal lines.

Renderer functions hold no state. Each list item is
    <li class="todos__list-item" data-id="{id}">
      <input type="checkbox" [checked]>      (toggle, first child)
      <span id="todo-{id}" [class="strike"]>text</span>
      <button>Delete</button>                (delete, last child)
    </li>
The controller inserts the toggle and delete controls; the functions here
only build them.
"""
from typing import List

from dom import Document, Element
from models import Task
from theme import color, ACTIVE_COLOR, DONE_COLOR, EMPTY_COLOR, HEADER_COLOR, ID_COLOR, BOLD

ITEM_CLASS = 'todos__list-item'
LIST_CLASS = 'todos__list'
SUBMIT_CLASS = 'todos__submit'
STRIKE_CLASS = 'strike'
PAGE_TITLE = 'Todos'


def label_id(task_id: int) -> str:
    return f'todo-{task_id}'


def render_item(doc: Document, task: Task) -> Element:
    li = doc.create_element('li')
    li.class_list.add(ITEM_CLASS)
    li.set_attribute('data-id', task.id)

    span = doc.create_element('span')
    span.append_child(doc.create_text_node(task.task))
    span.set_attribute('id', label_id(task.id))
    if task.completed:
        span.class_list.add(STRIKE_CLASS)

    li.append_child(span)
    return li


def render_toggle(doc: Document, task_id: int, completed: bool = False) -> Element:
    toggle = doc.create_element('input')
    toggle.set_attribute('type', 'checkbox')
    toggle.set_attribute('aria-controls', label_id(task_id))
    if completed:
        toggle.set_attribute('checked', '')
    return toggle


def render_delete(doc: Document, task_id: int) -> Element:
    button = doc.create_element('button')
    button.set_attribute('aria-controls', label_id(task_id))
    button.append_child(doc.create_text_node('Delete'))
    return button


def render_page(title: str = PAGE_TITLE) -> Document:
    """Page skeleton: heading, submit field, empty task list."""
    doc = Document(title)
    main = doc.create_element('main')
    main.class_list.add('todos')

    heading = doc.create_element('h1')
    heading.append_child(doc.create_text_node(title))

    submit = doc.create_element('input')
    submit.class_list.add(SUBMIT_CLASS)
    submit.set_attribute('type', 'text')
    submit.set_attribute('placeholder', 'What needs to be done?')

    task_list = doc.create_element('ul')
    task_list.class_list.add(LIST_CLASS)

    main.append_child(heading)
    main.append_child(submit)
    main.append_child(task_list)
    doc.body.append_child(main)
    return doc


# -------------------- terminal projection --------------------
def format_item(li: Element) -> str:
    """One terminal line for a list item, read from its elements only."""
    toggle = li.query_selector('input')
    span = li.query_selector('span')
    checked = toggle is not None and toggle.has_attribute('checked')
    mark = '[x]' if checked else '[ ]'
    tid = li.get_attribute('data-id') or '?'
    text = span.text_content if span is not None else ''
    struck = span is not None and span.class_list.contains(STRIKE_CLASS)
    body = color(text, DONE_COLOR) if struck else color(text, ACTIVE_COLOR)
    return f"{mark} {color(tid + '.', ID_COLOR)} {body}"


def format_list(task_list: Element, title: str = PAGE_TITLE) -> List[str]:
    lines = [color(title, HEADER_COLOR, BOLD), color('-' * max(len(title), 18), HEADER_COLOR)]
    items = [c for c in task_list.children if c.class_list.contains(ITEM_CLASS)]
    if not items:
        lines.append(color('(empty)', EMPTY_COLOR))
        return lines
    lines.extend(format_item(li) for li in items)
    return lines
