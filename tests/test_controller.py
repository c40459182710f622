import json

import pytest

from controller import TodoController
from dom import Document
from models import Task
from renderer import render_page
from store import TodoStore


def _list_ids(controller):
    return [int(li.get_attribute('data-id')) for li in controller.task_list.children]


def _assert_view_matches_store(controller):
    tasks = controller.store.load_all()
    assert _list_ids(controller) == [t.id for t in tasks]
    for task in tasks:
        view = controller.items[task.id]
        assert view.toggle.has_attribute('checked') is task.completed
        assert view.label.class_list.contains('strike') is task.completed


def test_requires_submit_field_and_list(store):
    with pytest.raises(ValueError):
        TodoController(store, Document())


def test_load_renders_persisted_tasks_in_order(make_store):
    raw = [{'id': 2, 'task': 'b', 'completed': True}, {'id': 0, 'task': 'a', 'completed': False}]
    store = make_store({'todos': json.dumps(raw), 'uniqueId': '3'})
    controller = TodoController(store, render_page())
    assert controller.load() == 2
    assert _list_ids(controller) == [2, 0]
    assert store.storage.writes == []
    _assert_view_matches_store(controller)

    li = controller.items[2].item
    assert li.first_child is controller.items[2].toggle
    assert li.last_child is controller.items[2].delete


def test_enter_on_submit_field_adds_and_clears(controller):
    field = controller.submit_field
    field.value = 'Buy milk'
    field.dispatch('keydown', key='Enter')
    assert field.value == ''
    assert controller.store.load_all() == [Task(0, 'Buy milk', False)]
    _assert_view_matches_store(controller)


def test_other_keys_do_not_submit(controller):
    controller.submit_field.value = 'Buy milk'
    controller.submit_field.dispatch('keydown', key='a')
    assert controller.store.load_all() == []
    assert controller.submit_field.value == 'Buy milk'


@pytest.mark.parametrize('text', ['', '   '])
def test_blank_submit_is_ignored(controller, text):
    controller.submit_field.value = text
    controller.submit_field.dispatch('keydown', key='Enter')
    assert controller.submit(text) is None
    assert controller.store.load_all() == []
    assert controller.task_list.children == []


def test_toggle_click_round_trip(controller):
    controller.submit('a')
    controller.submit('b')
    toggle = controller.items[1].toggle

    toggle.click()
    assert controller.store.load_all()[1].completed is True
    _assert_view_matches_store(controller)

    toggle.click()
    assert controller.store.load_all()[1].completed is False
    _assert_view_matches_store(controller)


def test_toggle_unrendered_id_is_noop(controller):
    controller.submit('a')
    assert controller.toggle(9) is None
    _assert_view_matches_store(controller)


def test_delete_click_removes_item(controller):
    for text in ('a', 'b', 'c'):
        controller.submit(text)
    controller.items[1].delete.click()
    assert 1 not in controller.items
    assert _list_ids(controller) == [0, 2]
    _assert_view_matches_store(controller)
    assert controller.submit('d').id == 3


def test_delete_unknown_id_changes_nothing(controller):
    controller.submit('a')
    controller.delete(5)
    assert _list_ids(controller) == [0]


def test_reload_shows_same_state(storage):
    first = TodoController(TodoStore(storage), render_page())
    first.load()
    for text in ('a', 'b', 'c'):
        first.submit(text)
    first.toggle(0)
    first.delete(1)

    second = TodoController(TodoStore(storage), render_page())
    second.load()
    assert second.task_list.to_html() == first.task_list.to_html()
    _assert_view_matches_store(second)


def test_clear_completed_updates_view(controller):
    for text in ('a', 'b', 'c'):
        controller.submit(text)
    controller.toggle(0)
    controller.toggle(2)
    assert controller.clear_completed() == 2
    assert controller.ids() == [1]
    _assert_view_matches_store(controller)
