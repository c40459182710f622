import json
import logging

import pytest

from models import Task


def test_load_all_initialises_empty_snapshot(store, storage):
    assert store.load_all() == []
    assert storage.get_item('uniqueId') == '0'
    assert storage.get_item('todos') == '[]'


def test_load_all_leaves_existing_state_alone(make_store):
    store = make_store({'todos': json.dumps([{'id': 3, 'task': 'a', 'completed': True}]), 'uniqueId': '7'})
    assert store.load_all() == [Task(3, 'a', True)]
    assert store.storage.writes == []
    assert store.next_id() == 7


def test_append_to_empty_store(store, storage):
    store.load_all()
    task = store.append('Buy milk')
    assert task == Task(id=0, task='Buy milk', completed=False)
    assert store.load_all() == [task]
    assert store.next_id() == 1
    assert json.loads(storage.get_item('todos')) == [{'id': 0, 'task': 'Buy milk', 'completed': False}]
    assert storage.get_item('uniqueId') == '1'


def test_append_writes_sequence_then_counter(store, storage):
    store.append('first')
    assert storage.writes == ['todos', 'uniqueId']


def test_ids_strictly_increase_and_are_never_reused(store):
    issued = []
    for i in range(5):
        issued.append(store.append(f'task {i}').id)
        if i % 2:
            store.remove(issued[-1])
    issued.append(store.append('last').id)
    assert issued == sorted(set(issued))
    assert issued == list(range(6))


def test_next_id_does_not_advance(store):
    store.append('a')
    assert store.next_id() == store.next_id() == 1


def test_toggle_flips_and_persists(make_store):
    store = make_store({'todos': json.dumps([{'id': 0, 'task': 'a', 'completed': False}]), 'uniqueId': '1'})
    assert store.toggle(0) is True
    assert store.load_all() == [Task(0, 'a', True)]


def test_double_toggle_restores_and_leaves_others(store):
    for text in ('a', 'b', 'c'):
        store.append(text)
    store.toggle(2)
    before = store.load_all()
    store.toggle(1)
    store.toggle(1)
    assert store.load_all() == before


def test_toggle_unknown_id_is_a_logged_noop(store, storage, caplog):
    store.append('a')
    storage.writes.clear()
    with caplog.at_level(logging.WARNING):
        assert store.toggle(42) is False
    assert storage.writes == []
    assert 'unknown task id 42' in caplog.text


def test_remove_existing_drops_exactly_one(store):
    for text in ('a', 'b', 'c'):
        store.append(text)
    store.toggle(2)
    before = store.load_all()
    store.remove(1)
    after = store.load_all()
    assert len(after) == len(before) - 1
    assert after == [before[0], before[2]]


def test_remove_missing_id_leaves_sequence(store):
    store.append('a')
    before = store.load_all()
    store.remove(99)
    assert store.load_all() == before


def test_counter_unaffected_by_deletion(make_store):
    store = make_store({'todos': json.dumps([{'id': 0, 'task': 'a', 'completed': False},
                                             {'id': 1, 'task': 'b', 'completed': False}]),
                        'uniqueId': '2'})
    store.remove(0)
    assert [t.id for t in store.load_all()] == [1]
    assert store.append('c').id == 2


def test_malformed_json_reads_as_empty(make_store, caplog):
    store = make_store({'todos': '{not json', 'uniqueId': '3'})
    with caplog.at_level(logging.WARNING):
        assert store.load_all() == []
    assert store.storage.get_item('todos') == '{not json'
    assert 'not valid JSON' in caplog.text


def test_non_list_todos_reads_as_empty(make_store):
    store = make_store({'todos': '{"id": 1}'})
    assert store.load_all() == []


def test_malformed_records_are_skipped(make_store, caplog):
    raw = [{'id': 0, 'task': 'ok'}, {'task': 'no id'}, {'id': True, 'task': 'bool id'}, 'junk',
           {'id': 4, 'task': 'done', 'completed': True}]
    store = make_store({'todos': json.dumps(raw), 'uniqueId': '5'})
    with caplog.at_level(logging.WARNING):
        tasks = store.load_all()
    assert tasks == [Task(0, 'ok', False), Task(4, 'done', True)]
    assert caplog.text.count('Skipping malformed task record') == 3


def test_missing_counter_falls_back_past_highest_id(make_store):
    store = make_store({'todos': json.dumps([{'id': 4, 'task': 'a', 'completed': False}])})
    assert store.next_id() == 5
    assert store.append('b').id == 5
    assert store.next_id() == 6


@pytest.mark.parametrize('counter', ['abc', '²', '-1', '1.5'])
def test_garbage_counter_falls_back(make_store, caplog, counter):
    store = make_store({'todos': json.dumps([{'id': 2, 'task': 'a', 'completed': False}]),
                        'uniqueId': counter})
    with caplog.at_level(logging.WARNING):
        assert store.next_id() == 3
    assert 'not an integer' in caplog.text
    assert store.append('b').id == 3


def test_stale_counter_never_reissues_an_id(make_store, caplog):
    store = make_store({'todos': json.dumps([{'id': 0, 'task': 'a', 'completed': False}]),
                        'uniqueId': '0'})
    with caplog.at_level(logging.WARNING):
        assert store.next_id() == 1
    assert 'behind the persisted ids' in caplog.text
    assert [t.id for t in store.load_all()] + [store.append('b').id] == [0, 1]


def test_snapshot_round_trip(store, make_store):
    for text in ('a', 'b', 'c'):
        store.append(text)
    store.toggle(1)
    store.remove(0)
    snap = store.snapshot()
    assert snap == {'nextId': 3, 'tasks': [{'id': 1, 'task': 'b', 'completed': True},
                                           {'id': 2, 'task': 'c', 'completed': False}]}

    other = make_store()
    other.restore(snap)
    assert other.snapshot() == snap


def test_restore_never_lowers_counter_below_ids(make_store):
    store = make_store()
    store.restore({'nextId': 1, 'tasks': [{'id': 5, 'task': 'x', 'completed': False}]})
    assert store.next_id() == 6


def test_clear_completed(store):
    for text in ('a', 'b', 'c'):
        store.append(text)
    store.toggle(0)
    store.toggle(2)
    assert store.clear_completed() == 2
    assert store.load_all() == [Task(1, 'b', False)]
    assert store.next_id() == 3
