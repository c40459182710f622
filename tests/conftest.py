import pytest

from controller import TodoController
from renderer import render_page
from storage import MemoryStorage
from store import TodoStore


class RecordingStorage(MemoryStorage):
    """MemoryStorage that counts writes."""

    def __init__(self, initial=None):
        super().__init__(initial)
        self.writes = []

    def set_item(self, key, value):
        self.writes.append(key)
        super().set_item(key, value)


@pytest.fixture
def storage():
    return RecordingStorage()


@pytest.fixture
def store(storage):
    return TodoStore(storage)


@pytest.fixture
def controller(store):
    ctl = TodoController(store, render_page())
    ctl.load()
    return ctl


@pytest.fixture
def make_store():
    """Store over a RecordingStorage pre-seeded with raw key/values."""
    def _make(initial=None):
        return TodoStore(RecordingStorage(initial))
    return _make
