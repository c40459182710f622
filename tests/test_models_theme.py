import pytest

from models import Task
from theme import read_env_file


def test_task_defaults_and_dict_order():
    task = Task(0, 'Buy milk')
    assert task.completed is False
    assert list(task.to_dict()) == ['id', 'task', 'completed']


@pytest.mark.parametrize('raw', [None, [], {'task': 'x'}, {'id': '1', 'task': 'x'},
                                 {'id': False, 'task': 'x'}, {'id': 1, 'task': 5}])
def test_from_dict_rejects_unusable_entries(raw):
    assert Task.from_dict(raw) is None


def test_from_dict_defaults_completed():
    assert Task.from_dict({'id': 2, 'task': 'x'}) == Task(2, 'x', False)


def test_read_env_file_keeps_valid_palette_keys(tmp_path):
    env = tmp_path / '.env'
    env.write_text('# palette\nTODOS_DONE=#00ff00\nTODOS_ACTIVE=zzzzzz\nOTHER=#123456\nTODOS_PRIMARY = 112233\n')
    assert read_env_file(env) == {'TODOS_DONE': '#00ff00', 'TODOS_PRIMARY': '#112233'}
    assert read_env_file(tmp_path / 'missing') == {}
