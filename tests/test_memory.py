import sys
import threading
import time
import uuid

import pytest

from todo.api.memory import InMemoryTodoStore, ReadWriteLock, Todo
from todo.exceptions import TodoNotFoundError


@pytest.fixture()
def todos():
    return InMemoryTodoStore()


def test_create_assigns_fresh_id(todos):
    first = todos.create('write tests')
    second = todos.create('write tests')

    assert isinstance(first.id, uuid.UUID)
    assert first.id != second.id
    assert first.completed is False
    assert len(todos) == 2


def test_list_keeps_insertion_order_and_paginates(todos):
    created = [todos.create(text) for text in ('a', 'b', 'c')]

    assert todos.list() == created
    assert todos.list(offset=1, limit=1) == [created[1]]
    assert todos.list(offset=2) == [created[2]]
    assert todos.list(limit=2) == created[:2]
    assert todos.list(offset=5) == []
    assert todos.list(limit=0) == []


def test_update_changes_only_given_fields(todos):
    todo = todos.create('a')

    done = todos.update(todo.id, completed=True)
    assert done == Todo(id=todo.id, text='a', completed=True)

    renamed = todos.update(todo.id, text='b')
    assert renamed == Todo(id=todo.id, text='b', completed=True)
    assert todos.list() == [renamed]


def test_update_keeps_position(todos):
    first, second, third = (todos.create(text) for text in ('a', 'b', 'c'))
    todos.update(second.id, text='B')
    assert [todo.text for todo in todos.list()] == ['a', 'B', 'c']


def test_update_unknown_id(todos):
    todo_id = uuid.uuid4()
    with pytest.raises(TodoNotFoundError) as excinfo:
        todos.update(todo_id, text='x')
    assert excinfo.value.todo_id == todo_id


def test_delete_is_final(todos):
    todo = todos.create('a')
    todos.delete(todo.id)

    assert todos.list() == []
    with pytest.raises(TodoNotFoundError):
        todos.delete(todo.id)
    with pytest.raises(TodoNotFoundError):
        todos.update(todo.id, completed=True)


def test_to_dict_uses_string_id(todos):
    todo = todos.create('a')
    assert todo.to_dict() == {'id': str(todo.id), 'text': 'a', 'completed': False}


def test_concurrent_creates_are_not_lost(todos):
    def worker():
        for i in range(50):
            todos.create(str(i))

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(todos.list()) == 400


def test_readers_share_the_lock():
    lock = ReadWriteLock()
    inside = threading.Barrier(2, timeout=2)

    def reader():
        with lock.read():
            # both readers must be inside at the same time to pass the barrier
            inside.wait()

    threads = [threading.Thread(target=reader) for _ in range(2)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert not inside.broken


def test_writer_excludes_readers():
    lock = ReadWriteLock()
    events = []
    writing = threading.Event()

    def writer():
        with lock.write():
            writing.set()
            time.sleep(0.1)
            events.append('write done')

    def reader():
        writing.wait()
        with lock.read():
            events.append('read')

    threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=5)

    assert events == ['write done', 'read']


def test_list_clamps_huge_pagination(todos):
    created = [todos.create(text) for text in ('a', 'b', 'c')]

    assert todos.list(offset=1, limit=sys.maxsize) == created[1:]
    assert todos.list(offset=sys.maxsize + 1) == []
    assert todos.list(limit=10 ** 30) == created


def test_concurrent_updates_on_one_todo_are_not_lost(todos):
    todo = todos.create('start')
    start = threading.Barrier(2, timeout=5)

    def rename():
        start.wait()
        for i in range(300):
            todos.update(todo.id, text=f'text {i}')

    def flip():
        start.wait()
        for i in range(301):
            todos.update(todo.id, completed=i % 2 == 0)

    threads = [threading.Thread(target=rename), threading.Thread(target=flip)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=10)

    # each thread owns one field, so its last write must survive the other's
    assert todos.list() == [Todo(id=todo.id, text='text 299', completed=True)]
