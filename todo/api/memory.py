"""In-memory todo storage for the HTTP service.

Nothing here is persisted; the whole set is gone when the process exits.
"""
import sys
import threading
import uuid
from contextlib import contextmanager
from dataclasses import asdict, dataclass, replace
from itertools import islice
from typing import Optional, Protocol

from todo.exceptions import TodoNotFoundError


@dataclass(frozen=True)
class Todo:
    id: uuid.UUID
    text: str
    completed: bool = False

    def to_dict(self):
        data = asdict(self)
        data['id'] = str(self.id)
        return data


class TodoRepository(Protocol):
    def list(self, offset: int = 0, limit: Optional[int] = None) -> list: ...

    def create(self, text: str) -> Todo: ...

    def update(self, todo_id: uuid.UUID, text: Optional[str] = None,
               completed: Optional[bool] = None) -> Todo: ...

    def delete(self, todo_id: uuid.UUID) -> None: ...


class ReadWriteLock:
    """
    Many readers or a single writer.

    A writer that is waiting blocks new readers from entering, so a steady
    stream of GETs cannot starve writes. Not re-entrant.
    """

    def __init__(self):
        self._cond = threading.Condition()
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if not self._readers:
                    self._cond.notify_all()

    @contextmanager
    def write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class InMemoryTodoStore:
    """Todos keyed by UUID, kept in insertion order behind one lock."""

    def __init__(self):
        self._todos: dict[uuid.UUID, Todo] = {}
        self._lock = ReadWriteLock()

    def __len__(self):
        with self._lock.read():
            return len(self._todos)

    def list(self, offset=0, limit=None):
        # islice only takes indices up to sys.maxsize
        offset = min(offset, sys.maxsize)
        stop = None if limit is None else min(offset + limit, sys.maxsize)
        with self._lock.read():
            return list(islice(self._todos.values(), offset, stop))

    def create(self, text):
        todo = Todo(id=uuid.uuid4(), text=text)
        with self._lock.write():
            self._todos[todo.id] = todo
        return todo

    def update(self, todo_id, text=None, completed=None):
        changes = {}
        if text is not None:
            changes['text'] = text
        if completed is not None:
            changes['completed'] = completed

        with self._lock.write():
            try:
                todo = self._todos[todo_id]
            except KeyError:
                raise TodoNotFoundError(todo_id) from None
            todo = replace(todo, **changes)
            # assigning an existing key keeps its position
            self._todos[todo_id] = todo
        return todo

    def delete(self, todo_id):
        with self._lock.write():
            if self._todos.pop(todo_id, None) is None:
                raise TodoNotFoundError(todo_id)
