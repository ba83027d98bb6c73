class TodoError(Exception):
    """Base class for errors raised by the todo stores."""


class StorageError(TodoError):
    """The relational backend failed to run a statement."""


class TodoNotFoundError(TodoError, KeyError):
    """No todo with the given id exists in the in-memory store."""

    def __init__(self, todo_id):
        super().__init__(todo_id)
        self.todo_id = todo_id

    def __str__(self):
        return f'todo {self.todo_id} not found'
