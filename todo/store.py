import logging

from sqlalchemy import delete, not_, select, update
from sqlalchemy.exc import SQLAlchemyError

from todo.exceptions import StorageError
from todo.models import Task, db

logger = logging.getLogger(__name__)


class TaskStore:
    """
    CRUD over the ``todo`` table.

    Every method runs a single statement and commits it straight away, so
    there is never a transaction spanning two calls. Backend failures are
    rolled back and re-raised as :class:`StorageError`.

    The session is not locked; callers sharing a store across threads have
    to serialise access themselves.
    """

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def _run(self, statement):
        try:
            result = self.session.execute(statement)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(str(exc)) from exc
        return result

    def add(self, name: str) -> int:
        # empty names are accepted, the table only forbids NULL
        task = Task(name=name)
        try:
            self.session.add(task)
            self.session.commit()
            task_id = task.id
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(str(exc)) from exc
        logger.debug('Task added id=%s name=%r', task_id, name)
        return task_id

    def list(self, sort_by_status: bool = False) -> list[Task]:
        if sort_by_status:
            query = select(Task).order_by(Task.is_done, Task.id)
        else:
            query = select(Task).order_by(Task.id)
        try:
            return self.session.scalars(query).all()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StorageError(str(exc)) from exc

    def toggle(self, task_id: int) -> None:
        result = self._run(
            update(Task).where(Task.id == task_id).values(is_done=not_(Task.is_done))
        )
        logger.debug('Task toggled id=%s rows=%s', task_id, result.rowcount)

    def remove(self, task_id: int) -> None:
        result = self._run(delete(Task).where(Task.id == task_id))
        logger.debug('Task removed id=%s rows=%s', task_id, result.rowcount)

    def reset(self) -> None:
        result = self._run(delete(Task))
        logger.info('Todo list reset, %s tasks deleted', result.rowcount)
