import logging
from functools import wraps

import click
from flask import current_app
from flask.cli import with_appcontext

from todo.exceptions import StorageError
from todo.formatting import print_tasks
from todo.store import TaskStore

logger = logging.getLogger(__name__)


def reports_storage_errors(command):
    """Turn a StorageError into a click error so the process exits with status 1."""
    @wraps(command)
    def wrapper(*args, **kwargs):
        try:
            return command(*args, **kwargs)
        except StorageError as exc:
            logger.debug('Storage failure in %s', command.__name__, exc_info=True)
            raise click.ClickException(str(exc)) from exc
    return wrapper


@click.command('add')
@click.argument('names', metavar='TASK...', nargs=-1, required=True)
@with_appcontext
@reports_storage_errors
def add_command(names):
    """Adds new task/s, one per argument."""
    store = TaskStore()
    for name in names:
        task_id = store.add(name)
        click.echo(f'Added task {task_id}: {name}')


@click.command('list')
@with_appcontext
@reports_storage_errors
def list_command():
    """Lists all tasks."""
    print_tasks(TaskStore().list())


@click.command('sort')
@with_appcontext
@reports_storage_errors
def sort_command():
    """Lists pending tasks before completed ones."""
    print_tasks(TaskStore().list(sort_by_status=True))


@click.command('toggle')
@click.argument('task_id', metavar='ID', type=int)
@with_appcontext
@reports_storage_errors
def toggle_command(task_id):
    """Toggles the status of a task (Done/Pending)."""
    TaskStore().toggle(task_id)


@click.command('rm')
@click.argument('task_id', metavar='ID', type=int)
@with_appcontext
@reports_storage_errors
def rm_command(task_id):
    """Removes a task."""
    TaskStore().remove(task_id)


@click.command('reset')
@with_appcontext
@reports_storage_errors
def reset_command():
    """Deletes all tasks."""
    TaskStore().reset()


@click.command('serve')
@click.option('--host', default=None, help='Interface to bind, defaults to SERVER_HOST.')
@click.option('--port', type=int, default=None, help='Port to bind, defaults to SERVER_PORT.')
@with_appcontext
def serve_command(host, port):
    """Launch the HTTP REST API."""
    app = current_app._get_current_object()
    host = host or app.config['SERVER_HOST']
    port = port or app.config['SERVER_PORT']
    logger.info('listening on %s:%s', host, port)
    app.run(host=host, port=port, threaded=True)


commands = [
    add_command,
    list_command,
    sort_command,
    toggle_command,
    rm_command,
    reset_command,
    serve_command,
]
