import logging
from concurrent.futures import ThreadPoolExecutor

from flask import Flask
from flask.cli import FlaskGroup
from werkzeug.exceptions import HTTPException

from todo.api.memory import InMemoryTodoStore
from todo.api.routes import api
from todo.cli import commands
from todo.config import Config, default_database_uri
from todo.logging_setup import configure_logging
from todo.models import db

logger = logging.getLogger(__name__)

# one worker pool for every app in the process
request_executor = ThreadPoolExecutor(thread_name_prefix='todo-request')


def handle_unexpected_error(error):
    if isinstance(error, HTTPException):
        return error
    logger.exception('Unhandled internal error')
    return f'Unhandled internal error: {error}', 500


def create_app(test_config=None, todo_store=None):
    app = Flask(__name__)

    app.config.from_object(Config)
    app.config.from_prefixed_env('TODO')
    if test_config is not None:
        app.config.update(test_config)
    if not app.config['SQLALCHEMY_DATABASE_URI']:
        app.config['SQLALCHEMY_DATABASE_URI'] = default_database_uri()

    if not app.testing:
        configure_logging(app.config['LOG_LEVEL'] or ('DEBUG' if app.debug else 'WARNING'))

    # the HTTP todos live only in memory, the CLI tasks go to sqlite
    app.extensions['todo_store'] = todo_store if todo_store is not None else InMemoryTodoStore()
    app.extensions['todo_executor'] = request_executor

    app.register_blueprint(api)
    app.register_error_handler(Exception, handle_unexpected_error)
    for command in commands:
        app.cli.add_command(command)

    db.init_app(app)

    with app.app_context():
        db.create_all()
    return app


cli = FlaskGroup(
    create_app=create_app,
    add_default_commands=False,
    help='A tiny todo list: keep tasks from the terminal or serve them over HTTP.',
)


if __name__ == '__main__':
    cli()
