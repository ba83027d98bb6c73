import pytest

from todo.store import TaskStore
from todo_app import create_app


@pytest.fixture()
def app():
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'REQUEST_TIMEOUT': 5,
    })
    yield app


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def runner(app):
    return app.test_cli_runner()


@pytest.fixture()
def store(app):
    with app.app_context():
        yield TaskStore()
