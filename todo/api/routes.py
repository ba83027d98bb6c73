import logging
from concurrent import futures
from functools import wraps

from flask import Blueprint, abort, copy_current_request_context, current_app, jsonify, request
from werkzeug.exceptions import HTTPException

from todo.api.memory import TodoRepository
from todo.exceptions import TodoNotFoundError

api = Blueprint('api', __name__)

logger = logging.getLogger(__name__)


def todo_store() -> TodoRepository:
    return current_app.extensions['todo_store']


def with_timeout(view):
    """Answer 408 when the view runs longer than REQUEST_TIMEOUT seconds."""
    @wraps(view)
    def wrapper(*args, **kwargs):
        executor = current_app.extensions['todo_executor']
        timeout = current_app.config['REQUEST_TIMEOUT']
        future = executor.submit(copy_current_request_context(view), *args, **kwargs)
        try:
            return future.result(timeout=timeout)
        except futures.TimeoutError:
            logger.warning('%s %s timed out after %ss', request.method, request.path, timeout)
            abort(408)
    return wrapper


def _non_negative_arg(name):
    raw = request.args.get(name)
    if raw is None:
        return None
    try:
        value = int(raw)
    except ValueError:
        value = -1
    if value < 0:
        abort(400, description=f'{name} must be a non-negative integer')
    return value


def _json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description='Expected a JSON object')
    return payload


@api.errorhandler(HTTPException)
def http_error(error):
    return jsonify({'error': error.description}), error.code


@api.after_request
def log_request(response):
    logger.debug('%s %s -> %s', request.method, request.full_path.rstrip('?'), response.status_code)
    return response


@api.route('/todos', methods=['GET'])
@with_timeout
def list_todos():
    offset = _non_negative_arg('offset') or 0
    limit = _non_negative_arg('limit')
    todos = todo_store().list(offset=offset, limit=limit)
    return jsonify([todo.to_dict() for todo in todos])


@api.route('/todos', methods=['POST'])
@with_timeout
def create_todo():
    text = _json_body().get('text')
    if not isinstance(text, str):
        return jsonify({'error': 'text is required'}), 422

    todo = todo_store().create(text)
    return jsonify(todo.to_dict()), 201


@api.route('/todos/<uuid:todo_id>', methods=['PATCH'])
@with_timeout
def update_todo(todo_id):
    payload = _json_body()
    text = payload.get('text')
    completed = payload.get('completed')
    if text is not None and not isinstance(text, str):
        return jsonify({'error': 'text must be a string'}), 422
    if completed is not None and not isinstance(completed, bool):
        return jsonify({'error': 'completed must be a boolean'}), 422

    try:
        todo = todo_store().update(todo_id, text=text, completed=completed)
    except TodoNotFoundError:
        abort(404)
    return jsonify(todo.to_dict())


@api.route('/todos/<uuid:todo_id>', methods=['DELETE'])
@with_timeout
def delete_todo(todo_id):
    try:
        todo_store().delete(todo_id)
    except TodoNotFoundError:
        abort(404)
    return '', 204
