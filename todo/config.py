import logging
from pathlib import Path

logger = logging.getLogger(__name__)

STATE_DIR = Path('.local') / 'state' / 'todo'
DB_FILENAME = 'todo.sqlite'


class Config:
    # resolved to default_database_uri() when left unset
    SQLALCHEMY_DATABASE_URI = None
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    REQUEST_TIMEOUT = 10
    SERVER_HOST = '127.0.0.1'
    SERVER_PORT = 3000

    LOG_LEVEL = None


def default_database_uri(home=None):
    """Return the sqlite URI under the user's state dir, creating the folder if needed."""
    home = Path(home) if home is not None else Path.home()
    db_folder = home / STATE_DIR
    if not db_folder.exists():
        db_folder.mkdir(parents=True)
        logger.info("Folder '%s' created.", db_folder)
    return f'sqlite:///{db_folder / DB_FILENAME}'
