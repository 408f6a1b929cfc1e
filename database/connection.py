# /database/connection.py

import configparser
import logging
import os
import sqlite3
import sys
from contextlib import contextmanager

import mysql.connector
from mysql.connector import errorcode, pooling
from mysql.connector.constants import ClientFlag

from .models import Status

logger = logging.getLogger(__name__)


class DatabaseUnavailable(Exception):
    """Raised when no connection can be handed out for the configured engine."""


# Every exception type the query layer treats as a storage failure.
DB_ERRORS = (sqlite3.Error, mysql.connector.Error, DatabaseUnavailable)

MEMORY_PATH = ':memory:'
_MEMORY_URI = 'file:userform_memdb?mode=memory&cache=shared'

DEFAULTS = {
    'engine': 'sqlite',
    'path': 'UserDB.sqlite3',
    'host': 'localhost',
    'port': '3306',
    'user': 'sa',
    'password': '',
    'database': 'userdb',
    'charset': 'utf8mb4',
    'collation': 'utf8mb4_unicode_ci',
    'pool_size': '5',
}


def get_base_path():
    """ Get the correct base path whether running as a script or a frozen exe."""
    if getattr(sys, 'frozen', False):
        return os.path.dirname(sys.executable)
    else:
        # For a script, we need to go up one level from /database
        return os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

# --- Configuration Setup ---
base_path = get_base_path()
config_path = os.path.join(base_path, 'config.ini')
# Relative data files (the SQLite database, the log file) live in the user's home
data_dir = os.path.expanduser('~')

# Read configuration file; a config.ini in the working directory overrides the bundled one
config = configparser.ConfigParser()
config.read_dict({'database': DEFAULTS, 'logging': {'level': 'INFO', 'file': ''}})
config.read([config_path, os.path.join(os.getcwd(), 'config.ini')], encoding='utf-8')

# --- Engine state ---
_pool = None
_memory_anchor = None


def get_engine():
    return config.get('database', 'engine').strip().lower()


def resolve_data_path(path):
    """Expands '~' and anchors relative paths in the user's home directory."""
    path = os.path.expanduser(path)
    if os.path.isabs(path):
        return path
    return os.path.join(data_dir, path)


def get_sqlite_path():
    """Resolves the SQLite file against the data directory; ':memory:' is kept as is."""
    path = config.get('database', 'path').strip() or DEFAULTS['path']
    if path == MEMORY_PATH:
        return path
    return resolve_data_path(path)


def describe_target():
    """A human readable name of the configured database, for log lines."""
    if get_engine() == 'mysql':
        return "mysql://{}@{}:{}/{}".format(
            config.get('database', 'user'), config.get('database', 'host'),
            config.get('database', 'port'), config.get('database', 'database'))
    return "sqlite:///{}".format(get_sqlite_path())


def init_connection_pool():
    """Prepares the configured engine: the MySQL pool or the in-memory SQLite anchor."""
    global _pool, _memory_anchor
    engine = get_engine()
    if engine == 'mysql':
        if _pool is None:
            try:
                db_config = dict(
                    host=config.get('database', 'host'),
                    port=config.getint('database', 'port'),
                    user=config.get('database', 'user'),
                    password=config.get('database', 'password'),
                    database=config.get('database', 'database'),
                    charset=config.get('database', 'charset'),
                    collation=config.get('database', 'collation'),
                    # rowcount must report matched rows so an unchanged UPDATE is not "not found"
                    client_flags=[ClientFlag.FOUND_ROWS],
                    use_pure=True
                )
                _pool = pooling.MySQLConnectionPool(pool_name="userform_pool",
                                                      pool_size=config.getint('database', 'pool_size'),
                                                      **db_config)
                logger.info("Database connection pool initialized for %s", describe_target())
            except mysql.connector.Error as err:
                logger.error("Error creating connection pool: %s", err)
                _pool = None
    elif engine == 'sqlite':
        if get_sqlite_path() == MEMORY_PATH and _memory_anchor is None:
            # The shared in-memory database lives as long as one connection to it is open.
            _memory_anchor = sqlite3.connect(_MEMORY_URI, uri=True)
    else:
        logger.error("Unknown database engine %r in %s", engine, config_path)


def close_connection_pool():
    """Closes the idle MySQL pool connections and the in-memory anchor, if any."""
    global _pool, _memory_anchor
    if _pool is not None:
        closed = _pool._remove_connections()
        logger.info("Closed %s pooled connection(s)", closed)
        _pool = None
    if _memory_anchor is not None:
        _memory_anchor.close()
        _memory_anchor = None


def configure(**options):
    """Overrides [database] options at runtime and re-initializes the engine."""
    close_connection_pool()
    for key, value in options.items():
        config.set('database', key, str(value))
    init_connection_pool()


def get_db_config():
    """Returns the database configuration dictionary."""
    return dict(config.items('database'))


def classify_error(exc):
    """Maps a driver exception onto the result tag shown to the user."""
    if isinstance(exc, (sqlite3.IntegrityError, mysql.connector.IntegrityError)):
        return Status.CONSTRAINT_VIOLATION
    if isinstance(exc, mysql.connector.Error) and exc.errno == errorcode.ER_DUP_ENTRY:
        return Status.CONSTRAINT_VIOLATION
    return Status.CONNECTION_ERROR


class _SqliteCursor:
    """Lets query modules write MySQL-style %s placeholders against SQLite."""

    def __init__(self, cursor):
        self._cursor = cursor

    def execute(self, sql, params=()):
        self._cursor.execute(sql.replace('%s', '?'), params)
        return self

    def __getattr__(self, name):
        return getattr(self._cursor, name)


def _connect():
    """Returns (connection, cursor) for the configured engine."""
    engine = get_engine()
    if engine == 'mysql':
        if _pool is None:
            init_connection_pool() # Initialize the pool if it's not ready
        if not _pool:
            raise DatabaseUnavailable("Database connection pool is not available. Check configuration.")
        conn = _pool.get_connection()
        return conn, conn.cursor(dictionary=True)

    if engine != 'sqlite':
        raise DatabaseUnavailable("Unsupported database engine: {!r}".format(engine))
    path = get_sqlite_path()
    if path == MEMORY_PATH:
        if _memory_anchor is None:
            init_connection_pool()
        conn = sqlite3.connect(_MEMORY_URI, uri=True)
    else:
        conn = sqlite3.connect(path)
    conn.row_factory = sqlite3.Row
    return conn, _SqliteCursor(conn.cursor())


@contextmanager
def get_cursor():
    """
    Provides a database cursor for one unit of work.
    Handles connection acquisition, commit, rollback, and release.
    """
    conn, cur = _connect()
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()

# Initialize the engine when the module is loaded
init_connection_pool()
