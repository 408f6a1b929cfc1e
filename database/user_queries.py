# /database/user_queries.py

import logging

# We need the get_cursor function from our connection module
from .connection import DB_ERRORS, classify_error, describe_target, get_cursor, get_engine
from .models import Status, StoreResult, User, is_valid_id

logger = logging.getLogger(__name__)

_CREATE_TABLE_SQL = {
    'sqlite': """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE
        )
    """,
    'mysql': """
        CREATE TABLE IF NOT EXISTS users (
            id INT AUTO_INCREMENT PRIMARY KEY,
            name VARCHAR(100) NOT NULL,
            email VARCHAR(100) NOT NULL UNIQUE
        )
    """,
}


def _failure(action, err, value=None):
    """Logs a storage error and turns it into a tagged result."""
    logger.error("Error %s: %s", action, err)
    return StoreResult(classify_error(err), value, str(err))


def _not_found(user_id, action):
    message = f"User with ID {user_id} not found for {action}."
    logger.info(message)
    return StoreResult(Status.NOT_FOUND, message=message)


# --- SCHEMA ---
def create_table():
    """Ensures the 'users' table exists. Creates it if it doesn't."""
    try:
        with get_cursor() as cur:
            cur.execute(_CREATE_TABLE_SQL.get(get_engine(), _CREATE_TABLE_SQL['sqlite']))
    except DB_ERRORS as err:
        return _failure("creating table", err)
    logger.info("Table 'users' ensured to exist in %s", describe_target())
    return StoreResult(Status.OK)


# --- USER CRUD ---
def add_user(user):
    """Inserts a new user and writes the generated ID back onto it."""
    try:
        with get_cursor() as cur:
            cur.execute("INSERT INTO users (name, email) VALUES (%s, %s)", (user.name, user.email))
            new_user_id = cur.lastrowid
    except DB_ERRORS as err:
        return _failure("adding user", err)

    user.id = new_user_id
    logger.info("User added: %s with ID: %s", user.name, user.id)
    return StoreResult(Status.OK, new_user_id)


def fetch_all_users():
    """Fetches every user, oldest ID first."""
    try:
        with get_cursor() as cur:
            cur.execute("SELECT id, name, email FROM users ORDER BY id")
            users = [User.from_row(row) for row in cur.fetchall()]
    except DB_ERRORS as err:
        return _failure("retrieving users", err, value=[])
    return StoreResult(Status.OK, users)


def get_user_by_id(user_id):
    """Retrieves a single user by ID."""
    if not is_valid_id(user_id):
        return StoreResult(Status.NOT_FOUND, message=f"User with ID {user_id} not found.")
    try:
        with get_cursor() as cur:
            cur.execute("SELECT id, name, email FROM users WHERE id = %s", (user_id,))
            row = cur.fetchone()
    except DB_ERRORS as err:
        return _failure("retrieving user by ID", err)

    if row is None:
        return StoreResult(Status.NOT_FOUND, message=f"User with ID {user_id} not found.")
    return StoreResult(Status.OK, User.from_row(row))


def update_user(user):
    """Updates name and email of the user matching user.id."""
    if not is_valid_id(user.id):
        return _not_found(user.id, "update")
    try:
        with get_cursor() as cur:
            cur.execute("UPDATE users SET name = %s, email = %s WHERE id = %s", (user.name, user.email, user.id))
            affected = cur.rowcount
    except DB_ERRORS as err:
        return _failure("updating user", err)

    if affected > 0:
        logger.info("User updated: %s (ID: %s)", user.name, user.id)
        return StoreResult(Status.OK, user)
    return _not_found(user.id, "update")


def delete_user(user_id):
    """Permanently deletes a user."""
    if not is_valid_id(user_id):
        return _not_found(user_id, "deletion")
    try:
        with get_cursor() as cur:
            cur.execute("DELETE FROM users WHERE id = %s", (user_id,))
            affected = cur.rowcount
    except DB_ERRORS as err:
        return _failure("deleting user", err)

    if affected > 0:
        logger.info("User deleted with ID: %s", user_id)
        return StoreResult(Status.OK, user_id)
    return _not_found(user_id, "deletion")


# --- HELPERS ---
def count_users():
    """Gets the number of stored users."""
    try:
        with get_cursor() as cur:
            cur.execute("SELECT COUNT(*) AS count FROM users")
            result = cur.fetchone()
    except DB_ERRORS as err:
        return _failure("counting users", err, value=0)
    return StoreResult(Status.OK, result['count'] if result else 0)
