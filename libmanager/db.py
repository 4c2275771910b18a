"""Database connection, schema and shared definitions for the library system."""

from __future__ import annotations

import os
import sqlite3
from enum import Enum
from typing import Union


class Role(str, Enum):
    """Roles a library account can hold."""

    ADMIN = "admin"
    LIBRARIAN = "librarian"
    USER = "user"


STAFF_ROLES = frozenset({Role.ADMIN, Role.LIBRARIAN})


class LibraryError(Exception):
    """Base class for errors raised by the library system."""


class PermissionDeniedError(LibraryError):
    """The current account's role does not allow the requested action."""


class NotFoundError(LibraryError):
    """A requested record does not exist."""


_SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id       INTEGER PRIMARY KEY AUTOINCREMENT,
    username TEXT NOT NULL UNIQUE,
    pass     TEXT NOT NULL,
    role     TEXT NOT NULL DEFAULT 'user'
);

CREATE TABLE IF NOT EXISTS books (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    name        TEXT NOT NULL,
    description TEXT NOT NULL DEFAULT '',
    price       REAL NOT NULL DEFAULT 0,
    category    TEXT NOT NULL DEFAULT '',
    author      TEXT NOT NULL DEFAULT '',
    publisher   TEXT NOT NULL DEFAULT '',
    year        INTEGER NOT NULL DEFAULT 0,
    available   INTEGER NOT NULL DEFAULT 1
);

CREATE TABLE IF NOT EXISTS borrowed_books (
    id          INTEGER PRIMARY KEY AUTOINCREMENT,
    user_id     INTEGER NOT NULL,
    book_id     INTEGER NOT NULL,
    borrow_date TEXT NOT NULL,
    return_date TEXT,
    returned    INTEGER NOT NULL DEFAULT 0
);
"""


def connect(path: Union[str, "os.PathLike[str]"]) -> sqlite3.Connection:
    """Open the library database at ``path``, creating its tables if needed."""
    try:
        connection = sqlite3.connect(path)
    except sqlite3.Error as exc:
        raise LibraryError(f"Error connecting to DB: {exc}") from exc
    connection.row_factory = sqlite3.Row
    ensure_schema(connection)
    return connection


def ensure_schema(connection: sqlite3.Connection) -> None:
    """Create the users, books and borrowed_books tables if they are missing."""
    connection.executescript(_SCHEMA)


def is_staff(role: Union[str, Role]) -> bool:
    """Return True for roles allowed to manage books and loans."""
    try:
        return Role(role) in STAFF_ROLES
    except ValueError:
        return False