"""Account registration and login."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass

from libmanager.db import LibraryError, Role, is_staff


class UsernameTakenError(LibraryError):
    """Registration was attempted with a username that already exists."""


class AuthenticationError(LibraryError):
    """The username and password pair did not match an account."""


@dataclass(frozen=True)
class User:
    """A logged-in account."""

    username: str
    role: str

    @property
    def is_staff(self) -> bool:
        return is_staff(self.role)


def register_user(connection: sqlite3.Connection, username: str, password: str) -> User:
    """Create an account with the default ``user`` role."""
    role = Role.USER.value
    with connection:
        existing = connection.execute(
            "SELECT username FROM users WHERE username=?", (username,)
        ).fetchone()
        if existing is not None:
            raise UsernameTakenError(
                f"Username {username!r} already exists. Try a different one."
            )
        connection.execute(
            "INSERT INTO users(username, pass, role) VALUES (?, ?, ?)",
            (username, password, role),
        )
    return User(username=username, role=role)


def login_user(connection: sqlite3.Connection, username: str, password: str) -> User:
    """Return the account matching the credentials, or raise AuthenticationError."""
    row = connection.execute(
        "SELECT role FROM users WHERE username=? AND pass=?", (username, password)
    ).fetchone()
    if row is None:
        raise AuthenticationError("Login failed. Invalid username or password.")
    return User(username=username, role=row[0])