"""The book catalogue: adding, changing, removing, listing and searching books."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, replace
from typing import List, Optional

from libmanager.db import PermissionDeniedError, is_staff
from libmanager.users import User


@dataclass(frozen=True)
class Book:
    """A book in the catalogue; ``id`` is None until it is stored."""

    name: str
    description: str
    price: float
    category: str
    author: str
    publisher: str
    year: int
    available: bool = True
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "Book":
        return cls(
            id=row["id"],
            name=row["name"],
            description=row["description"],
            price=float(row["price"]),
            category=row["category"],
            author=row["author"],
            publisher=row["publisher"],
            year=int(row["year"]),
            available=bool(row["available"]),
        )

    def _values(self) -> tuple:
        return (
            self.name,
            self.description,
            float(self.price),
            self.category,
            self.author,
            self.publisher,
            int(self.year),
            int(bool(self.available)),
        )


class Catalog:
    """Book operations performed on behalf of one account."""

    def __init__(self, connection: sqlite3.Connection, user: User) -> None:
        self.connection = connection
        self.user = user

    def _require_staff(self, action: str) -> None:
        if not is_staff(self.user.role):
            raise PermissionDeniedError(f"Only admin or librarian can {action} books.")

    def add_book(self, book: Book) -> Book:
        """Store a new book and return it with its assigned id."""
        self._require_staff("add")
        with self.connection:
            cursor = self.connection.execute(
                "INSERT INTO books(name, description, price, category, author, "
                "publisher, year, available) VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
                book._values(),
            )
        return replace(book, id=cursor.lastrowid)

    def update_book(self, book_id: int, book: Book) -> None:
        """Overwrite every field of the book with the given id."""
        self._require_staff("update")
        with self.connection:
            self.connection.execute(
                "UPDATE books SET name=?, description=?, price=?, category=?, "
                "author=?, publisher=?, year=?, available=? WHERE id=?",
                (*book._values(), book_id),
            )

    def delete_book(self, book_id: int) -> None:
        """Remove the book with the given id."""
        self._require_staff("delete")
        with self.connection:
            self.connection.execute("DELETE FROM books WHERE id=?", (book_id,))

    def books(self) -> List[Book]:
        """Every book in the catalogue."""
        rows = self.connection.execute("SELECT * FROM books ORDER BY id").fetchall()
        return [Book.from_row(row) for row in rows]

    def search(self, keyword: str) -> List[Book]:
        """Books whose name, author or category contains ``keyword``."""
        pattern = f"%{keyword}%"
        rows = self.connection.execute(
            "SELECT * FROM books WHERE name LIKE ? OR author LIKE ? OR category LIKE ? "
            "ORDER BY id",
            (pattern, pattern, pattern),
        ).fetchall()
        return [Book.from_row(row) for row in rows]