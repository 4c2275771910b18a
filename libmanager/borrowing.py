"""Issuing books to readers, taking them back and listing loans."""

from __future__ import annotations

import re
import sqlite3
from dataclasses import dataclass
from datetime import date, datetime
from typing import List, Optional, Union

from libmanager.db import LibraryError, NotFoundError, PermissionDeniedError, is_staff
from libmanager.users import User

LOAN_PERIOD_DAYS = 14
DAILY_LATE_FEE = 10

DateLike = Union[date, str]

_DATE_PATTERN = re.compile(r"\s*(\d+)-(\d+)-(\d+)")


class BookUnavailableError(LibraryError):
    """The requested book is already out on loan."""


class AlreadyReturnedError(LibraryError):
    """The loan record has already been closed."""


@dataclass(frozen=True)
class BorrowRecord:
    """One loan of a book to a reader."""

    id: int
    username: str
    book_name: str
    borrow_date: str
    return_date: Optional[str]
    returned: bool


def _as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    match = _DATE_PATTERN.match(str(value))
    if match is None:
        raise ValueError(f"Invalid date: {value!r}")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def late_penalty(borrow_date: DateLike, return_date: DateLike) -> int:
    """Fee owed when a book is returned after the loan period has passed."""
    days = (_as_date(return_date) - _as_date(borrow_date)).days
    if days > LOAN_PERIOD_DAYS:
        return (days - LOAN_PERIOD_DAYS) * DAILY_LATE_FEE
    return 0


class Borrowing:
    """Loan operations performed on behalf of one account."""

    def __init__(self, connection: sqlite3.Connection, user: User) -> None:
        self.connection = connection
        self.user = user

    def _require_staff(self, action: str) -> None:
        if not is_staff(self.user.role):
            raise PermissionDeniedError(f"Only admin or librarian can {action} books.")

    def borrow_book(self, book_id: int, user_id: int, today: Optional[DateLike] = None) -> int:
        """Lend a book to a reader and return the id of the new loan record."""
        self._require_staff("issue")
        borrow_day = _as_date(today) if today is not None else date.today()
        with self.connection:
            row = self.connection.execute(
                "SELECT available FROM books WHERE id=?", (book_id,)
            ).fetchone()
            if row is None:
                raise NotFoundError("Book not found.")
            if not row[0]:
                raise BookUnavailableError("Book not available.")
            cursor = self.connection.execute(
                "INSERT INTO borrowed_books(user_id, book_id, borrow_date, returned) "
                "VALUES (?, ?, ?, 0)",
                (user_id, book_id, borrow_day.isoformat()),
            )
            self.connection.execute("UPDATE books SET available=0 WHERE id=?", (book_id,))
        return cursor.lastrowid

    def return_book(self, record_id: int, today: Optional[DateLike] = None) -> int:
        """Close a loan, make the book available again and return the late fee."""
        self._require_staff("return")
        return_day = _as_date(today) if today is not None else date.today()
        with self.connection:
            row = self.connection.execute(
                "SELECT book_id, borrow_date, returned FROM borrowed_books WHERE id=?",
                (record_id,),
            ).fetchone()
            if row is None:
                raise NotFoundError("Borrowed record not found.")
            book_id, borrow_date, returned = row[0], row[1], row[2]
            if returned:
                raise AlreadyReturnedError("Book already returned.")
            penalty = late_penalty(borrow_date, return_day)
            self.connection.execute(
                "UPDATE borrowed_books SET returned=1, return_date=? WHERE id=?",
                (return_day.isoformat(), record_id),
            )
            self.connection.execute("UPDATE books SET available=1 WHERE id=?", (book_id,))
        return penalty

    def borrowed_books(self) -> List[BorrowRecord]:
        """All loans for staff; only the account's own loans for readers, newest first."""
        query = (
            "SELECT bb.id, u.username, b.name, bb.borrow_date, bb.return_date, bb.returned "
            "FROM borrowed_books bb "
            "JOIN users u ON bb.user_id = u.id "
            "JOIN books b ON bb.book_id = b.id "
        )
        params: tuple = ()
        if not is_staff(self.user.role):
            query += "WHERE u.username = ? "
            params = (self.user.username,)
        query += "ORDER BY bb.borrow_date DESC, bb.id DESC"
        rows = self.connection.execute(query, params).fetchall()
        return [
            BorrowRecord(
                id=row[0],
                username=row[1],
                book_name=row[2],
                borrow_date=row[3],
                return_date=row[4] or None,
                returned=bool(row[5]),
            )
            for row in rows
        ]