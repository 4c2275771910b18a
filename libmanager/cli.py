"""Interactive console for the library system."""

from __future__ import annotations

import argparse
import sqlite3
import sys
from contextlib import closing
from datetime import date
from typing import List, Optional

from libmanager.borrowing import Borrowing
from libmanager.catalog import Book, Catalog
from libmanager.db import LibraryError, PermissionDeniedError, Role, connect
from libmanager.users import (
    AuthenticationError,
    User,
    UsernameTakenError,
    login_user,
    register_user,
)

DEFAULT_DB = "library.db"
_RULE_BOOK = "-----------------------------"
_RULE_LOAN = "-------------------------"
_REGISTER_PHRASE_PROMPT = "Enter pass: "
_LOGIN_PHRASE_PROMPT = "pass: "


class _EndOfInput(Exception):
    """Standard input was exhausted."""


def _read(prompt: str) -> str:
    try:
        return input(prompt)
    except EOFError:
        raise _EndOfInput from None


def _read_int(prompt: str) -> int:
    return int(_read(prompt).strip())


def _read_float(prompt: str) -> float:
    return float(_read(prompt).strip())


def _read_flag(prompt: str) -> bool:
    return _read_int(prompt) != 0


def _authenticate(connection: sqlite3.Connection) -> Optional[User]:
    while True:
        try:
            option = _read_int("\n1. Register\n2. Login\n0. Exit\nChoose option: ")
        except ValueError:
            print("Invalid input")
            continue
        if option == 1:
            username = _read("Enter username: ").strip()
            phrase = _read(_REGISTER_PHRASE_PROMPT).strip()
            try:
                register_user(connection, username, phrase)
            except UsernameTakenError:
                print("Username already exists. Try a different one.")
            except sqlite3.Error as exc:
                print(f"Registration error: {exc}", file=sys.stderr)
            else:
                print("Registration successful. You are assigned the 'user' role.")
                print("You can now login.")
        elif option == 2:
            username = _read("Username: ").strip()
            phrase = _read(_LOGIN_PHRASE_PROMPT).strip()
            try:
                user = login_user(connection, username, phrase)
            except AuthenticationError:
                print("❌ Login failed. Invalid username or pass.")
            except sqlite3.Error:
                print("Login query failed.", file=sys.stderr)
            else:
                print(f"Login successful. Role: {user.role}")
                return user
        elif option == 0:
            return None
        else:
            print("Invalid option")


def _print_menu(user: User) -> None:
    print(f"\nWelcome, {user.username} ({user.role})")
    print("====== Menu ======")
    print("1. Display Books\n2. Search Books")
    if user.is_staff:
        print("3. Add Book\n4. Update Book\n5. Delete Book")
        print("6. Issue (Borrow) Book\n7. Return Book\n8. View Borrowed Books")
        print("9. Manage Users (Admin Only)")
    else:
        print("6. View My Borrowed Books")
    print("0. Exit")


def _read_book(prefix: str) -> Book:
    name = _read(f"{prefix} name: ")
    description = _read(f"{prefix} description: ")
    price = _read_float(f"{prefix} price: ")
    category = _read(f"{prefix} category: ")
    author = _read(f"{prefix} author: ")
    publisher = _read(f"{prefix} publisher: ")
    year = _read_int(f"{prefix} year: ")
    available = _read_flag("Is available? (1 = Yes, 0 = No): ")
    return Book(name, description, price, category, author, publisher, year, available)


def _show_books(catalog: Catalog) -> None:
    print("\nAvailable Books:")
    for book in catalog.books():
        print(
            f"\nID: {book.id}\nName: {book.name}\nDescription: {book.description}"
            f"\nPrice: ${book.price:g}\nCategory: {book.category}\nAuthor: {book.author}"
            f"\nPublisher: {book.publisher}\nYear: {book.year}"
            f"\nAvailable: {'Yes' if book.available else 'No'}\n{_RULE_BOOK}"
        )


def _search_books(catalog: Catalog) -> None:
    keyword = _read("Enter book name, author or category to search: ")
    print("\nSearch results:")
    for book in catalog.search(keyword):
        print(
            f"\nID: {book.id}\nName: {book.name}\nAuthor: {book.author}"
            f"\nCategory: {book.category}\nYear: {book.year}"
            f"\nAvailable: {'Yes' if book.available else 'No'}\n{_RULE_BOOK}"
        )


def _add_book(catalog: Catalog) -> None:
    catalog.add_book(_read_book("Enter book"))
    print("✅ Book added successfully.")


def _update_book(catalog: Catalog) -> None:
    book_id = _read_int("Enter book ID to update: ")
    catalog.update_book(book_id, _read_book("New"))
    print("✅ Book updated successfully.")


def _delete_book(catalog: Catalog) -> None:
    catalog.delete_book(_read_int("Enter book ID to delete: "))
    print("✅ Book deleted successfully.")


def _issue_book(borrowing: Borrowing) -> None:
    book_id = _read_int("Enter book ID to borrow: ")
    user_id = _read_int("Enter user ID who borrows: ")
    borrowing.borrow_book(book_id, user_id, date.today())
    print(f"✅ Book issued successfully to user ID {user_id}.")


def _return_book(borrowing: Borrowing) -> None:
    record_id = _read_int("Enter borrowed record ID to return: ")
    penalty = borrowing.return_book(record_id, date.today())
    print("✅ Book returned successfully.")
    if penalty > 0:
        print(f"⚠️ Penalty due to late return: Rs {penalty}")


def _show_loans(borrowing: Borrowing) -> None:
    print("\nBorrowed Books:")
    for record in borrowing.borrowed_books():
        status = "Returned" if record.returned else "Not returned"
        print(
            f"\nRecord ID: {record.id}\nBook: {record.book_name}"
            f"\nBorrowed on: {record.borrow_date}"
            f"\nReturned on: {record.return_date or 'Not returned'}"
            f"\nStatus: {status}\n{_RULE_LOAN}"
        )


def _dispatch(choice: int, user: User, catalog: Catalog, borrowing: Borrowing) -> None:
    staff = user.is_staff
    if choice == 1:
        _show_books(catalog)
    elif choice == 2:
        _search_books(catalog)
    elif choice == 6:
        if staff:
            _issue_book(borrowing)
        else:
            _show_loans(borrowing)
    elif choice in (3, 4, 5, 7, 8):
        if not staff:
            print("Access denied.")
            return
        handlers = {
            3: lambda: _add_book(catalog),
            4: lambda: _update_book(catalog),
            5: lambda: _delete_book(catalog),
            7: lambda: _return_book(borrowing),
            8: lambda: _show_loans(borrowing),
        }
        handlers[choice]()
    elif choice == 9:
        if user.role == Role.ADMIN.value:
            print("User management is not available yet.")
        else:
            print("Access denied.")
    else:
        print("Invalid option.")


def _session(connection: sqlite3.Connection) -> int:
    print("=== 📚 Library Management System ===")
    user = _authenticate(connection)
    if user is None:
        print("Goodbye!")
        return 0

    catalog = Catalog(connection, user)
    borrowing = Borrowing(connection, user)
    while True:
        _print_menu(user)
        try:
            choice = _read_int("Enter choice: ")
        except ValueError:
            print("Invalid input.")
            continue
        if choice == 0:
            print("Exiting...")
            return 0
        try:
            _dispatch(choice, user, catalog, borrowing)
        except PermissionDeniedError as exc:
            print(f"❌ {exc}")
        except LibraryError as exc:
            print(exc)
        except ValueError:
            print("Invalid input.")
        except sqlite3.Error as exc:
            print(f"❌ Database error: {exc}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the interactive library console."""
    parser = argparse.ArgumentParser(
        prog="libmanager", description="Interactive library management console."
    )
    parser.add_argument(
        "--db", default=DEFAULT_DB, help=f"path of the database file (default: {DEFAULT_DB})"
    )
    args = parser.parse_args(argv)

    try:
        connection = connect(args.db)
    except (LibraryError, sqlite3.Error) as exc:
        print(exc, file=sys.stderr)
        return 1

    with closing(connection):
        try:
            return _session(connection)
        except _EndOfInput:
            return 0


if __name__ == "__main__":
    sys.exit(main())