# libmanager

A console library management system. It keeps a catalogue of books,
registers user accounts, and lets staff lend books out and take them
back, charging a late fee when a book comes back after the loan period.

Everything is stored in a local SQLite database file.

## Installing

```
pip install .
```

## Running

```
libmanager
```

By default the database is `library.db` in the current directory; pass
`--db PATH` to use another file. The tables are created on first use.

When it starts you can register a new account, log in, or exit. New
accounts always get the `user` role.

After logging in:

- Everyone can list the catalogue and search it by name, author or
  category.
- Admins and librarians can also add, update and delete books, issue a
  book to a user (by book ID and user ID), take a book back (by loan
  record ID), and see every loan.
- Ordinary users can see their own loans.

Loans are listed newest first. A loan lasts 14 days; each day after that
costs Rs 10, and the amount is shown when the book is returned.

## Using it from Python

```python
from libmanager.db import connect
from libmanager.users import register_user, login_user
from libmanager.catalog import Book, Catalog
from libmanager.borrowing import Borrowing, late_penalty

connection = connect("library.db")  # creates the tables if missing

password = "password"
register_user(connection, "alice", password)
user = login_user(connection, "alice", password)

catalog = Catalog(connection, user)
for book in catalog.search("tolkien"):
    print(book.id, book.name, book.year)

late_penalty("2024-01-01", "2024-01-20")  # 50
```

The modules:

- `libmanager.db`: `connect(path)`, `ensure_schema(connection)`,
  `is_staff(role)`, the `Role` enum (`admin`, `librarian`, `user`) and
  the errors `LibraryError`, `PermissionDeniedError` and `NotFoundError`.
- `libmanager.users`: `register_user` and `login_user`, both returning a
  `User(username, role)`. They raise `UsernameTakenError` and
  `AuthenticationError`.
- `libmanager.catalog`: the `Book` dataclass and `Catalog`, with
  `add_book`, `update_book`, `delete_book`, `books` and `search`.
- `libmanager.borrowing`: `Borrowing`, with `borrow_book(book_id,
  user_id, today)` returning the new loan record ID,
  `return_book(record_id, today)` returning the late fee, and
  `borrowed_books()` returning `BorrowRecord`s; plus `late_penalty`.
  `today` may be a `date`, a `YYYY-MM-DD` string, or omitted for the
  current date. Lending a book already out raises
  `BookUnavailableError`; returning a closed loan raises
  `AlreadyReturnedError`.
- `libmanager.cli`: `main(argv=None)`, the console behind the
  `libmanager` command.

Operations that the account's role may not perform raise
`PermissionDeniedError`. Missing books or loan records raise
`NotFoundError`. All these errors derive from `LibraryError`.

## What it does not do

- There is no user management. New accounts always get the `user` role,
  and nothing in the package changes a role or removes an account; the
  console's "Manage Users" entry only says it is not available. To make
  someone an admin or librarian, edit the `role` column of the `users`
  table directly.
- Passwords are stored and compared as given, without hashing.

## Tests

```
pip install ".[test]"
pytest
```