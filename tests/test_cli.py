import io
from datetime import date

import pytest

from libmanager.catalog import Book, Catalog
from libmanager.cli import main
from libmanager.db import connect
from libmanager.users import User, register_user

PASSWORD = "password"


@pytest.fixture
def db_path(tmp_path):
    path = tmp_path / "library.db"
    conn = connect(path)
    register_user(conn, "admin", PASSWORD)
    register_user(conn, "reader", PASSWORD)
    with conn:
        conn.execute("UPDATE users SET role='admin' WHERE username='admin'")
    conn.close()
    return path


def _run(monkeypatch, capsys, db_path, lines):
    monkeypatch.setattr("sys.stdin", io.StringIO("".join(f"{line}\n" for line in lines)))
    code = main(["--db", str(db_path)])
    return code, capsys.readouterr().out


def test_exit_from_start_menu(monkeypatch, capsys, db_path):
    code, out = _run(monkeypatch, capsys, db_path, ["0"])
    assert code == 0
    assert "Goodbye!" in out


def test_end_of_input_exits_cleanly(monkeypatch, capsys, db_path):
    code, out = _run(monkeypatch, capsys, db_path, [])
    assert code == 0
    assert "Library Management System" in out


def test_invalid_start_input(monkeypatch, capsys, db_path):
    code, out = _run(monkeypatch, capsys, db_path, ["abc", "7", "0"])
    assert code == 0
    assert "Invalid input" in out
    assert "Invalid option" in out


def test_register_then_login(monkeypatch, capsys, db_path):
    code, out = _run(
        monkeypatch, capsys, db_path, ["1", "carol", PASSWORD, "2", "carol", PASSWORD, "0"]
    )
    assert code == 0
    assert "You can now login." in out
    assert "Login successful. Role: user" in out
    assert "Exiting..." in out


def test_register_duplicate_username(monkeypatch, capsys, db_path):
    _, out = _run(monkeypatch, capsys, db_path, ["1", "reader", PASSWORD, "0"])
    assert "Username already exists" in out
    assert "You can now login." not in out


def test_login_failure(monkeypatch, capsys, db_path):
    _, out = _run(monkeypatch, capsys, db_path, ["2", "reader", "secret", "0"])
    assert "❌ Login failed" in out
    assert "Goodbye!" in out


def test_reader_denied_staff_actions(monkeypatch, capsys, db_path):
    _, out = _run(monkeypatch, capsys, db_path, ["2", "reader", PASSWORD, "3", "9", "0"])
    assert out.count("Access denied.") == 2
    assert "6. View My Borrowed Books" in out


def test_admin_adds_and_displays_book(monkeypatch, capsys, db_path):
    lines = [
        "2", "admin", PASSWORD,
        "3", "Dune", "A novel", "9.5", "Sci-Fi", "Frank Herbert", "Chilton", "1965", "1",
        "1",
        "0",
    ]
    code, out = _run(monkeypatch, capsys, db_path, lines)
    assert code == 0
    assert "✅ Book added successfully." in out
    assert "Name: Dune" in out
    assert "Available: Yes" in out
    conn = connect(db_path)
    books = Catalog(conn, User("admin", "admin")).books()
    conn.close()
    assert [(b.name, b.author, b.year) for b in books] == [("Dune", "Frank Herbert", 1965)]


def test_invalid_number_aborts_add(monkeypatch, capsys, db_path):
    lines = ["2", "admin", PASSWORD, "3", "Dune", "A novel", "cheap", "0"]
    _, out = _run(monkeypatch, capsys, db_path, lines)
    assert "Invalid input." in out
    conn = connect(db_path)
    books = Catalog(conn, User("admin", "admin")).books()
    conn.close()
    assert books == []


def test_admin_issues_and_returns_book(monkeypatch, capsys, db_path):
    conn = connect(db_path)
    book = Catalog(conn, User("admin", "admin")).add_book(
        Book("Dune", "A novel", 9.5, "Sci-Fi", "Frank Herbert", "Chilton", 1965)
    )
    reader_id = conn.execute("SELECT id FROM users WHERE username='reader'").fetchone()[0]
    conn.close()

    lines = [
        "2", "admin", PASSWORD,
        "6", str(book.id), str(reader_id),
        "8",
        "7", "1",
        "0",
    ]
    _, out = _run(monkeypatch, capsys, db_path, lines)
    assert f"✅ Book issued successfully to user ID {reader_id}." in out
    assert f"Borrowed on: {date.today().isoformat()}" in out
    assert "✅ Book returned successfully." in out
    assert "Penalty" not in out

    conn = connect(db_path)
    row = conn.execute("SELECT returned, return_date FROM borrowed_books").fetchone()
    available = conn.execute("SELECT available FROM books").fetchone()[0]
    conn.close()
    assert row[0] == 1
    assert row[1] == date.today().isoformat()
    assert available == 1


def test_issue_missing_book_reports_error(monkeypatch, capsys, db_path):
    lines = ["2", "admin", PASSWORD, "6", "999", "1", "0"]
    _, out = _run(monkeypatch, capsys, db_path, lines)
    assert "Book not found." in out


def test_search_finds_by_author(monkeypatch, capsys, db_path):
    conn = connect(db_path)
    catalog = Catalog(conn, User("admin", "admin"))
    catalog.add_book(Book("Dune", "", 9.5, "Sci-Fi", "Frank Herbert", "Chilton", 1965))
    catalog.add_book(Book("Emma", "", 5.0, "Classic", "Jane Austen", "Murray", 1815))
    conn.close()

    _, out = _run(monkeypatch, capsys, db_path, ["2", "reader", PASSWORD, "2", "Herbert", "0"])
    assert "Name: Dune" in out
    assert "Name: Emma" not in out