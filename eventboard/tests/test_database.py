import sqlite3

import pytest

from eventboard.database.db_connection import Database


def test_with_block_closes_handle_on_error():
    with pytest.raises(RuntimeError):
        with Database(":memory:") as db:
            db.execute("SELECT 1")
            raise RuntimeError("boom")

    assert db.conn is None
    with pytest.raises(sqlite3.ProgrammingError):
        db.execute("SELECT 1")


def test_with_block_closes_handle_on_exit():
    with Database(":memory:") as db:
        assert db.fetch_one("SELECT 1 AS one") == {"one": 1}

    assert db.conn is None


def test_close_twice():
    db = Database(":memory:")
    db.close()
    db.close()

    assert db.conn is None


def test_tables_created_on_open(tmp_path):
    path = tmp_path / "data" / "eventboard.db"

    with Database(str(path)) as db:
        tables = {row["name"] for row in db.fetch_all("SELECT name FROM sqlite_master WHERE type = 'table'")}
        assert {"users", "events"} <= tables

    # Reopening an existing file leaves the data alone
    with Database(str(path)) as db:
        db.execute("INSERT INTO events (title, description, date, createdAt) VALUES ('T', 'D', '2024', 'now')")
    with Database(str(path)) as db:
        assert len(db.fetch_all("SELECT id FROM events")) == 1
