"""
Table bootstrap for the users and events tables.

Statements use IF NOT EXISTS, so running this against an existing database
file is a no-op.
"""

import sqlite3

SCHEMA = """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        email TEXT UNIQUE NOT NULL,
        password TEXT NOT NULL,
        name TEXT DEFAULT '',
        createdAt TEXT NOT NULL
    );

    CREATE INDEX IF NOT EXISTS idx_users_email ON users(email);

    CREATE TABLE IF NOT EXISTS events (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        title TEXT NOT NULL,
        description TEXT NOT NULL,
        date TEXT NOT NULL,
        location TEXT DEFAULT '',
        createdAt TEXT NOT NULL
    );
"""


def init_db(conn: sqlite3.Connection) -> None:
    """Create the tables and the email index if they are missing."""
    conn.executescript(SCHEMA)
