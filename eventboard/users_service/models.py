"""
User records.

Each row in the `users` table holds one account. The password column only
ever contains an Argon2 digest, and every record handed back to callers
(apart from the lookups used for login) has the password removed.
"""

import logging
import sqlite3
from typing import Any, Dict, List, Optional

from eventboard.common.errors import ConflictError
from eventboard.common.validation import USER_UPDATABLE_FIELDS, pick_fields
from eventboard.database.db_connection import Database, is_storable_id, utc_timestamp
from eventboard.users_service.utils import hash_password

PUBLIC_COLUMNS = "id, email, name, createdAt"


def without_password(user: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if user is None:
        return None
    return {k: v for k, v in user.items() if k != "password"}


class UserStore:
    """CRUD over the users table."""

    def __init__(self, db: Database):
        self.db = db

    def insert(self, email: str, password: str, name: str = "") -> Dict[str, Any]:
        """
        Create a user. The password is hashed before it reaches the database.

        Raises:
            ConflictError: The email is already registered.
        """
        created_at = utc_timestamp()
        try:
            user_id = self.db.insert(
                "INSERT INTO users (email, password, name, createdAt) VALUES (?, ?, ?, ?) RETURNING id",
                (email, hash_password(password), name or "", created_at),
            )
        except sqlite3.IntegrityError as e:
            raise ConflictError("User with this email already exists") from e

        logging.info(f"[Users] Created user {user_id}")
        return {"id": user_id, "email": email, "name": name or "", "createdAt": created_at}

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Full row, digest included, for credential checks."""
        return self.db.fetch_one("SELECT * FROM users WHERE email = ?", (email,))

    def find_by_id(self, user_id: int) -> Optional[Dict[str, Any]]:
        """Public projection of one user; the digest is left out."""
        if not is_storable_id(user_id):
            return None
        return self.db.fetch_one(f"SELECT {PUBLIC_COLUMNS} FROM users WHERE id = ?", (user_id,))

    def list_all(self) -> List[Dict[str, Any]]:
        return self.db.fetch_all(f"SELECT {PUBLIC_COLUMNS} FROM users ORDER BY id ASC")

    def update(self, user_id: int, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Apply a partial update over email, name and password.

        Unknown keys are ignored. With nothing left to change, the current
        record is returned as-is.

        Returns:
            dict: The record after the update, or None if the id does not exist.

        Raises:
            ConflictError: The new email belongs to another user.
        """
        if not is_storable_id(user_id):
            return None

        fields = pick_fields(updates, USER_UPDATABLE_FIELDS)
        if not fields:
            return self.find_by_id(user_id)

        if "password" in fields:
            fields["password"] = hash_password(fields["password"])

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        values = list(fields.values()) + [user_id]

        try:
            cur = self.db.execute(f"UPDATE users SET {set_clause} WHERE id = ?", values)
        except sqlite3.IntegrityError as e:
            raise ConflictError("User with this email already exists") from e

        if cur.rowcount == 0:
            return None

        logging.info(f"[Users] Updated user {user_id}: {sorted(fields)}")
        return self.find_by_id(user_id)

    def delete(self, user_id: int) -> bool:
        if not is_storable_id(user_id):
            return False
        cur = self.db.execute("DELETE FROM users WHERE id = ?", (user_id,))
        if cur.rowcount:
            logging.info(f"[Users] Deleted user {user_id}")
        return cur.rowcount > 0
