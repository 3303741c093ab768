"""
Event records, stored in the `events` table.
"""

import logging
from typing import Any, Dict, List, Optional

from eventboard.common.validation import EVENT_UPDATABLE_FIELDS, pick_fields
from eventboard.database.db_connection import Database, is_storable_id, utc_timestamp


class EventStore:
    """CRUD over the events table."""

    def __init__(self, db: Database):
        self.db = db

    def insert(self, title: str, description: str, date: str, location: str = "") -> Dict[str, Any]:
        created_at = utc_timestamp()
        event_id = self.db.insert(
            """
            INSERT INTO events (title, description, date, location, createdAt)
            VALUES (?, ?, ?, ?, ?)
            RETURNING id
            """,
            (title, description, date, location or "", created_at),
        )
        logging.info(f"[Events] Created event {event_id}")
        return {
            "id": event_id,
            "title": title,
            "description": description,
            "date": date,
            "location": location or "",
            "createdAt": created_at,
        }

    def find_by_id(self, event_id: int) -> Optional[Dict[str, Any]]:
        if not is_storable_id(event_id):
            return None
        return self.db.fetch_one("SELECT * FROM events WHERE id = ?", (event_id,))

    def list_all(self) -> List[Dict[str, Any]]:
        """All events, soonest date first."""
        return self.db.fetch_all("SELECT * FROM events ORDER BY date ASC, id ASC")

    def update(self, event_id: int, updates: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Rewrite any subset of title, description, date and location.

        Unknown keys are ignored and an empty subset returns the current
        record. Returns None if the event does not exist.
        """
        if not is_storable_id(event_id):
            return None

        fields = pick_fields(updates, EVENT_UPDATABLE_FIELDS)
        if not fields:
            return self.find_by_id(event_id)

        set_clause = ", ".join(f"{k} = ?" for k in fields)
        values = list(fields.values()) + [event_id]

        cur = self.db.execute(f"UPDATE events SET {set_clause} WHERE id = ?", values)
        if cur.rowcount == 0:
            return None

        logging.info(f"[Events] Updated event {event_id}: {sorted(fields)}")
        return self.find_by_id(event_id)

    def delete(self, event_id: int) -> bool:
        if not is_storable_id(event_id):
            return False
        cur = self.db.execute("DELETE FROM events WHERE id = ?", (event_id,))
        if cur.rowcount:
            logging.info(f"[Events] Deleted event {event_id}")
        return cur.rowcount > 0
