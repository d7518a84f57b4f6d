"""Store access for persons.

`DataService` is the capability the rest of the code depends on. `SqliteDataService`
keeps persons in the workspace database; tests use an in-memory double.
"""

from __future__ import annotations

import logging
import sqlite3
from typing import Iterable, Protocol

from badgedesk.core import clock, db
from badgedesk.core.errors import PersistenceError
from badgedesk.core.models import Person

log = logging.getLogger(__name__)


class DataService(Protocol):
    def get_all_persons(self) -> list[Person]:
        """Return every persisted person. Order is unspecified."""
        ...

    def add_persons(self, persons: Iterable[Person]) -> None:
        """Commit all of `persons` or none of them."""
        ...


def _row_to_person(row: tuple) -> Person:
    return Person(
        id=row[0],
        first_name=row[1],
        last_name=row[2],
        role=row[3],
        organization=row[4],
        badge_number=row[5],
    )


class SqliteDataService:
    def get_all_persons(self) -> list[Person]:
        db_path = db.init_db()
        conn = sqlite3.connect(db_path)
        try:
            rows = conn.execute(
                """
                SELECT id, first_name, last_name, role, organization, badge_number
                FROM persons
                """
            ).fetchall()
        finally:
            conn.close()
        return [_row_to_person(row) for row in rows]

    def add_persons(self, persons: Iterable[Person]) -> None:
        batch = list(persons)
        if not batch:
            return
        now = clock.now_utc().isoformat()

        db_path = db.init_db()
        conn = sqlite3.connect(db_path)
        try:
            try:
                conn.executemany(
                    """
                    INSERT INTO persons (id, first_name, last_name, role, organization, badge_number, created_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    [
                        (p.id, p.first_name, p.last_name, p.role, p.organization, p.badge_number, now)
                        for p in batch
                    ],
                )
                conn.commit()
            except sqlite3.Error as exc:
                conn.rollback()
                log.warning("store rejected %d person(s): %s", len(batch), exc)
                raise PersistenceError(f"Could not persist {len(batch)} person(s): {exc}") from exc
        finally:
            conn.close()
        log.info("persisted %d person(s)", len(batch))

    def count_persons(self) -> int:
        db_path = db.init_db()
        conn = sqlite3.connect(db_path)
        try:
            row = conn.execute("SELECT COUNT(*) FROM persons").fetchone()
        finally:
            conn.close()
        return int(row[0]) if row else 0
