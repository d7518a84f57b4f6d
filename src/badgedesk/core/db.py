from __future__ import annotations

import logging
import sqlite3
from pathlib import Path

from badgedesk.core import clock, paths

log = logging.getLogger(__name__)


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[3]


def _migrations_dir() -> Path:
    return _repo_root() / "migrations"


def _load_migrations() -> list[tuple[str, str]]:
    migrations_dir = _migrations_dir()
    if not migrations_dir.exists():
        raise FileNotFoundError(f"Missing migrations directory: {migrations_dir}")
    migrations: list[tuple[str, str]] = []
    for path in sorted(migrations_dir.glob("*.sql")):
        migrations.append((path.name, path.read_text(encoding="utf-8")))
    return migrations


def _ensure_migrations_table(conn: sqlite3.Connection) -> None:
    conn.execute(
        """
        CREATE TABLE IF NOT EXISTS schema_migrations (
          version TEXT PRIMARY KEY,
          applied_at TEXT NOT NULL
        )
        """
    )


def _applied_versions(conn: sqlite3.Connection) -> set[str]:
    rows = conn.execute("SELECT version FROM schema_migrations").fetchall()
    return {row[0] for row in rows}


def _apply_migration(conn: sqlite3.Connection, *, version: str, sql: str) -> None:
    conn.executescript(sql)
    conn.execute(
        "INSERT INTO schema_migrations (version, applied_at) VALUES (?, ?)",
        (version, clock.now_utc().isoformat()),
    )
    log.info("applied migration %s", version)


def init_db() -> Path:
    db_path = paths.resolve_db_path()

    conn = sqlite3.connect(db_path)
    try:
        conn.execute("PRAGMA foreign_keys = ON;")
        _ensure_migrations_table(conn)
        applied = _applied_versions(conn)
        for version, sql in _load_migrations():
            if version in applied:
                continue
            _apply_migration(conn, version=version, sql=sql)
        conn.commit()
    finally:
        conn.close()

    return db_path


def count_migrations(db_path: Path) -> int:
    conn = sqlite3.connect(db_path)
    try:
        row = conn.execute("SELECT COUNT(*) FROM schema_migrations").fetchone()
        return int(row[0]) if row else 0
    finally:
        conn.close()
