from __future__ import annotations

import os
from pathlib import Path

DEFAULT_WORKSPACE_DIR = Path("~/.local/share/badgedesk/").expanduser()
WORKSPACE_SUBDIRS = ("imports", "exports")


def workspace_dir() -> Path:
    override = os.environ.get("BADGEDESK_WORKSPACE_DIR")
    return Path(override).expanduser() if override else DEFAULT_WORKSPACE_DIR


def db_path() -> Path:
    override = os.environ.get("BADGEDESK_DB_PATH")
    if override:
        return Path(override).expanduser()
    return workspace_dir() / "db.sqlite3"


def ensure_workspace() -> Path:
    root = workspace_dir()
    root.mkdir(parents=True, exist_ok=True)
    for subdir in WORKSPACE_SUBDIRS:
        (root / subdir).mkdir(parents=True, exist_ok=True)
    return root


def resolve_db_path() -> Path:
    """Return the database path, creating its parent directory if needed.

    Without a `BADGEDESK_DB_PATH` override the whole workspace layout is created.
    """
    path = db_path()
    if "BADGEDESK_DB_PATH" not in os.environ:
        ensure_workspace()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path
