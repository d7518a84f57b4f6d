#!/usr/bin/env python3
"""Seed the person store from a JSON or CSV file.

This is an explicit bulk write for setting up a workspace. The `person import`
command only previews a file and never writes.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from badgedesk.core import importer, paths  # noqa: E402
from badgedesk.core.data_service import SqliteDataService  # noqa: E402
from badgedesk.core.errors import ImportParseError, PersistenceError  # noqa: E402


def main() -> int:
    parser = argparse.ArgumentParser(description="Persist every person in a file to the badgedesk store.")
    parser.add_argument("--source", required=True, help="Path to a .json or .csv person file")
    parser.add_argument("--dry-run", action="store_true", help="Parse and report; do not write")
    args = parser.parse_args()

    try:
        persons = importer.read_persons(Path(args.source))
    except ImportParseError as exc:
        print(str(exc), file=sys.stderr)
        return 2

    print(f"read persons={len(persons)} from {args.source}")
    if args.dry_run:
        print("skip write: --dry-run")
        return 0

    service = SqliteDataService()
    try:
        service.add_persons(persons)
    except PersistenceError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    print(f"persisted persons={len(persons)} -> {paths.db_path()} (total={service.count_persons()})")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
