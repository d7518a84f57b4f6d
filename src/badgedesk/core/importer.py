from __future__ import annotations

import csv
import json
import logging
from pathlib import Path

import jsonschema

from badgedesk.core import ids
from badgedesk.core.errors import ImportParseError
from badgedesk.core.models import REQUIRED_FIELDS, Person

log = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".csv")

_OPTIONAL_STRING = {"type": ["string", "null"]}
_NON_BLANK = {"type": "string", "pattern": r"\S"}

PERSON_RECORD_SCHEMA: dict = {
    "type": "object",
    "required": list(REQUIRED_FIELDS),
    "additionalProperties": False,
    "properties": {
        "id": {"type": "string", "pattern": f"{ids.PERSON_ULID_RE.pattern}|{ids.PERSON_HASH_RE.pattern}"},
        "first_name": _NON_BLANK,
        "last_name": _NON_BLANK,
        "role": _NON_BLANK,
        "organization": _OPTIONAL_STRING,
        "badge_number": _OPTIONAL_STRING,
    },
}

PERSON_FILE_SCHEMA: dict = {
    "oneOf": [
        {"type": "array", "items": PERSON_RECORD_SCHEMA},
        {
            "type": "object",
            "required": ["persons"],
            "properties": {"persons": {"type": "array", "items": PERSON_RECORD_SCHEMA}},
        },
    ]
}


def _blank_to_none(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _record_to_person(record: dict) -> Person:
    first_name = record["first_name"].strip()
    last_name = record["last_name"].strip()
    role = record["role"].strip()
    organization = _blank_to_none(record.get("organization"))
    person_id = _blank_to_none(record.get("id")) or ids.person_id_from_record(
        first_name=first_name,
        last_name=last_name,
        role=role,
        organization=organization,
    )
    return Person(
        id=person_id,
        first_name=first_name,
        last_name=last_name,
        role=role,
        organization=organization,
        badge_number=_blank_to_none(record.get("badge_number")),
    )


def _read_json_records(path: Path) -> list[dict]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ImportParseError(path, f"invalid JSON ({exc})") from exc
    try:
        jsonschema.validate(data, PERSON_FILE_SCHEMA)
    except jsonschema.ValidationError as exc:
        raise ImportParseError(path, f"schema violation: {exc.message}") from exc
    return data["persons"] if isinstance(data, dict) else data


def _read_csv_records(path: Path) -> list[dict]:
    try:
        # utf-8-sig drops the BOM spreadsheet exports put in front of the header.
        with path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            missing = [name for name in REQUIRED_FIELDS if name not in (reader.fieldnames or [])]
            if missing:
                raise ImportParseError(path, f"missing columns: {', '.join(missing)}")
            rows: list[tuple[int, dict]] = []
            for row in reader:
                if any((v or "").strip() for v in row.values() if isinstance(v, str)):
                    rows.append((reader.line_num, row))
    except (UnicodeDecodeError, csv.Error) as exc:
        raise ImportParseError(path, f"invalid CSV ({exc})") from exc

    records: list[dict] = []
    for line_no, row in rows:
        if None in row:
            raise ImportParseError(path, f"row {line_no}: more values than columns")
        for name in REQUIRED_FIELDS:
            if not (row.get(name) or "").strip():
                raise ImportParseError(path, f"row {line_no}: {name} is required")
        person_id = _blank_to_none(row.get("id"))
        if person_id is not None and not ids.is_person_id(person_id):
            raise ImportParseError(path, f"row {line_no}: malformed id {person_id!r}")
        records.append(row)
    return records


def read_persons(path: str | Path) -> list[Person]:
    """Parse a person file (`.json` or `.csv`) into `Person` records.

    Reading never touches the database. Records without an `id` get a
    deterministic one derived from their fields.
    """
    file_path = Path(path).expanduser()
    if not file_path.is_file():
        raise ImportParseError(file_path, "file not found")
    suffix = file_path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise ImportParseError(file_path, f"unsupported file type {suffix or '<none>'!r}")

    records = _read_json_records(file_path) if suffix == ".json" else _read_csv_records(file_path)
    persons = [_record_to_person(record) for record in records]

    seen: set[str] = set()
    for person in persons:
        if person.id in seen:
            raise ImportParseError(file_path, f"duplicate person id {person.id}")
        seen.add(person.id)

    log.info("read %d person(s) from %s", len(persons), file_path)
    return persons
