from __future__ import annotations

import hashlib
import re

import ulid

# New persons get a ULID so creation order and id order agree.
# Imported records without an id get a content hash so re-imports are stable.
PERSON_ULID_RE = re.compile(r"^p_[0-9A-Z]{26}$")
PERSON_HASH_RE = re.compile(r"^p_[0-9a-f]{12}$")


def normalize_name(value: str) -> str:
    return " ".join(value.strip().split()).lower()


def _hex12(payload: str) -> str:
    return hashlib.sha1(payload.encode("utf-8")).hexdigest()[:12]


def person_id_ulid() -> str:
    return f"p_{ulid.new()}"


def person_id_from_record(*, first_name: str, last_name: str, role: str, organization: str | None) -> str:
    parts = [normalize_name(first_name), normalize_name(last_name), normalize_name(role), normalize_name(organization or "")]
    return f"p_{_hex12('person|' + '|'.join(parts))}"


def is_person_id(value: str) -> bool:
    return bool(PERSON_ULID_RE.fullmatch(value) or PERSON_HASH_RE.fullmatch(value))
