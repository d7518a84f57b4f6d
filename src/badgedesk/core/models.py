from __future__ import annotations

from dataclasses import asdict, dataclass, replace

from badgedesk.core import ids
from badgedesk.core.errors import ValidationError

REQUIRED_FIELDS = ("first_name", "last_name", "role")


@dataclass
class Person:
    id: str
    first_name: str
    last_name: str
    role: str
    organization: str | None = None
    badge_number: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def copy(self) -> Person:
        return replace(self)

    def to_dict(self) -> dict:
        return asdict(self)


def validate_person(person: Person) -> None:
    problems: list[str] = []
    if not ids.is_person_id(person.id or ""):
        problems.append(f"id: malformed person id {person.id!r}")
    for name in REQUIRED_FIELDS:
        value = getattr(person, name)
        if not isinstance(value, str) or not value.strip():
            problems.append(f"{name}: required")
    if person.badge_number is not None and not person.badge_number.strip():
        problems.append("badge_number: must be omitted or non-blank")
    if problems:
        raise ValidationError(person.id, problems)
