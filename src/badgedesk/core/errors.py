from __future__ import annotations

from pathlib import Path
from typing import Sequence


class BadgedeskError(Exception):
    pass


class ValidationError(BadgedeskError):
    def __init__(self, person_id: str, problems: Sequence[str]) -> None:
        super().__init__(f"Person {person_id or '<no id>'} is invalid: {'; '.join(problems)}")
        self.person_id = person_id
        self.problems = list(problems)


class PersistenceError(BadgedeskError):
    """The store rejected a commit. Nothing from that commit is visible."""


class ImportParseError(BadgedeskError):
    def __init__(self, path: str | Path, reason: str) -> None:
        super().__init__(f"Cannot import persons from {path}: {reason}")
        self.path = str(path)
        self.reason = reason
