"""Mediates between in-memory edits and the person store.

New persons stay pending until `save()` commits them through the `DataService`.
Imports are read-only previews and never reach the store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from badgedesk.core import config, ids, importer
from badgedesk.core.data_service import DataService
from badgedesk.core.models import Person, validate_person

log = logging.getLogger(__name__)

PersonReader = Callable[[str | Path], list[Person]]


class PersonManager:
    def __init__(self, data_service: DataService, reader: PersonReader = importer.read_persons) -> None:
        self._data_service = data_service
        self._reader = reader
        self._pending: list[Person] = []

    @property
    def pending_persons(self) -> tuple[Person, ...]:
        return tuple(self._pending)

    def add_new_person(self) -> Person:
        # The returned instance is the pending one; edits made before save() are committed.
        person = Person(
            id=ids.person_id_ulid(),
            first_name="New",
            last_name="Person",
            role=config.default_role(),
        )
        self._pending.append(person)
        log.debug("queued new person %s (%d pending)", person.id, len(self._pending))
        return person

    def discard_pending(self) -> None:
        self._pending.clear()

    def save(self) -> list[Person]:
        """Commit every pending person in one store call.

        Raises ValidationError or PersistenceError; pending persons are kept on either.
        """
        if not self._pending:
            return []
        for person in self._pending:
            validate_person(person)

        batch = [person.copy() for person in self._pending]
        self._data_service.add_persons(batch)
        self._pending.clear()
        log.info("saved %d person(s)", len(batch))
        return batch

    def import_persons(self, path: str | Path) -> list[Person]:
        persons = self._reader(path)
        log.info("imported %d person(s) from %s without persisting", len(persons), path)
        return persons

    def get_accessible_persons(self) -> list[Person]:
        # Every persisted person is accessible; there is no permission filter.
        return sorted(self._data_service.get_all_persons(), key=lambda p: p.id)
