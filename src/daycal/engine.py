from __future__ import annotations

import logging
from typing import TYPE_CHECKING, List, Optional, Sequence, Tuple

from .errors import ConflictError, NotFoundError, ValidationError, ValidationReason
from .models import Event
from .store import DayEventStore

if TYPE_CHECKING:
    from .state import PersistenceAdapter

log = logging.getLogger(__name__)

_REQUIRED_FIELDS = (("name", "name"), ("startTime", "start_time"), ("endTime", "end_time"))


def overlaps(a: Event, b: Event) -> bool:
    # Half-open intervals: an event ending at 10:00 does not touch one starting at 10:00.
    return a.start_time < b.end_time and b.start_time < a.end_time


def find_conflict(
    events: Sequence[Event],
    candidate: Event,
    exclude_index: Optional[int] = None,
) -> Optional[Tuple[int, Event]]:
    """Return the first event (in sequence order) overlapping ``candidate``."""
    for idx, existing in enumerate(events):
        if idx == exclude_index:
            continue
        if overlaps(candidate, existing):
            return idx, existing
    return None


def validate_event(event: Event) -> None:
    for label, attr in _REQUIRED_FIELDS:
        value = getattr(event, attr)
        if not value or not str(value).strip():
            raise ValidationError(ValidationReason.MISSING_FIELD, field=label)
    if event.start_time >= event.end_time:
        raise ValidationError(ValidationReason.INVALID_RANGE)


class SchedulingEngine:
    """Add/edit/delete over a DayEventStore, enforcing the no-overlap invariant.

    Every successful mutation is written through ``persistence`` before the
    call returns. Indices refer to a day's current order and are only valid
    until the next mutation of that day.
    """

    def __init__(self, store: DayEventStore | None = None, persistence: PersistenceAdapter | None = None) -> None:
        self.store = store if store is not None else DayEventStore()
        self.persistence = persistence

    @classmethod
    def from_persistence(cls, persistence: PersistenceAdapter) -> "SchedulingEngine":
        return cls(persistence.load(), persistence)

    def get(self, day: str) -> List[Event]:
        return self.store.get(day)

    def days(self) -> List[str]:
        return self.store.days()

    def search(self, day: str, keyword: str = "") -> List[Tuple[int, Event]]:
        needle = keyword.lower()
        return [(idx, e) for idx, e in enumerate(self.store.get(day)) if needle in e.name.lower()]

    def add_event(self, day: str, candidate: Event) -> Event:
        validate_event(candidate)
        events = self.store.get(day)
        conflict = find_conflict(events, candidate)
        if conflict is not None:
            raise ConflictError(conflict[1], conflict[0])

        events.append(candidate)
        self.store.set(day, events)
        log.info("Added %r on %s at index %d", candidate.name, day, len(events) - 1)
        self._persist()
        return candidate

    def edit_event(self, day: str, index: int, updated: Event) -> Event:
        events = self.store.get(day)
        self._check_index(day, index, events)
        validate_event(updated)
        conflict = find_conflict(events, updated, exclude_index=index)
        if conflict is not None:
            raise ConflictError(conflict[1], conflict[0])

        events[index] = updated
        self.store.set(day, events)
        log.info("Edited index %d on %s", index, day)
        self._persist()
        return updated

    def delete_event(self, day: str, index: int) -> Event:
        events = self.store.get(day)
        self._check_index(day, index, events)

        removed = events.pop(index)
        # An emptied day drops out of the store.
        self.store.set(day, events)
        log.info("Deleted %r from %s", removed.name, day)
        self._persist()
        return removed

    @staticmethod
    def _check_index(day: str, index: int, events: Sequence[Event]) -> None:
        if not 0 <= index < len(events):
            raise NotFoundError(index, day)

    def _persist(self) -> None:
        if self.persistence is not None:
            self.persistence.save(self.store)
