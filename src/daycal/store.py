from __future__ import annotations
from typing import Any, Dict, Iterable, List, Tuple

from .models import Event


class DayEventStore:
    """Day key -> ordered events. A day without events has no key at all.

    Holds no validation; SchedulingEngine owns the overlap invariant.
    """

    def __init__(self, days: Dict[str, Iterable[Event]] | None = None) -> None:
        self._days: Dict[str, List[Event]] = {}
        for key, events in (days or {}).items():
            self.set(key, events)

    def get(self, day: str) -> List[Event]:
        return list(self._days.get(day, []))

    def set(self, day: str, events: Iterable[Event]) -> None:
        events = list(events)
        if events:
            self._days[day] = events
        else:
            self._days.pop(day, None)

    def remove(self, day: str) -> None:
        self._days.pop(day, None)

    def days(self) -> List[str]:
        return list(self._days)

    def items(self) -> List[Tuple[str, List[Event]]]:
        return [(key, list(events)) for key, events in self._days.items()]

    def to_dict(self) -> Dict[str, List[Dict[str, Any]]]:
        return {key: [e.to_dict() for e in events] for key, events in self._days.items()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DayEventStore":
        if not isinstance(data, dict):
            raise ValueError("Stored events must be a JSON object.")
        store = cls()
        for key, raw_events in data.items():
            if not isinstance(raw_events, list):
                raise ValueError(f"Events for {key!r} must be a list.")
            store.set(str(key), [Event.from_dict(item) for item in raw_events])
        return store

    def __len__(self) -> int:
        return len(self._days)

    def __contains__(self, day: object) -> bool:
        return day in self._days

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DayEventStore):
            return NotImplemented
        return self._days == other._days

    def __repr__(self) -> str:
        return f"DayEventStore({self._days!r})"
