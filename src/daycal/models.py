from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Optional

EVENT_TYPES = ("Work", "Personal", "Holiday")
DEFAULT_EVENT_TYPE = "Work"

@dataclass(frozen=True)
class Event:
    name: str
    start_time: str             # "HH:MM", 24-hour
    end_time: str               # "HH:MM", 24-hour
    description: Optional[str] = None
    type: str = DEFAULT_EVENT_TYPE

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }
        if self.description is not None:
            data["description"] = self.description
        data["type"] = self.type
        return data

    @staticmethod
    def from_dict(data: Dict[str, Any]) -> "Event":
        if not isinstance(data, dict):
            raise ValueError(f"Stored event must be a JSON object, got {type(data).__name__}.")
        for key in ("name", "startTime", "endTime"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Stored event field {key!r} must be a string.")
        description = data.get("description")
        if description is not None and not isinstance(description, str):
            raise ValueError("Stored event field 'description' must be a string.")
        event_type = data.get("type", DEFAULT_EVENT_TYPE)
        if not isinstance(event_type, str):
            raise ValueError("Stored event field 'type' must be a string.")
        return Event(
            name=data["name"],
            start_time=data["startTime"],
            end_time=data["endTime"],
            description=description,
            type=event_type,
        )


def day_key(day: date) -> str:
    """Canonical, locale-independent key for a calendar day (YYYY-MM-DD)."""
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_day_key(key: str) -> date:
    parts = key.split("-")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        raise ValueError(f"Invalid day key: {key!r}")
    year, month, day = (int(p) for p in parts)
    return date(year, month, day)
