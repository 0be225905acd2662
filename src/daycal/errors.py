from __future__ import annotations
from enum import Enum
from typing import Optional

from .models import Event


class ValidationReason(str, Enum):
    MISSING_FIELD = "missing_field"
    INVALID_RANGE = "invalid_range"


class SchedulingError(Exception):
    """Base class for recoverable outcomes of a rejected engine operation."""


class ValidationError(SchedulingError):
    def __init__(self, reason: ValidationReason, field: Optional[str] = None) -> None:
        self.reason = reason
        self.field = field
        if reason is ValidationReason.MISSING_FIELD:
            message = f"Missing required field: {field}" if field else "Please fill in all required fields"
        else:
            message = "End time must be after start time"
        super().__init__(message)


class ConflictError(SchedulingError):
    def __init__(self, conflicting_event: Event, index: int) -> None:
        self.conflicting_event = conflicting_event
        self.index = index
        super().__init__(
            f"This event overlaps with an existing event: {conflicting_event.name} "
            f"({conflicting_event.start_time}-{conflicting_event.end_time})"
        )


class NotFoundError(SchedulingError):
    def __init__(self, index: int, day: Optional[str] = None) -> None:
        self.index = index
        self.day = day
        where = f" on {day}" if day else ""
        super().__init__(f"No event at index {index}{where}")
