from __future__ import annotations

from typing import Mapping, Sequence


class BookingError(Exception):
    """Base class for admission and catalogue errors."""


class ValidationError(BookingError):
    """Structurally invalid input; carries every violation keyed by wire field name."""

    def __init__(self, field_errors: Mapping[str, Sequence[str]]) -> None:
        super().__init__("validation failed")
        self.field_errors: dict[str, list[str]] = {k: list(v) for k, v in field_errors.items()}


class VenueNotFoundError(BookingError):
    def __init__(self, venue_id: str) -> None:
        super().__init__("venue not found")
        self.venue_id = venue_id


class CapacityExceededError(BookingError):
    def __init__(self, attendee_count: int, capacity: int) -> None:
        super().__init__(f"Maximum capacity for this venue is {capacity} attendees")
        self.attendee_count = attendee_count
        self.capacity = capacity


class AvailabilityConflictError(BookingError):
    def __init__(self, conflicting_ids: Sequence[str]) -> None:
        super().__init__("the venue is not available for the selected dates")
        self.conflicting_ids = list(conflicting_ids)


class InternalError(BookingError):
    """Storage or other unexpected failure. The message is safe to show to callers."""

    def __init__(self, message: str = "internal error") -> None:
        super().__init__(message)
