from datetime import datetime
from typing import Iterable, List, Optional

from ..models import BookingInquiry, InquiryStatus
from .errors import AvailabilityConflictError, CapacityExceededError


def check_capacity(attendee_count: int, venue_capacity: int) -> int:
    """
    Pure check: the requested head count must fit the venue.
    Returns the spare capacity if OK. Raises CapacityExceededError otherwise.
    """
    if attendee_count > venue_capacity:
        raise CapacityExceededError(attendee_count=attendee_count, capacity=venue_capacity)
    return venue_capacity - attendee_count


def spans_overlap(start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime) -> bool:
    """Half-open overlap: [start_a, end_a) and [start_b, end_b) share at least one instant."""
    return start_a < end_b and start_b < end_a


def blocks_booking(inquiry: BookingInquiry) -> bool:
    return inquiry.status != InquiryStatus.CANCELLED


def find_conflicts(
    venue_id: str,
    start: datetime,
    end: datetime,
    existing: Iterable[BookingInquiry],
    *,
    exclude_id: Optional[str] = None,
) -> List[BookingInquiry]:
    """Return the inquiries of `venue_id` that are still active and overlap [start, end)."""
    conflicts: List[BookingInquiry] = []
    for inquiry in existing:
        if inquiry.venue_id != venue_id:
            continue
        if exclude_id is not None and inquiry.id == exclude_id:
            continue
        if not blocks_booking(inquiry):
            continue
        if spans_overlap(start, end, inquiry.start_date, inquiry.end_date):
            conflicts.append(inquiry)
    return conflicts


def check_availability(
    venue_id: str,
    start: datetime,
    end: datetime,
    existing: Iterable[BookingInquiry],
    *,
    exclude_id: Optional[str] = None,
) -> None:
    conflicts = find_conflicts(venue_id, start, end, existing, exclude_id=exclude_id)
    if conflicts:
        raise AvailabilityConflictError([c.id for c in conflicts])
