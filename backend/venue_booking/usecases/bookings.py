import logging
from datetime import datetime
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from ..domain.errors import InternalError, VenueNotFoundError
from ..domain.repositories import BookingInquiryRepository, VenueRepository
from ..domain.services import check_availability, check_capacity
from ..domain.validation import validate_booking_inquiry
from ..models import BookingInquiry, InquiryStatus, Venue

logger = logging.getLogger(__name__)


async def create_booking_inquiry(
    venue_repo: VenueRepository,
    inquiry_repo: BookingInquiryRepository,
    *,
    payload: Any,
    today: datetime | None = None,
    lock_venue: bool = False,
) -> tuple[BookingInquiry, Venue]:
    """
    Admit a booking inquiry: validate, load venue, check capacity, check the
    requested span against active inquiries, then persist as pending.

    Stops at the first failing step by raising its domain error; nothing is
    written unless every check passes. The check and the insert are not atomic
    unless `lock_venue` holds the venue row for the surrounding transaction.
    """
    request = validate_booking_inquiry(payload, today=today)

    if lock_venue:
        venue = await venue_repo.get_for_update(request.venue_id)
    else:
        venue = await venue_repo.get(request.venue_id)
    if venue is None:
        raise VenueNotFoundError(request.venue_id)

    check_capacity(request.attendee_count, venue.capacity)

    existing = await inquiry_repo.list_overlapping(venue.id, request.start_date, request.end_date)
    check_availability(venue.id, request.start_date, request.end_date, existing)

    try:
        inquiry = await inquiry_repo.create(
            venue=venue,
            company_name=request.company_name,
            email=str(request.email),
            start_date=request.start_date,
            end_date=request.end_date,
            attendee_count=request.attendee_count,
            message=request.message or None,
            status=InquiryStatus.PENDING,
        )
    except SQLAlchemyError as exc:
        logger.exception("failed to persist booking inquiry for venue %s", venue.id)
        raise InternalError("failed to create booking inquiry") from exc

    logger.info("booking inquiry %s admitted for venue %s", inquiry.id, venue.id)
    return inquiry, venue


async def list_booking_inquiries(
    inquiry_repo: BookingInquiryRepository,
) -> list[tuple[BookingInquiry, Venue]]:
    return await inquiry_repo.list_with_venue()
