import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import Settings
from ..deps import get_app_settings, get_inquiry_repo, get_session, get_venue_repo
from ..domain.errors import (
    AvailabilityConflictError,
    CapacityExceededError,
    InternalError,
    ValidationError,
    VenueNotFoundError,
)
from ..domain.repositories import BookingInquiryRepository, VenueRepository
from ..schemas import BookingInquiryCreated, BookingInquiryListItem, BookingInquiryRead, DataResponse
from ..usecases import bookings as booking_usecase
from ..utils.audit_log import emit_audit_log

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["bookings"])


@router.post("/bookings", response_model=BookingInquiryCreated, status_code=status.HTTP_201_CREATED)
async def create_booking_inquiry(
    payload: Any = Body(...),
    session: AsyncSession = Depends(get_session),
    venue_repo: VenueRepository = Depends(get_venue_repo),
    inquiry_repo: BookingInquiryRepository = Depends(get_inquiry_repo),
    settings: Settings = Depends(get_app_settings),
) -> BookingInquiryCreated:
    try:
        async with session.begin():
            inquiry, venue = await booking_usecase.create_booking_inquiry(
                venue_repo,
                inquiry_repo,
                payload=payload,
                lock_venue=settings.booking_lock_venue,
            )
            emit_audit_log(
                action="inquiry.created",
                initiator="guest",
                inquiry_id=inquiry.id,
                venue_id=venue.id,
                attendee_count=inquiry.attendee_count,
                start_date=inquiry.start_date,
                end_date=inquiry.end_date,
                status=inquiry.status,
            )
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Validation failed", "details": exc.field_errors},
        )
    except VenueNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "Venue not found"})
    except CapacityExceededError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={
                "error": f"Attendee count ({exc.attendee_count}) exceeds venue capacity ({exc.capacity})",
                "details": {"attendeeCount": [str(exc)]},
            },
        )
    except AvailabilityConflictError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "error": "The venue is not available for the selected dates",
                "details": {
                    "dates": ["There is already a booking inquiry for these dates. Please choose different dates."]
                },
            },
        )
    except (InternalError, SQLAlchemyError, RuntimeError):
        logger.exception("booking inquiry admission failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Failed to create booking inquiry. Please try again later."},
        )

    return BookingInquiryCreated(data=BookingInquiryRead.from_db(inquiry=inquiry, venue=venue))


@router.get("/bookings", response_model=DataResponse[List[BookingInquiryListItem]])
async def list_booking_inquiries(
    inquiry_repo: BookingInquiryRepository = Depends(get_inquiry_repo),
) -> DataResponse[List[BookingInquiryListItem]]:
    rows = await booking_usecase.list_booking_inquiries(inquiry_repo)
    return DataResponse[List[BookingInquiryListItem]](
        data=[BookingInquiryListItem.from_db(inquiry=inquiry, venue=venue) for inquiry, venue in rows]
    )
