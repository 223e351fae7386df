from __future__ import annotations

from datetime import datetime
from typing import Any, List, Optional, Sequence, Tuple, cast

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..domain.repositories import BookingInquiryRepository, VenueRepository
from ..models import BookingInquiry, InquiryStatus, Venue
from ..schemas import VenueFilters
from ..utils.time import utc_now_naive


def _apply_filters(stmt: Select[Any], filters: VenueFilters) -> Select[Any]:
    if filters.city:
        stmt = stmt.where(func.lower(Venue.city).contains(filters.city.lower(), autoescape=True))
    if filters.min_capacity is not None:
        stmt = stmt.where(Venue.capacity >= filters.min_capacity)
    if filters.max_price is not None:
        stmt = stmt.where(Venue.price_per_night <= filters.max_price)
    return stmt


class SqlAlchemyVenueRepository(VenueRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, venue_id: str) -> Venue | None:
        return await self.session.get(Venue, venue_id)

    async def get_for_update(self, venue_id: str) -> Venue | None:
        result = await self.session.scalar(select(Venue).where(Venue.id == venue_id).with_for_update())
        return result if isinstance(result, Venue) else None

    async def count(self, filters: VenueFilters) -> int:
        stmt = _apply_filters(select(func.count(Venue.id)), filters)
        return int(await self.session.scalar(stmt) or 0)

    async def list_page(self, filters: VenueFilters, *, offset: int, limit: int) -> Sequence[Venue]:
        # Unrated venues sort last: NULL orders lowest on MySQL and SQLite.
        stmt: Select[Tuple[Venue]] = (
            _apply_filters(select(Venue), filters)
            .order_by(Venue.rating.desc(), Venue.name.asc())
            .offset(offset)
            .limit(limit)
        )
        return list((await self.session.scalars(stmt)).all())

    async def list_cities(self) -> list[str]:
        stmt = select(Venue.city).distinct().order_by(Venue.city.asc())
        return [str(city) for city in (await self.session.scalars(stmt)).all()]


class SqlAlchemyBookingInquiryRepository(BookingInquiryRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def list_overlapping(self, venue_id: str, start: datetime, end: datetime) -> Sequence[BookingInquiry]:
        stmt = select(BookingInquiry).where(
            BookingInquiry.venue_id == venue_id,
            BookingInquiry.status != InquiryStatus.CANCELLED,
            BookingInquiry.start_date < end,
            BookingInquiry.end_date > start,
        )
        return list((await self.session.scalars(stmt)).all())

    async def create(
        self,
        *,
        venue: Venue,
        company_name: str,
        email: str,
        start_date: datetime,
        end_date: datetime,
        attendee_count: int,
        message: Optional[str],
        status: InquiryStatus,
    ) -> BookingInquiry:
        now = utc_now_naive()
        inquiry = BookingInquiry(
            venue_id=venue.id,
            company_name=company_name,
            email=email,
            start_date=start_date,
            end_date=end_date,
            attendee_count=attendee_count,
            message=message,
            status=status,
            created_at=now,
            updated_at=now,
        )
        self.session.add(inquiry)
        await self.session.flush()
        return inquiry

    async def list_with_venue(self) -> List[Tuple[BookingInquiry, Venue]]:
        stmt: Select[Tuple[BookingInquiry, Venue]] = (
            select(BookingInquiry, Venue)
            .join(Venue, BookingInquiry.venue_id == Venue.id)
            .order_by(BookingInquiry.created_at.desc(), BookingInquiry.id.desc())
        )
        rows = await self.session.execute(stmt)
        return cast(List[Tuple[BookingInquiry, Venue]], list(rows.all()))
