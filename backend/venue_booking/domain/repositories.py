from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from ..models import BookingInquiry, InquiryStatus, Venue
from ..schemas import VenueFilters


class VenueRepository(Protocol):
    async def get(self, venue_id: str) -> Venue | None: ...

    async def get_for_update(self, venue_id: str) -> Venue | None: ...

    async def count(self, filters: VenueFilters) -> int: ...

    async def list_page(self, filters: VenueFilters, *, offset: int, limit: int) -> Sequence[Venue]: ...

    async def list_cities(self) -> list[str]: ...


class BookingInquiryRepository(Protocol):
    async def list_overlapping(self, venue_id: str, start: datetime, end: datetime) -> Sequence[BookingInquiry]: ...

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
    ) -> BookingInquiry: ...

    async def list_with_venue(self) -> list[tuple[BookingInquiry, Venue]]: ...
