from typing import Any, List, Mapping

from ..domain.errors import VenueNotFoundError
from ..domain.repositories import VenueRepository
from ..domain.validation import validate_venue_filters
from ..models import Venue
from ..schemas import Pagination


async def list_venues(
    venue_repo: VenueRepository,
    *,
    params: Mapping[str, Any],
) -> tuple[List[Venue], Pagination]:
    filters = validate_venue_filters(params)
    # One session cannot run both queries at once, so count then page.
    total = await venue_repo.count(filters)
    venues = await venue_repo.list_page(filters, offset=filters.offset, limit=filters.limit)
    pagination = Pagination.build(page=filters.page, limit=filters.limit, total=total)
    return list(venues), pagination


async def get_venue(venue_repo: VenueRepository, *, venue_id: str) -> Venue:
    venue = await venue_repo.get(venue_id)
    if venue is None:
        raise VenueNotFoundError(venue_id)
    return venue


async def list_cities(venue_repo: VenueRepository) -> List[str]:
    return await venue_repo.list_cities()
