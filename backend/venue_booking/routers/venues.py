from typing import Any, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from ..deps import get_venue_repo
from ..domain.errors import ValidationError, VenueNotFoundError
from ..domain.repositories import VenueRepository
from ..schemas import DataResponse, VenuePage, VenueRead
from ..usecases import venues as venue_usecase

router = APIRouter(prefix="/api", tags=["venues"])


@router.get("/venues", response_model=VenuePage)
async def list_venues(
    city: Optional[str] = Query(default=None, description="Case-insensitive substring of the city"),
    min_capacity: Optional[str] = Query(default=None, alias="minCapacity"),
    max_price: Optional[str] = Query(default=None, alias="maxPrice"),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None, description="1-50, default 10"),
    venue_repo: VenueRepository = Depends(get_venue_repo),
) -> VenuePage:
    raw = {"city": city, "minCapacity": min_capacity, "maxPrice": max_price, "page": page, "limit": limit}
    params: dict[str, Any] = {k: v for k, v in raw.items() if v is not None}
    try:
        venues, pagination = await venue_usecase.list_venues(venue_repo, params=params)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "Invalid query parameters", "details": exc.field_errors},
        )
    return VenuePage(data=[VenueRead.from_db(venue=v) for v in venues], pagination=pagination)


@router.get("/venues/{venue_id}", response_model=DataResponse[VenueRead])
async def get_venue(
    venue_id: str = Path(..., min_length=1),
    venue_repo: VenueRepository = Depends(get_venue_repo),
) -> DataResponse[VenueRead]:
    try:
        venue = await venue_usecase.get_venue(venue_repo, venue_id=venue_id)
    except VenueNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail={"error": "Venue not found"})
    return DataResponse[VenueRead](data=VenueRead.from_db(venue=venue))


@router.get("/cities", response_model=DataResponse[List[str]])
async def list_cities(venue_repo: VenueRepository = Depends(get_venue_repo)) -> DataResponse[List[str]]:
    cities = await venue_usecase.list_cities(venue_repo)
    return DataResponse[List[str]](data=cities)
