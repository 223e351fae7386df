from datetime import datetime
from typing import Any, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, EmailStr, Field, ValidationInfo, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from .models import BookingInquiry, InquiryStatus, Venue
from .utils.time import start_of_today, to_utc_naive, utc_naive_to_aware

MAX_PAGE_LIMIT = 50
DEFAULT_PAGE_LIMIT = 10


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class VenueFilters(CamelModel):
    city: Optional[str] = None
    min_capacity: Optional[int] = Field(default=None, gt=0)
    max_price: Optional[float] = Field(default=None, gt=0)
    page: int = Field(default=1, gt=0)
    limit: int = DEFAULT_PAGE_LIMIT

    @field_validator("city", "min_capacity", "max_price", mode="before")
    @classmethod
    def _optional_blank(cls, value: Any) -> Any:
        return _blank_to_none(value)

    @field_validator("city")
    @classmethod
    def _strip_city(cls, value: Optional[str]) -> Optional[str]:
        return value.strip() if value is not None else None

    @field_validator("limit")
    @classmethod
    def _clamp_limit(cls, value: int) -> int:
        return min(max(value, 1), MAX_PAGE_LIMIT)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def _normalise_date(value: datetime) -> datetime:
    try:
        return to_utc_naive(value)
    except OverflowError:
        raise PydanticCustomError("date_out_of_range", "Date is out of range") from None


class BookingInquiryCreate(CamelModel):
    venue_id: str = Field(min_length=1)
    company_name: str = Field(min_length=2, max_length=100)
    email: EmailStr
    start_date: datetime
    end_date: datetime
    attendee_count: int = Field(gt=0)
    message: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _date_must_be_string(cls, value: Any) -> Any:
        # numbers would otherwise be read as unix timestamps
        if not isinstance(value, (str, datetime)):
            raise PydanticCustomError("date_not_string", "Date must be an ISO 8601 string")
        return value

    @field_validator("attendee_count", mode="before")
    @classmethod
    def _count_must_be_number(cls, value: Any) -> Any:
        if isinstance(value, (str, bool)):
            raise PydanticCustomError("count_not_number", "Attendee count must be a number")
        return value

    @field_validator("start_date")
    @classmethod
    def _start_not_in_past(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = _normalise_date(value)
        context_today = (info.context or {}).get("today")
        today = start_of_today(context_today) if context_today is not None else start_of_today()
        if value < today:
            raise PydanticCustomError("start_date_in_past", "Start date must be a valid date in the future")
        return value

    @field_validator("end_date")
    @classmethod
    def _end_after_start(cls, value: datetime, info: ValidationInfo) -> datetime:
        value = _normalise_date(value)
        start = info.data.get("start_date")
        if start is not None and value <= start:
            raise PydanticCustomError("end_not_after_start", "End date must be after start date")
        return value


class Pagination(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_more: bool

    @classmethod
    def build(cls, *, page: int, limit: int, total: int) -> "Pagination":
        total_pages = (total + limit - 1) // limit
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=total_pages,
            has_more=page * limit < total,
        )


class VenueRead(CamelModel):
    id: str
    name: str
    description: str
    city: str
    address: str
    capacity: int
    price_per_night: float
    amenities: List[str]
    image_url: Optional[str]
    rating: Optional[float]
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def _ser_datetime(self, dt: datetime) -> str:
        return utc_naive_to_aware(dt).isoformat()

    @classmethod
    def from_db(cls, *, venue: Venue) -> "VenueRead":
        return cls(
            id=venue.id,
            name=venue.name,
            description=venue.description,
            city=venue.city,
            address=venue.address,
            capacity=venue.capacity,
            price_per_night=venue.price_per_night,
            amenities=list(venue.amenities or []),
            image_url=venue.image_url,
            rating=venue.rating,
            created_at=venue.created_at,
            updated_at=venue.updated_at,
        )


class VenueSummary(CamelModel):
    id: str
    name: str
    city: str


class BookingInquiryRead(CamelModel):
    id: str
    venue_id: str
    company_name: str
    email: str
    start_date: datetime
    end_date: datetime
    attendee_count: int
    message: Optional[str]
    status: InquiryStatus
    created_at: datetime
    updated_at: datetime
    venue: Optional[VenueRead] = None

    @field_serializer("start_date", "end_date", "created_at", "updated_at")
    def _ser_datetime(self, dt: datetime) -> str:
        return utc_naive_to_aware(dt).isoformat()

    @classmethod
    def from_db(cls, *, inquiry: BookingInquiry, venue: Optional[Venue] = None) -> "BookingInquiryRead":
        return cls(
            id=inquiry.id,
            venue_id=inquiry.venue_id,
            company_name=inquiry.company_name,
            email=inquiry.email,
            start_date=inquiry.start_date,
            end_date=inquiry.end_date,
            attendee_count=inquiry.attendee_count,
            message=inquiry.message,
            status=inquiry.status,
            created_at=inquiry.created_at,
            updated_at=inquiry.updated_at,
            venue=VenueRead.from_db(venue=venue) if venue is not None else None,
        )


class BookingInquiryListItem(CamelModel):
    id: str
    venue_id: str
    company_name: str
    email: str
    start_date: datetime
    end_date: datetime
    attendee_count: int
    message: Optional[str]
    status: InquiryStatus
    created_at: datetime
    updated_at: datetime
    venue: VenueSummary

    @field_serializer("start_date", "end_date", "created_at", "updated_at")
    def _ser_datetime(self, dt: datetime) -> str:
        return utc_naive_to_aware(dt).isoformat()

    @classmethod
    def from_db(cls, *, inquiry: BookingInquiry, venue: Venue) -> "BookingInquiryListItem":
        return cls(
            id=inquiry.id,
            venue_id=inquiry.venue_id,
            company_name=inquiry.company_name,
            email=inquiry.email,
            start_date=inquiry.start_date,
            end_date=inquiry.end_date,
            attendee_count=inquiry.attendee_count,
            message=inquiry.message,
            status=inquiry.status,
            created_at=inquiry.created_at,
            updated_at=inquiry.updated_at,
            venue=VenueSummary(id=venue.id, name=venue.name, city=venue.city),
        )


DataT = TypeVar("DataT")


class DataResponse(BaseModel, Generic[DataT]):
    data: DataT


class VenuePage(BaseModel):
    data: List[VenueRead]
    pagination: Pagination


class BookingInquiryCreated(BaseModel):
    data: BookingInquiryRead
    message: str = "Booking inquiry submitted successfully"
