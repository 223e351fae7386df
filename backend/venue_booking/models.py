from __future__ import annotations

import json
import uuid
from datetime import datetime
from enum import StrEnum
from typing import Any, Optional

from sqlalchemy import CheckConstraint, Enum, Float, ForeignKey, Index, Text
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship
from sqlalchemy.sql.sqltypes import DateTime, Integer, String
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    pass


class InquiryStatus(StrEnum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class AmenityList(TypeDecorator[list[str]]):
    """Ordered list of amenity names stored as a JSON array in a text column."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Optional[list[str]], dialect: Dialect) -> str:
        return json.dumps(list(value or []), ensure_ascii=False)

    def process_result_value(self, value: Any, dialect: Dialect) -> list[str]:
        if not value:
            return []
        decoded = json.loads(value)
        return [str(item) for item in decoded]


def _new_id() -> str:
    return uuid.uuid4().hex


class Venue(Base):
    __tablename__ = "venues"
    __table_args__ = (
        CheckConstraint("capacity >= 1", name="chk_venues_capacity"),
        CheckConstraint("price_per_night > 0", name="chk_venues_price"),
        CheckConstraint("rating IS NULL OR (rating >= 0 AND rating <= 5)", name="chk_venues_rating"),
        Index("idx_venues_city", "city"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    city: Mapped[str] = mapped_column(String(255), nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_night: Mapped[float] = mapped_column(Float, nullable=False)
    amenities: Mapped[list[str]] = mapped_column(AmenityList, nullable=False, default=list)
    image_url: Mapped[Optional[str]] = mapped_column(String(1024), nullable=True)
    rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    inquiries: Mapped[list["BookingInquiry"]] = relationship(back_populates="venue")


class BookingInquiry(Base):
    __tablename__ = "booking_inquiries"
    __table_args__ = (
        CheckConstraint("start_date < end_date", name="chk_inquiries_span"),
        CheckConstraint("attendee_count >= 1", name="chk_inquiries_attendees"),
        Index("idx_inquiries_venue_span", "venue_id", "start_date", "end_date"),
        Index("idx_inquiries_created", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=_new_id)
    venue_id: Mapped[str] = mapped_column(ForeignKey("venues.id"), nullable=False)
    company_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    end_date: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    attendee_count: Mapped[int] = mapped_column(Integer, nullable=False)
    message: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[InquiryStatus] = mapped_column(
        Enum(
            InquiryStatus,
            values_callable=lambda enum_cls: [e.value for e in enum_cls],
            native_enum=False,
        ),
        nullable=False,
        default=InquiryStatus.PENDING,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)

    venue: Mapped["Venue"] = relationship(back_populates="inquiries")
