"""Structural validation of raw request input.

Each entry point either returns a typed request model or raises
`ValidationError` with every violation, keyed by the camelCase field name the
client sent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..schemas import BookingInquiryCreate, VenueFilters
from ..utils.time import to_utc_naive
from .errors import ValidationError

BODY_FIELD = "body"
END_NOT_AFTER_START = "End date must be after start date"

_RULE_ERROR_TYPES = frozenset({"start_date_in_past", "end_not_after_start"})

_FIELD_MESSAGES: dict[str, str] = {
    "venueId": "Venue ID is required",
    "email": "Please provide a valid email address",
    "startDate": "Start date must be a valid date in the future",
    "endDate": "End date must be a valid date",
}

_TYPE_MESSAGES: dict[tuple[str, str], str] = {
    ("companyName", "missing"): "Company name is required",
    ("companyName", "string_too_short"): "Company name must be at least 2 characters",
    ("companyName", "string_too_long"): "Company name must be less than 100 characters",
    ("attendeeCount", "missing"): "Attendee count is required",
    ("attendeeCount", "int_from_float"): "Attendee count must be a whole number",
    ("attendeeCount", "int_parsing"): "Attendee count must be a whole number",
    ("attendeeCount", "int_type"): "Attendee count must be a whole number",
    ("attendeeCount", "count_not_number"): "Attendee count must be a whole number",
    ("attendeeCount", "greater_than"): "Attendee count must be at least 1",
    ("message", "string_too_long"): "Message must be less than 1000 characters",
    (BODY_FIELD, "model_type"): "Request body must be a JSON object",
    (BODY_FIELD, "model_attributes_type"): "Request body must be a JSON object",
}

_datetime_adapter: TypeAdapter[datetime] = TypeAdapter(datetime)


def _message_for(field: str, error: Mapping[str, Any]) -> str:
    error_type = str(error.get("type", ""))
    if error_type in _RULE_ERROR_TYPES:
        return str(error["msg"])
    return _TYPE_MESSAGES.get((field, error_type)) or _FIELD_MESSAGES.get(field) or str(error["msg"])


def flatten_errors(exc: PydanticValidationError) -> dict[str, list[str]]:
    """Group pydantic errors by their top-level field, dropping duplicate messages."""
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = error.get("loc") or ()
        field = str(loc[0]) if loc else BODY_FIELD
        message = _message_for(field, error)
        messages = field_errors.setdefault(field, [])
        if message not in messages:
            messages.append(message)
    return field_errors


def _parse_datetime(value: Any) -> Optional[datetime]:
    if not isinstance(value, (str, datetime)):
        return None
    try:
        return to_utc_naive(_datetime_adapter.validate_python(value))
    except (PydanticValidationError, OverflowError):
        return None


def validate_booking_inquiry(raw: Any, *, today: Optional[datetime] = None) -> BookingInquiryCreate:
    try:
        return BookingInquiryCreate.model_validate(raw, context={"today": today})
    except PydanticValidationError as exc:
        field_errors = flatten_errors(exc)

    # A past start date drops out of the model before endDate is checked, so
    # the ordering rule is re-applied here to keep every violation reported.
    if isinstance(raw, Mapping) and "endDate" not in field_errors:
        start = _parse_datetime(raw.get("startDate"))
        end = _parse_datetime(raw.get("endDate"))
        if start is not None and end is not None and end <= start:
            field_errors["endDate"] = [END_NOT_AFTER_START]
    raise ValidationError(field_errors)


def validate_venue_filters(raw: Mapping[str, Any]) -> VenueFilters:
    try:
        return VenueFilters.model_validate(dict(raw))
    except PydanticValidationError as exc:
        raise ValidationError(flatten_errors(exc)) from exc
