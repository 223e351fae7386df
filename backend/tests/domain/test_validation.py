from datetime import datetime, timezone
from typing import Any

import pytest
from venue_booking.domain.errors import ValidationError
from venue_booking.domain.validation import validate_booking_inquiry, validate_venue_filters

TODAY = datetime(2024, 3, 10)


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "venueId": "venue-1",
        "companyName": "Acme Corp",
        "email": "team@acme.com",
        "startDate": "2024-03-15",
        "endDate": "2024-03-18",
        "attendeeCount": 25,
        "message": "Annual retreat",
    }
    payload.update(overrides)
    return payload


def _errors(payload: Any) -> dict[str, list[str]]:
    with pytest.raises(ValidationError) as excinfo:
        validate_booking_inquiry(payload, today=TODAY)
    return excinfo.value.field_errors


def test_valid_payload_is_typed() -> None:
    request = validate_booking_inquiry(_payload(), today=TODAY)
    assert request.venue_id == "venue-1"
    assert request.start_date == datetime(2024, 3, 15)
    assert request.end_date == datetime(2024, 3, 18)
    assert request.attendee_count == 25


def test_aware_datetimes_are_normalised_to_utc() -> None:
    request = validate_booking_inquiry(
        _payload(startDate="2024-03-15T09:00:00+09:00", endDate="2024-03-16T00:00:00Z"),
        today=TODAY,
    )
    assert request.start_date == datetime(2024, 3, 15, 0, 0)
    assert request.start_date.tzinfo is None
    assert request.end_date == datetime(2024, 3, 16, 0, 0)


def test_message_is_optional() -> None:
    payload = _payload()
    del payload["message"]
    assert validate_booking_inquiry(payload, today=TODAY).message is None


def test_start_date_today_is_allowed() -> None:
    request = validate_booking_inquiry(_payload(startDate="2024-03-10", endDate="2024-03-11"), today=TODAY)
    assert request.start_date == TODAY


def test_injected_today_is_truncated_to_midnight() -> None:
    afternoon = datetime(2024, 3, 10, 15, 30)
    request = validate_booking_inquiry(_payload(startDate="2024-03-10", endDate="2024-03-11"), today=afternoon)
    assert request.start_date == TODAY


def test_start_date_yesterday_is_rejected() -> None:
    errors = _errors(_payload(startDate="2024-03-09", endDate="2024-03-11"))
    assert errors == {"startDate": ["Start date must be a valid date in the future"]}


def test_default_today_is_current_utc_day() -> None:
    today = datetime.now(timezone.utc).date().isoformat()
    request = validate_booking_inquiry(_payload(startDate=today, endDate="2999-01-01"))
    assert request.start_date.date().isoformat() == today


@pytest.mark.parametrize("end", ["2024-03-15", "2024-03-14"])
def test_end_not_after_start_is_reported_on_end_date(end: str) -> None:
    errors = _errors(_payload(endDate=end))
    assert errors == {"endDate": ["End date must be after start date"]}


def test_end_before_past_start_still_reports_both_fields() -> None:
    errors = _errors(_payload(startDate="2024-03-05", endDate="2024-03-01"))
    assert errors["startDate"] == ["Start date must be a valid date in the future"]
    assert errors["endDate"] == ["End date must be after start date"]


def test_unparseable_dates() -> None:
    errors = _errors(_payload(startDate="not a date", endDate="soon"))
    assert errors["startDate"] == ["Start date must be a valid date in the future"]
    assert errors["endDate"] == ["End date must be a valid date"]


def test_out_of_range_start_date_is_a_field_error() -> None:
    errors = _errors(_payload(startDate="9999-12-31T23:30:00-05:00"))
    assert errors == {"startDate": ["Start date must be a valid date in the future"]}


def test_out_of_range_end_date_is_a_field_error() -> None:
    errors = _errors(_payload(endDate="9999-12-31T23:30:00-05:00"))
    assert errors == {"endDate": ["End date must be a valid date"]}


@pytest.mark.parametrize("field", ["startDate", "endDate"])
def test_numeric_dates_are_rejected(field: str) -> None:
    assert field in _errors(_payload(**{field: 1710460800}))


def test_all_violations_are_accumulated() -> None:
    errors = _errors(
        {
            "venueId": "",
            "companyName": "A",
            "email": "not-an-email",
            "startDate": "2024-03-15",
            "endDate": "2024-03-12",
            "attendeeCount": 0,
            "message": "x" * 1001,
        }
    )
    assert set(errors) == {"venueId", "companyName", "email", "endDate", "attendeeCount", "message"}
    assert errors["venueId"] == ["Venue ID is required"]
    assert errors["companyName"] == ["Company name must be at least 2 characters"]
    assert errors["email"] == ["Please provide a valid email address"]
    assert errors["attendeeCount"] == ["Attendee count must be at least 1"]
    assert errors["message"] == ["Message must be less than 1000 characters"]


def test_missing_venue_id() -> None:
    payload = _payload()
    del payload["venueId"]
    assert _errors(payload) == {"venueId": ["Venue ID is required"]}


@pytest.mark.parametrize("name", ["AB", "x" * 100])
def test_company_name_length_bounds_are_inclusive(name: str) -> None:
    assert validate_booking_inquiry(_payload(companyName=name), today=TODAY).company_name == name


def test_company_name_too_long() -> None:
    assert _errors(_payload(companyName="x" * 101)) == {
        "companyName": ["Company name must be less than 100 characters"]
    }


@pytest.mark.parametrize("count", [2.5, "many", -3, "25", True])
def test_attendee_count_must_be_positive_integer(count: Any) -> None:
    assert "attendeeCount" in _errors(_payload(attendeeCount=count))


@pytest.mark.parametrize("count", ["25", True, False])
def test_attendee_count_rejects_strings_and_booleans(count: Any) -> None:
    assert _errors(_payload(attendeeCount=count)) == {"attendeeCount": ["Attendee count must be a whole number"]}


def test_whole_float_attendee_count_is_accepted() -> None:
    assert validate_booking_inquiry(_payload(attendeeCount=25.0), today=TODAY).attendee_count == 25


def test_message_at_limit_is_accepted() -> None:
    assert validate_booking_inquiry(_payload(message="x" * 1000), today=TODAY).message == "x" * 1000


def test_non_object_body() -> None:
    assert _errors(["not", "an", "object"]) == {"body": ["Request body must be a JSON object"]}


def test_filter_defaults() -> None:
    filters = validate_venue_filters({})
    assert filters.city is None
    assert filters.min_capacity is None
    assert filters.max_price is None
    assert filters.page == 1
    assert filters.limit == 10
    assert filters.offset == 0


def test_filters_coerce_query_strings() -> None:
    filters = validate_venue_filters({"city": " austin ", "minCapacity": "40", "maxPrice": "900.5", "page": "3", "limit": "5"})
    assert filters.city == "austin"
    assert filters.min_capacity == 40
    assert filters.max_price == 900.5
    assert filters.page == 3
    assert filters.offset == 10


@pytest.mark.parametrize(("raw", "expected"), [("0", 1), ("-4", 1), ("51", 50), ("500", 50), ("50", 50), ("1", 1)])
def test_limit_is_clamped(raw: str, expected: int) -> None:
    assert validate_venue_filters({"limit": raw}).limit == expected


def test_blank_optional_filters_are_ignored() -> None:
    filters = validate_venue_filters({"city": "  ", "minCapacity": "", "maxPrice": ""})
    assert filters.city is None
    assert filters.min_capacity is None
    assert filters.max_price is None


def test_invalid_filters_are_reported_per_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_venue_filters({"minCapacity": "lots", "maxPrice": "-1", "page": "0", "limit": "ten"})
    assert set(excinfo.value.field_errors) == {"minCapacity", "maxPrice", "page", "limit"}
