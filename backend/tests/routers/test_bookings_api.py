from datetime import datetime, timedelta, timezone
from typing import Any, AsyncIterator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from venue_booking.config import Settings
from venue_booking.database import Database
from venue_booking.main import create_app
from venue_booking.models import BookingInquiry, InquiryStatus, Venue
from venue_booking.routers import bookings as router

NOW = datetime(2024, 1, 1)
# Booking dates must not be in the past, so spans are anchored a month out.
BASE = datetime.now(timezone.utc).date() + timedelta(days=30)


def _day(offset: int) -> str:
    return (BASE + timedelta(days=offset)).isoformat()


def _payload(**overrides: Any) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "venueId": "lodge",
        "companyName": "Acme Corp",
        "email": "team@acme.com",
        "startDate": _day(1),
        "endDate": _day(5),
        "attendeeCount": 25,
    }
    payload.update(overrides)
    return payload


@pytest_asyncio.fixture
async def app(database: Database) -> FastAPI:
    async with database.session() as session:
        async with session.begin():
            session.add(
                Venue(
                    id="lodge",
                    name="Mountain Vista Lodge",
                    description="Lodge",
                    city="Aspen",
                    address="1250 Mountain View Road",
                    capacity=50,
                    price_per_night=850.0,
                    amenities=["WiFi", "Spa"],
                    image_url=None,
                    rating=4.8,
                    created_at=NOW,
                    updated_at=NOW,
                )
            )
            session.add(
                BookingInquiry(
                    id="existing",
                    venue_id="lodge",
                    company_name="Demo Company Inc.",
                    email="team@democompany.com",
                    start_date=datetime.combine(BASE, datetime.min.time()),
                    end_date=datetime.combine(BASE + timedelta(days=3), datetime.min.time()),
                    attendee_count=25,
                    status=InquiryStatus.PENDING,
                    created_at=NOW,
                    updated_at=NOW,
                )
            )
    application = create_app(Settings(database_url="sqlite+aiosqlite://"))
    application.state.database = database
    return application


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http:
        yield http


@pytest.mark.asyncio
async def test_overlapping_span_returns_409(client: AsyncClient) -> None:
    resp = await client.post("/api/bookings", json=_payload(startDate=_day(1), endDate=_day(5)))
    assert resp.status_code == 409
    assert "dates" in resp.json()["detail"]["details"]


@pytest.mark.asyncio
async def test_span_starting_at_existing_end_returns_201(client: AsyncClient) -> None:
    resp = await client.post("/api/bookings", json=_payload(startDate=_day(3), endDate=_day(5), message="Hi"))
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "Booking inquiry submitted successfully"
    data = body["data"]
    assert data["status"] == "pending"
    assert data["venueId"] == "lodge"
    assert data["venue"]["name"] == "Mountain Vista Lodge"
    assert data["venue"]["amenities"] == ["WiFi", "Spa"]
    assert data["startDate"].startswith(_day(3))
    assert data["id"]

    listing = await client.get("/api/bookings")
    assert listing.status_code == 200
    items = listing.json()["data"]
    assert [item["id"] for item in items][0] == data["id"]
    assert items[0]["venue"] == {"id": "lodge", "name": "Mountain Vista Lodge", "city": "Aspen"}


@pytest.mark.asyncio
async def test_capacity_exceeded_returns_400_with_maximum(client: AsyncClient) -> None:
    resp = await client.post("/api/bookings", json=_payload(attendeeCount=60, startDate=_day(10), endDate=_day(12)))
    assert resp.status_code == 400
    detail = resp.json()["detail"]
    assert "50" in detail["details"]["attendeeCount"][0]
    assert "60" in detail["error"]


@pytest.mark.asyncio
async def test_unknown_venue_returns_404(client: AsyncClient) -> None:
    resp = await client.post("/api/bookings", json=_payload(venueId="missing"))
    assert resp.status_code == 404
    assert resp.json()["detail"]["error"] == "Venue not found"


@pytest.mark.asyncio
async def test_validation_failure_returns_400_with_field_errors(client: AsyncClient) -> None:
    resp = await client.post("/api/bookings", json=_payload(email="nope", endDate=_day(1)))
    assert resp.status_code == 400
    details = resp.json()["detail"]["details"]
    assert details["email"] == ["Please provide a valid email address"]
    assert details["endDate"] == ["End date must be after start date"]


@pytest.mark.asyncio
async def test_out_of_range_date_returns_400(client: AsyncClient) -> None:
    resp = await client.post("/api/bookings", json=_payload(endDate="9999-12-31T23:30:00-05:00"))
    assert resp.status_code == 400
    assert resp.json()["detail"]["details"] == {"endDate": ["End date must be a valid date"]}


@pytest.mark.asyncio
async def test_malformed_json_returns_400(client: AsyncClient) -> None:
    resp = await client.post(
        "/api/bookings",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "Validation failed"


@pytest.mark.asyncio
async def test_rejected_requests_leave_no_rows(client: AsyncClient) -> None:
    await client.post("/api/bookings", json=_payload(attendeeCount=60))
    await client.post("/api/bookings", json=_payload())
    listing = await client.get("/api/bookings")
    assert [item["id"] for item in listing.json()["data"]] == ["existing"]


@pytest.mark.asyncio
async def test_response_carries_request_id(client: AsyncClient) -> None:
    resp = await client.get("/api/bookings", headers={"X-Request-ID": "req-42"})
    assert resp.headers["X-Request-ID"] == "req-42"


@pytest.mark.asyncio
async def test_admitted_inquiry_is_audited(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    calls: list[dict[str, Any]] = []

    def fake_emit(**kwargs: Any) -> None:
        calls.append(kwargs)

    monkeypatch.setattr(router, "emit_audit_log", fake_emit)
    resp = await client.post("/api/bookings", json=_payload(startDate=_day(20), endDate=_day(22)))
    assert resp.status_code == 201
    assert len(calls) == 1
    assert calls[0]["action"] == "inquiry.created"
    assert calls[0]["inquiry_id"] == resp.json()["data"]["id"]


@pytest.mark.asyncio
async def test_audit_failure_returns_500_and_rolls_back(client: AsyncClient, monkeypatch: pytest.MonkeyPatch) -> None:
    def fake_emit(**kwargs: Any) -> None:
        raise RuntimeError("fail log")

    monkeypatch.setattr(router, "emit_audit_log", fake_emit)
    resp = await client.post("/api/bookings", json=_payload(startDate=_day(20), endDate=_day(22)))
    assert resp.status_code == 500
    assert resp.json()["detail"]["error"] == "Failed to create booking inquiry. Please try again later."

    listing = await client.get("/api/bookings")
    assert [item["id"] for item in listing.json()["data"]] == ["existing"]
