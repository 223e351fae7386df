"""Create the schema and load sample venues.

Usage: python -m venue_booking.seed
"""

import asyncio
import logging
from datetime import datetime
from typing import Any

from sqlalchemy import delete

from .config import Settings, get_settings
from .database import Database
from .models import BookingInquiry, InquiryStatus, Venue
from .utils.time import utc_now_naive

logger = logging.getLogger("venue_booking.seed")

SAMPLE_VENUES: list[dict[str, Any]] = [
    {
        "name": "Mountain Vista Lodge",
        "description": "A mountain retreat with panoramic views and modern conference facilities.",
        "city": "Aspen",
        "address": "1250 Mountain View Road, Aspen, CO 81611",
        "capacity": 50,
        "price_per_night": 850,
        "amenities": ["WiFi", "Conference Room", "Catering", "Outdoor Terrace", "Hiking Trails", "Spa"],
        "image_url": "https://images.unsplash.com/photo-1506905925346-21bda4d32df4?w=800",
        "rating": 4.8,
    },
    {
        "name": "Coastal Breeze Resort",
        "description": "A beachfront property for creative workshops and team retreats.",
        "city": "San Diego",
        "address": "4500 Pacific Coast Highway, San Diego, CA 92109",
        "capacity": 80,
        "price_per_night": 1200,
        "amenities": ["WiFi", "Beachfront", "Conference Center", "Restaurant", "Pool", "Sunset Deck"],
        "image_url": "https://images.unsplash.com/photo-1571896349842-33c89424de2d?w=800",
        "rating": 4.9,
    },
    {
        "name": "Urban Innovation Hub",
        "description": "A downtown venue with AV equipment and flexible workspace configurations.",
        "city": "Austin",
        "address": "200 Congress Avenue, Austin, TX 78701",
        "capacity": 100,
        "price_per_night": 650,
        "amenities": ["High-Speed WiFi", "AV Equipment", "Breakout Rooms", "Rooftop Bar", "Catering", "Parking"],
        "image_url": "https://images.unsplash.com/photo-1497366216548-37526070297c?w=800",
        "rating": 4.6,
    },
    {
        "name": "Vineyard Estate",
        "description": "A wine country estate for executive retreats and company celebrations.",
        "city": "Napa",
        "address": "8800 Silverado Trail, Napa, CA 94558",
        "capacity": 40,
        "price_per_night": 1500,
        "amenities": ["WiFi", "Wine Cellar", "Private Chef", "Garden", "Meeting Rooms", "Vineyard Tours"],
        "image_url": "https://images.unsplash.com/photo-1510076857177-7470076d4098?w=800",
        "rating": 4.9,
    },
    {
        "name": "Forest Retreat Center",
        "description": "A woodland sanctuary for mindfulness retreats and focused work sessions.",
        "city": "Portland",
        "address": "15000 Forest Park Lane, Portland, OR 97231",
        "capacity": 35,
        "price_per_night": 550,
        "amenities": ["WiFi", "Meditation Room", "Yoga Studio", "Nature Trails", "Organic Catering"],
        "image_url": "https://images.unsplash.com/photo-1449158743715-0a90ebb6d2d8?w=800",
        "rating": 4.7,
    },
    {
        "name": "Desert Oasis Resort",
        "description": "A desert escape for incentive trips and leadership summits.",
        "city": "Scottsdale",
        "address": "7200 E Camelback Road, Scottsdale, AZ 85251",
        "capacity": 120,
        "price_per_night": 950,
        "amenities": ["WiFi", "Golf Course", "Spa", "Multiple Pools", "Conference Facilities", "Fine Dining"],
        "image_url": "https://images.unsplash.com/photo-1582719508461-905c673771fd?w=800",
        "rating": 4.8,
    },
    {
        "name": "Historic Manor House",
        "description": "A restored 19th-century manor for board meetings and exclusive events.",
        "city": "Charleston",
        "address": "350 Meeting Street, Charleston, SC 29403",
        "capacity": 30,
        "price_per_night": 1100,
        "amenities": ["WiFi", "Library", "Garden Courtyard", "Private Dining", "Concierge Service"],
        "image_url": "https://images.unsplash.com/photo-1564501049412-61c2a3083791?w=800",
        "rating": 4.9,
    },
    {
        "name": "Lakeside Conference Center",
        "description": "A lakeside facility combining meetings with water activities.",
        "city": "Lake Tahoe",
        "address": "6500 Lakefront Drive, Lake Tahoe, CA 96150",
        "capacity": 75,
        "price_per_night": 780,
        "amenities": ["WiFi", "Lake Access", "Kayaks", "Conference Rooms", "Restaurant", "Ski Access"],
        "image_url": "https://images.unsplash.com/photo-1439066615861-d1af74d74000?w=800",
        "rating": 4.7,
    },
    {
        "name": "Sky Tower Business Hotel",
        "description": "A high-rise venue in downtown Manhattan for client meetings and corporate events.",
        "city": "New York",
        "address": "200 Park Avenue, New York, NY 10166",
        "capacity": 200,
        "price_per_night": 2000,
        "amenities": ["High-Speed WiFi", "Business Center", "Multiple Event Spaces", "Gym", "Valet Parking"],
        "image_url": "https://images.unsplash.com/photo-1486406146926-c627a92ad1ab?w=800",
        "rating": 4.5,
    },
    {
        "name": "Tropical Island Retreat",
        "description": "A beachfront property for team rewards and strategic planning.",
        "city": "Miami",
        "address": "1800 Collins Avenue, Miami Beach, FL 33139",
        "capacity": 60,
        "price_per_night": 1350,
        "amenities": ["WiFi", "Private Beach", "Water Sports", "Spa", "Tennis Courts"],
        "image_url": "https://images.unsplash.com/photo-1520250497591-112f2f40a3f4?w=800",
        "rating": 4.8,
    },
]


async def seed(database: Database) -> int:
    """Replace all venues and inquiries with the sample data. Returns the venue count."""
    await database.create_all()
    now = utc_now_naive()
    async with database.session() as session:
        async with session.begin():
            await session.execute(delete(BookingInquiry))
            await session.execute(delete(Venue))
            venues = [Venue(**data, created_at=now, updated_at=now) for data in SAMPLE_VENUES]
            session.add_all(venues)
            await session.flush()
            session.add(
                BookingInquiry(
                    venue_id=venues[0].id,
                    company_name="Demo Company Inc.",
                    email="team@democompany.com",
                    start_date=datetime(2024, 3, 15),
                    end_date=datetime(2024, 3, 18),
                    attendee_count=25,
                    message="Looking forward to our annual team retreat!",
                    status=InquiryStatus.PENDING,
                    created_at=now,
                    updated_at=now,
                )
            )
    return len(venues)


async def _main(settings: Settings) -> None:
    database = Database(settings)
    database.open()
    try:
        count = await seed(database)
    finally:
        await database.close()
    logger.info("seeded %d venues and 1 sample inquiry", count)


if __name__ == "__main__":
    settings = get_settings()
    logging.basicConfig(level=settings.log_level)
    asyncio.run(_main(settings))
