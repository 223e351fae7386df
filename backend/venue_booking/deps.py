from typing import AsyncIterator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from .config import Settings, get_settings
from .database import Database
from .infrastructure.repositories import SqlAlchemyBookingInquiryRepository, SqlAlchemyVenueRepository


def get_database(request: Request) -> Database:
    return request.app.state.database


async def get_session(database: Database = Depends(get_database)) -> AsyncIterator[AsyncSession]:
    async with database.session() as session:
        yield session


async def get_venue_repo(session: AsyncSession = Depends(get_session)) -> SqlAlchemyVenueRepository:
    return SqlAlchemyVenueRepository(session)


async def get_inquiry_repo(
    session: AsyncSession = Depends(get_session),
) -> SqlAlchemyBookingInquiryRepository:
    return SqlAlchemyBookingInquiryRepository(session)


def get_app_settings() -> Settings:
    return get_settings()
