from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.config import get_settings
from lessonbook.database import get_db
from lessonbook.scheduling.booking import BookingService
from lessonbook.scheduling.store import SqlAlchemyStore


async def get_booking_service(session: AsyncSession = Depends(get_db)) -> BookingService:
    return BookingService(SqlAlchemyStore(session), get_settings())
