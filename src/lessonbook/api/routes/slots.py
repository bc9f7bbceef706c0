"""Bookable slot queries: per-date slot lists, date feasibility and calendar ranges."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query

from lessonbook.api.deps import get_booking_service
from lessonbook.scheduling.booking import BookingService
from lessonbook.scheduling.errors import NotFoundError
from lessonbook.scheduling.slots import TimeSlot
from lessonbook.scheduling.timeutils import MINUTES_PER_DAY
from lessonbook.schemas.availability import CalendarRead, FeasibilityRead, TimeSlotRead

router = APIRouter(prefix="/api/teachers/{teacher_id}", tags=["slots"])


@router.get("/slots", response_model=list[TimeSlotRead])
async def get_slots(
    teacher_id: int,
    target_date: date = Query(alias="date"),
    duration: int = Query(gt=0, le=MINUTES_PER_DAY),
    service: BookingService = Depends(get_booking_service),
) -> list[TimeSlot]:
    """Every slot of `duration` minutes on `date`, with its availability.

    An empty list means nothing fits; it is not an error.
    """
    try:
        return await service.available_slots(teacher_id, target_date, duration)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None


@router.get("/feasibility", response_model=FeasibilityRead)
async def get_feasibility(
    teacher_id: int,
    target_date: date = Query(alias="date"),
    service: BookingService = Depends(get_booking_service),
) -> FeasibilityRead:
    """Whether `date` has at least one free slot of the teacher's shortest duration."""
    try:
        bookable = await service.is_date_bookable(teacher_id, target_date)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return FeasibilityRead(date=target_date, bookable=bookable)


@router.get("/calendar", response_model=CalendarRead)
async def get_calendar(
    teacher_id: int,
    start: date | None = Query(default=None),
    days: int = Query(default=31, ge=1, le=92),
    service: BookingService = Depends(get_booking_service),
) -> CalendarRead:
    """Selectable dates in [start, start + days), skipping dates already past."""
    start = start or date.today()
    try:
        dates = await service.bookable_dates(teacher_id, start, days)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from None
    return CalendarRead(start=start, days=days, bookable_dates=dates)
