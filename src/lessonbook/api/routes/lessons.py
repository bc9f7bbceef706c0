"""Lesson routes: booking, listing and status changes."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.api.deps import get_booking_service
from lessonbook.database import get_db
from lessonbook.models.lesson import Lesson
from lessonbook.models.user import TeacherProfile
from lessonbook.scheduling.booking import BookingService
from lessonbook.scheduling.errors import (
    BookingFailedError,
    InvalidTransitionError,
    NotFoundError,
    PermissionDeniedError,
    SlotUnavailableError,
)
from lessonbook.scheduling.lifecycle import LESSON_STATUSES
from lessonbook.scheduling.slots import CandidateSlot
from lessonbook.schemas.lesson import BookingRequest, LessonAction, LessonRead

router = APIRouter(prefix="/api/lessons", tags=["lessons"])


@router.post("", response_model=LessonRead, status_code=201)
async def book_lesson(
    body: BookingRequest,
    session: AsyncSession = Depends(get_db),
    service: BookingService = Depends(get_booking_service),
) -> Lesson:
    """Book a lesson in a slot returned by the slots endpoint.

    Creates the lesson, its unpaid billing record and a notification for the
    teacher in one transaction. The lesson is confirmed right away when the
    teacher auto-accepts, otherwise it waits as pending.

    409 means the date is past or the slot is not free (anymore); 503 means
    nothing could be saved.
    """
    profile = await session.get(TeacherProfile, body.teacher_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Teacher profile not found")

    if not await service.is_subscribed(body.student_id, body.teacher_id):
        raise HTTPException(
            status_code=403, detail="Student must subscribe to this teacher before booking"
        )

    if body.duration not in profile.lesson_durations:
        raise HTTPException(
            status_code=422,
            detail=f"Duration {body.duration} is not offered; choose one of {profile.lesson_durations}",
        )

    try:
        return await service.book_lesson(
            student_id=body.student_id,
            teacher_id=body.teacher_id,
            target_date=body.lesson_date,
            slot=CandidateSlot(body.start_time, body.end_time),
            duration=body.duration,
            profile=profile,
            notes=body.notes,
        )
    except SlotUnavailableError as e:
        raise HTTPException(status_code=409, detail=str(e)) from None
    except BookingFailedError as e:
        raise HTTPException(status_code=503, detail=str(e)) from None
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from None


@router.get("", response_model=list[LessonRead])
async def list_lessons(
    teacher_id: int | None = Query(default=None),
    student_id: int | None = Query(default=None),
    status: str | None = Query(default=None),
    on_date: date | None = Query(default=None),
    since: date | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> list[Lesson]:
    """List lessons, filtered by participant, status and date."""
    if status is not None and status not in LESSON_STATUSES:
        raise HTTPException(status_code=422, detail=f"Unknown lesson status '{status}'")

    stmt = select(Lesson)
    if teacher_id is not None:
        stmt = stmt.where(Lesson.teacher_id == teacher_id)
    if student_id is not None:
        stmt = stmt.where(Lesson.student_id == student_id)
    if status is not None:
        stmt = stmt.where(Lesson.status == status)
    if on_date is not None:
        stmt = stmt.where(Lesson.lesson_date == on_date)
    if since is not None:
        stmt = stmt.where(Lesson.lesson_date >= since)

    result = await session.execute(stmt.order_by(Lesson.lesson_date, Lesson.start_time))
    return list(result.scalars().all())


@router.get("/{lesson_id}", response_model=LessonRead)
async def get_lesson(
    lesson_id: int,
    session: AsyncSession = Depends(get_db),
) -> Lesson:
    lesson = await session.get(Lesson, lesson_id)
    if lesson is None:
        raise HTTPException(status_code=404, detail="Lesson not found")
    return lesson


def _transition_error(e: Exception) -> HTTPException:
    if isinstance(e, NotFoundError):
        return HTTPException(status_code=404, detail=str(e))
    if isinstance(e, PermissionDeniedError):
        return HTTPException(status_code=403, detail=str(e))
    if isinstance(e, InvalidTransitionError):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=503, detail=str(e))


@router.post("/{lesson_id}/accept", response_model=LessonRead)
async def accept_lesson(
    lesson_id: int,
    body: LessonAction,
    service: BookingService = Depends(get_booking_service),
) -> Lesson:
    """Teacher accepts a pending request."""
    try:
        return await service.accept_lesson(lesson_id, body.actor_id)
    except (NotFoundError, PermissionDeniedError, InvalidTransitionError, BookingFailedError) as e:
        raise _transition_error(e) from None


@router.post("/{lesson_id}/reject", response_model=LessonRead)
async def reject_lesson(
    lesson_id: int,
    body: LessonAction,
    service: BookingService = Depends(get_booking_service),
) -> Lesson:
    """Teacher declines a pending request. The slot becomes bookable again."""
    try:
        return await service.reject_lesson(lesson_id, body.actor_id)
    except (NotFoundError, PermissionDeniedError, InvalidTransitionError, BookingFailedError) as e:
        raise _transition_error(e) from None


@router.post("/{lesson_id}/cancel", response_model=LessonRead)
async def cancel_lesson(
    lesson_id: int,
    body: LessonAction,
    service: BookingService = Depends(get_booking_service),
) -> Lesson:
    """Student or teacher cancels a pending or confirmed lesson."""
    try:
        return await service.cancel_lesson(lesson_id, body.actor_id)
    except (NotFoundError, PermissionDeniedError, InvalidTransitionError, BookingFailedError) as e:
        raise _transition_error(e) from None


@router.post("/{lesson_id}/complete", response_model=LessonRead)
async def complete_lesson(
    lesson_id: int,
    service: BookingService = Depends(get_booking_service),
) -> Lesson:
    """Operator marks a confirmed lesson as held."""
    try:
        return await service.complete_lesson(lesson_id)
    except (NotFoundError, InvalidTransitionError, BookingFailedError) as e:
        raise _transition_error(e) from None
