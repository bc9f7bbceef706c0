"""Teacher profile and subscription routes."""

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.database import get_db
from lessonbook.models.user import Subscription, TeacherProfile, User
from lessonbook.schemas.user import (
    SubscriptionCreate,
    SubscriptionRead,
    TeacherDirectoryEntry,
    TeacherProfileRead,
    TeacherProfileUpdate,
    UserRead,
)

router = APIRouter(prefix="/api/teachers", tags=["teachers"])
logger = logging.getLogger(__name__)


async def _get_teacher(session: AsyncSession, teacher_id: int) -> User:
    teacher = await session.get(User, teacher_id)
    if teacher is None or teacher.role != "teacher":
        raise HTTPException(status_code=404, detail="Teacher not found")
    return teacher


def directory_entry(user: User, profile: TeacherProfile | None) -> TeacherDirectoryEntry:
    return TeacherDirectoryEntry(
        id=user.id,
        name=user.name,
        email=user.email,
        profile=TeacherProfileRead.model_validate(profile) if profile is not None else None,
    )


@router.get("", response_model=list[TeacherDirectoryEntry])
async def list_teachers(
    session: AsyncSession = Depends(get_db),
) -> list[TeacherDirectoryEntry]:
    """All teachers with their rate, durations and bio, for students choosing whom to follow."""
    stmt = (
        select(User, TeacherProfile)
        .outerjoin(TeacherProfile, TeacherProfile.user_id == User.id)
        .where(User.role == "teacher")
        .order_by(User.name, User.id)
    )
    result = await session.execute(stmt)
    return [directory_entry(user, profile) for user, profile in result.all()]


@router.get("/{teacher_id}/profile", response_model=TeacherProfileRead)
async def get_profile(
    teacher_id: int,
    session: AsyncSession = Depends(get_db),
) -> TeacherProfile:
    profile = await session.get(TeacherProfile, teacher_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Teacher profile not found")
    return profile


@router.put("/{teacher_id}/profile", response_model=TeacherProfileRead)
async def upsert_profile(
    teacher_id: int,
    body: TeacherProfileUpdate,
    session: AsyncSession = Depends(get_db),
) -> TeacherProfile:
    """Create or replace the teacher's rate, durations and auto-accept policy.

    Existing lessons and payments keep the amounts they were booked with.
    """
    await _get_teacher(session, teacher_id)
    profile = await session.get(TeacherProfile, teacher_id)
    if profile is None:
        profile = TeacherProfile(user_id=teacher_id)
        session.add(profile)

    profile.bio = body.bio
    profile.hourly_rate = body.hourly_rate
    profile.lesson_durations = sorted(set(body.lesson_durations))
    profile.auto_accept = body.auto_accept
    await session.commit()
    await session.refresh(profile)
    return profile


@router.get("/{teacher_id}/subscribers", response_model=list[UserRead])
async def list_subscribers(
    teacher_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[User]:
    """Students subscribed to the teacher, by name."""
    await _get_teacher(session, teacher_id)
    stmt = (
        select(User)
        .join(Subscription, Subscription.student_id == User.id)
        .where(Subscription.teacher_id == teacher_id)
        .order_by(User.name, User.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.post("/{teacher_id}/subscribers", response_model=SubscriptionRead, status_code=201)
async def subscribe(
    teacher_id: int,
    body: SubscriptionCreate,
    session: AsyncSession = Depends(get_db),
) -> Subscription:
    await _get_teacher(session, teacher_id)
    student = await session.get(User, body.student_id)
    if student is None or student.role != "student":
        raise HTTPException(status_code=404, detail="Student not found")

    existing = await session.execute(
        select(Subscription).where(
            Subscription.student_id == body.student_id,
            Subscription.teacher_id == teacher_id,
        )
    )
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail="Already subscribed to this teacher")

    subscription = Subscription(student_id=body.student_id, teacher_id=teacher_id)
    session.add(subscription)
    await session.commit()
    await session.refresh(subscription)
    logger.info("Student %d subscribed to teacher %d", body.student_id, teacher_id)
    return subscription


@router.delete("/{teacher_id}/subscribers/{student_id}", status_code=204)
async def unsubscribe(
    teacher_id: int,
    student_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    result = await session.execute(
        select(Subscription).where(
            Subscription.student_id == student_id,
            Subscription.teacher_id == teacher_id,
        )
    )
    subscription = result.scalar_one_or_none()
    if subscription is None:
        raise HTTPException(status_code=404, detail="Subscription not found")

    await session.delete(subscription)
    await session.commit()
