"""User routes. Authentication lives elsewhere; these only manage records."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.api.routes.teachers import directory_entry
from lessonbook.database import get_db
from lessonbook.models.user import Subscription, TeacherProfile, User
from lessonbook.schemas.user import TeacherDirectoryEntry, UserCreate, UserRead

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post("", response_model=UserRead, status_code=201)
async def create_user(
    body: UserCreate,
    session: AsyncSession = Depends(get_db),
) -> User:
    existing = await session.execute(select(User).where(User.email == body.email))
    if existing.scalar_one_or_none() is not None:
        raise HTTPException(status_code=409, detail=f"Email '{body.email}' is already registered")

    user = User(name=body.name, email=body.email, role=body.role)
    session.add(user)
    await session.commit()
    await session.refresh(user)
    return user


@router.get("/{user_id}", response_model=UserRead)
async def get_user(
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> User:
    user = await session.get(User, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return user


@router.get("/{user_id}/subscriptions", response_model=list[TeacherDirectoryEntry])
async def list_subscriptions(
    user_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[TeacherDirectoryEntry]:
    """Teachers the student is subscribed to, with their profiles."""
    if await session.get(User, user_id) is None:
        raise HTTPException(status_code=404, detail="User not found")

    stmt = (
        select(User, TeacherProfile)
        .join(Subscription, Subscription.teacher_id == User.id)
        .outerjoin(TeacherProfile, TeacherProfile.user_id == User.id)
        .where(Subscription.student_id == user_id)
        .order_by(User.name, User.id)
    )
    result = await session.execute(stmt)
    return [directory_entry(user, profile) for user, profile in result.all()]
