"""Availability API routes: weekly windows and one-off blocked periods for a teacher.

Windows are created and deleted individually. To change one, delete it and add a new one.
"""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.database import get_db
from lessonbook.models.availability import Availability, BlockedSlot
from lessonbook.models.user import User
from lessonbook.schemas.availability import (
    AvailabilityCreate,
    AvailabilityRead,
    BlockedSlotCreate,
    BlockedSlotRead,
)

router = APIRouter(prefix="/api/teachers/{teacher_id}", tags=["availability"])


async def _require_teacher(session: AsyncSession, teacher_id: int) -> None:
    teacher = await session.get(User, teacher_id)
    if teacher is None or teacher.role != "teacher":
        raise HTTPException(status_code=404, detail="Teacher not found")


@router.post("/availability", response_model=AvailabilityRead, status_code=201)
async def add_window(
    teacher_id: int,
    body: AvailabilityCreate,
    session: AsyncSession = Depends(get_db),
) -> Availability:
    """Add a recurring weekly window. Overlapping windows are allowed."""
    await _require_teacher(session, teacher_id)
    row = Availability(
        teacher_id=teacher_id,
        day_of_week=body.day_of_week,
        start_time=body.start_time,
        end_time=body.end_time,
    )
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


@router.get("/availability", response_model=list[AvailabilityRead])
async def list_windows(
    teacher_id: int,
    session: AsyncSession = Depends(get_db),
) -> list[Availability]:
    """List the teacher's weekly windows, ordered by day then start time."""
    stmt = (
        select(Availability)
        .where(Availability.teacher_id == teacher_id)
        .order_by(Availability.day_of_week, Availability.start_time, Availability.id)
    )
    result = await session.execute(stmt)
    return list(result.scalars().all())


@router.delete("/availability/{window_id}", status_code=204)
async def delete_window(
    teacher_id: int,
    window_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    stmt = select(Availability).where(
        Availability.id == window_id,
        Availability.teacher_id == teacher_id,
    )
    result = await session.execute(stmt)
    window = result.scalar_one_or_none()
    if window is None:
        raise HTTPException(status_code=404, detail="Availability window not found")

    await session.delete(window)
    await session.commit()


@router.post("/blocked", response_model=BlockedSlotRead, status_code=201)
async def add_blocked_slot(
    teacher_id: int,
    body: BlockedSlotCreate,
    session: AsyncSession = Depends(get_db),
) -> BlockedSlot:
    """Block a whole date (all_day) or part of it."""
    await _require_teacher(session, teacher_id)
    row = BlockedSlot(
        teacher_id=teacher_id,
        blocked_date=body.blocked_date,
        all_day=body.all_day,
        start_time=None if body.all_day else body.start_time,
        end_time=None if body.all_day else body.end_time,
        reason=body.reason,
    )
    session.add(row)
    await session.commit()
    await session.refresh(row)
    return row


@router.get("/blocked", response_model=list[BlockedSlotRead])
async def list_blocked_slots(
    teacher_id: int,
    since: date | None = Query(default=None),
    session: AsyncSession = Depends(get_db),
) -> list[BlockedSlot]:
    stmt = select(BlockedSlot).where(BlockedSlot.teacher_id == teacher_id)
    if since is not None:
        stmt = stmt.where(BlockedSlot.blocked_date >= since)
    result = await session.execute(
        stmt.order_by(BlockedSlot.blocked_date, BlockedSlot.start_time, BlockedSlot.id)
    )
    return list(result.scalars().all())


@router.delete("/blocked/{block_id}", status_code=204)
async def delete_blocked_slot(
    teacher_id: int,
    block_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    stmt = select(BlockedSlot).where(
        BlockedSlot.id == block_id,
        BlockedSlot.teacher_id == teacher_id,
    )
    result = await session.execute(stmt)
    block = result.scalar_one_or_none()
    if block is None:
        raise HTTPException(status_code=404, detail="Blocked slot not found")

    await session.delete(block)
    await session.commit()
