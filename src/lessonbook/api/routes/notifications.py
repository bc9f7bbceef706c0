"""Notification inbox routes."""

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from lessonbook.database import get_db
from lessonbook.models.notification import Notification
from lessonbook.scheduling.notifications import (
    delete_notification,
    list_notifications,
    mark_all_read,
    mark_read,
    unread_count,
)
from lessonbook.schemas.notification import MarkAllReadResponse, NotificationRead, UnreadCountRead

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("", response_model=list[NotificationRead])
async def get_notifications(
    user_id: int = Query(...),
    unread_only: bool = Query(default=False),
    session: AsyncSession = Depends(get_db),
) -> list[Notification]:
    """Newest first."""
    return await list_notifications(session, user_id, unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountRead)
async def get_unread_count(
    user_id: int = Query(...),
    session: AsyncSession = Depends(get_db),
) -> UnreadCountRead:
    return UnreadCountRead(user_id=user_id, unread=await unread_count(session, user_id))


@router.post("/read-all", response_model=MarkAllReadResponse)
async def read_all(
    user_id: int = Query(...),
    session: AsyncSession = Depends(get_db),
) -> MarkAllReadResponse:
    updated = await mark_all_read(session, user_id)
    return MarkAllReadResponse(user_id=user_id, updated=updated)


@router.post("/{notification_id}/read", response_model=NotificationRead)
async def read_one(
    notification_id: int,
    session: AsyncSession = Depends(get_db),
) -> Notification:
    notification = await mark_read(session, notification_id)
    if notification is None:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notification


@router.delete("/{notification_id}", status_code=204)
async def delete_one(
    notification_id: int,
    session: AsyncSession = Depends(get_db),
) -> None:
    if not await delete_notification(session, notification_id):
        raise HTTPException(status_code=404, detail="Notification not found")
