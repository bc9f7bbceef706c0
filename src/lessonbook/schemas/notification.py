from datetime import datetime

from pydantic import BaseModel


class NotificationRead(BaseModel):
    id: int
    user_id: int
    type: str
    message: str
    read: bool
    related_id: int | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class MarkAllReadResponse(BaseModel):
    user_id: int
    updated: int


class UnreadCountRead(BaseModel):
    user_id: int
    unread: int
