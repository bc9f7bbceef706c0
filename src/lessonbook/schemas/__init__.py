from lessonbook.schemas.availability import (
    AvailabilityCreate,
    AvailabilityRead,
    BlockedSlotCreate,
    BlockedSlotRead,
    CalendarRead,
    FeasibilityRead,
    TimeSlotRead,
)
from lessonbook.schemas.lesson import (
    BookingRequest,
    LessonAction,
    LessonRead,
    PaymentRead,
    PaymentStatusUpdate,
    PaymentSummaryRead,
)
from lessonbook.schemas.notification import (
    MarkAllReadResponse,
    NotificationRead,
    UnreadCountRead,
)
from lessonbook.schemas.system import StatusResponse
from lessonbook.schemas.user import (
    SubscriptionCreate,
    SubscriptionRead,
    TeacherDirectoryEntry,
    TeacherProfileRead,
    TeacherProfileUpdate,
    UserCreate,
    UserRead,
)

__all__ = [
    "AvailabilityCreate",
    "AvailabilityRead",
    "BlockedSlotCreate",
    "BlockedSlotRead",
    "BookingRequest",
    "CalendarRead",
    "FeasibilityRead",
    "LessonAction",
    "LessonRead",
    "MarkAllReadResponse",
    "NotificationRead",
    "PaymentRead",
    "PaymentStatusUpdate",
    "PaymentSummaryRead",
    "StatusResponse",
    "SubscriptionCreate",
    "SubscriptionRead",
    "TeacherDirectoryEntry",
    "TeacherProfileRead",
    "TeacherProfileUpdate",
    "TimeSlotRead",
    "UnreadCountRead",
    "UserCreate",
    "UserRead",
]
