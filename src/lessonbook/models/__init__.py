from lessonbook.models.availability import Availability, BlockedSlot
from lessonbook.models.lesson import Lesson, Payment
from lessonbook.models.notification import Notification
from lessonbook.models.user import Subscription, TeacherProfile, User

__all__ = [
    "Availability",
    "BlockedSlot",
    "Lesson",
    "Notification",
    "Payment",
    "Subscription",
    "TeacherProfile",
    "User",
]
