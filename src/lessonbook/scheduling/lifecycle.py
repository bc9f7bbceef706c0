"""Lesson status state machine."""

from lessonbook.scheduling.errors import InvalidTransitionError

PENDING = "pending"
CONFIRMED = "confirmed"
CANCELLED = "cancelled"
COMPLETED = "completed"
REJECTED = "rejected"

LESSON_STATUSES = (PENDING, CONFIRMED, CANCELLED, COMPLETED, REJECTED)

# Lessons in these states hold their slot on the teacher's calendar.
# A rejected booking was never accepted, so it never held the slot.
OCCUPYING_STATUSES = frozenset({PENDING, CONFIRMED, COMPLETED})

TERMINAL_STATUSES = frozenset({CANCELLED, COMPLETED, REJECTED})

TRANSITIONS: dict[str, frozenset[str]] = {
    PENDING: frozenset({CONFIRMED, REJECTED, CANCELLED}),
    CONFIRMED: frozenset({CANCELLED, COMPLETED}),
    CANCELLED: frozenset(),
    COMPLETED: frozenset(),
    REJECTED: frozenset(),
}


def occupies_calendar(status: str) -> bool:
    return status in OCCUPYING_STATUSES


def can_transition(current: str, target: str) -> bool:
    return target in TRANSITIONS.get(current, frozenset())


def ensure_transition(current: str, target: str) -> None:
    """Raise InvalidTransitionError unless `current -> target` is allowed."""
    if current not in TRANSITIONS:
        raise InvalidTransitionError(f"Unknown lesson status '{current}'")
    if not can_transition(current, target):
        raise InvalidTransitionError(
            f"Cannot move a {current} lesson to {target}"
        )
