"""Slot generation and per-date availability resolution.

Everything here is pure and synchronous: callers fetch availability windows,
blocked periods and lessons first, then pass the snapshots in.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from lessonbook.models.availability import Availability, BlockedSlot
from lessonbook.models.lesson import Lesson
from lessonbook.scheduling.lifecycle import occupies_calendar
from lessonbook.scheduling.timeutils import (
    day_of_week,
    intervals_overlap,
    minutes_to_time,
    time_to_minutes,
)

# Start times advance by this step regardless of the lesson length, so a 60-minute
# lesson can start on any half hour.
SLOT_STRIDE_MINUTES = 30


@dataclass(frozen=True)
class CandidateSlot:
    start_time: str
    end_time: str


@dataclass(frozen=True)
class TimeSlot:
    start_time: str
    end_time: str
    available: bool

    @property
    def key(self) -> tuple[str, str]:
        return (self.start_time, self.end_time)


def generate_candidate_slots(
    window_start: str,
    window_end: str,
    duration: int,
    stride: int = SLOT_STRIDE_MINUTES,
) -> list[CandidateSlot]:
    """Cut one availability window into fixed-length slots.

    Slots start every `stride` minutes from `window_start` and may overlap each
    other when `duration > stride`. A slot is emitted only if it ends on or
    before `window_end`.
    """
    if duration <= 0:
        raise ValueError(f"Lesson duration must be positive, got {duration}")
    if stride <= 0:
        raise ValueError(f"Slot stride must be positive, got {stride}")
    start = time_to_minutes(window_start)
    end = time_to_minutes(window_end)
    if start >= end:
        raise ValueError(
            f"Availability window start {window_start} must be before end {window_end}"
        )

    slots: list[CandidateSlot] = []
    cursor = start
    while cursor + duration <= end:
        slots.append(CandidateSlot(minutes_to_time(cursor), minutes_to_time(cursor + duration)))
        cursor += stride
    return slots


def windows_for_day(day: int, availability: Iterable[Availability]) -> list[Availability]:
    """Windows for a weekday (0=Sunday), ordered by start time.

    sorted() is stable, so windows sharing a start time keep their input order.
    """
    return sorted(
        (w for w in availability if w.day_of_week == day),
        key=lambda w: time_to_minutes(w.start_time),
    )


def is_all_day_blocked(target_date: date, blocked: Iterable[BlockedSlot]) -> bool:
    return any(b.blocked_date == target_date and b.all_day for b in blocked)


def is_blocked(
    target_date: date,
    start: int,
    end: int,
    blocked: Iterable[BlockedSlot],
) -> bool:
    """True if an all-day block or an overlapping partial block covers the interval."""
    for block in blocked:
        if block.blocked_date != target_date:
            continue
        if block.all_day:
            return True
        # Partial blocks without both bounds block nothing
        if block.start_time and block.end_time:
            if intervals_overlap(
                start, end, time_to_minutes(block.start_time), time_to_minutes(block.end_time)
            ):
                return True
    return False


def has_lesson_conflict(
    target_date: date,
    start: int,
    end: int,
    lessons: Iterable[Lesson],
) -> bool:
    """True if a lesson still holding its slot overlaps the interval.

    Cancelled and rejected lessons are ignored.
    """
    for lesson in lessons:
        if not occupies_calendar(lesson.status):
            continue
        if lesson.lesson_date != target_date:
            continue
        if intervals_overlap(
            start, end, time_to_minutes(lesson.start_time), time_to_minutes(lesson.end_time)
        ):
            return True
    return False


def merge_duplicate_slots(slots: Iterable[TimeSlot]) -> list[TimeSlot]:
    """Collapse slots sharing (start, end) and sort them by start time.

    An unavailable copy is never replaced by an available one.
    """
    merged: dict[tuple[str, str], TimeSlot] = {}
    for slot in slots:
        existing = merged.get(slot.key)
        if existing is None or not slot.available:
            merged[slot.key] = slot
    return sorted(merged.values(), key=lambda s: time_to_minutes(s.start_time))


def resolve_slots_for_date(
    target_date: date,
    availability: Sequence[Availability],
    blocked: Sequence[BlockedSlot],
    lessons: Sequence[Lesson],
    duration: int,
    stride: int = SLOT_STRIDE_MINUTES,
) -> list[TimeSlot]:
    """Compute every slot of `duration` minutes on `target_date` and whether it is free.

    Overlapping windows can produce the same slot more than once. Duplicates are
    merged by (start, end) and an unavailable result always wins, so a slot is
    bookable only if no copy of it was disqualified.

    `duration` is not checked against the teacher's configured durations.
    Returns an empty list when the teacher has no window on that weekday.
    """
    windows = windows_for_day(day_of_week(target_date), availability)
    if not windows:
        return []

    evaluated: list[TimeSlot] = []
    for window in windows:
        for candidate in generate_candidate_slots(
            window.start_time, window.end_time, duration, stride
        ):
            start = time_to_minutes(candidate.start_time)
            end = time_to_minutes(candidate.end_time)
            available = not is_blocked(target_date, start, end, blocked) and not (
                has_lesson_conflict(target_date, start, end, lessons)
            )
            evaluated.append(TimeSlot(candidate.start_time, candidate.end_time, available))

    return merge_duplicate_slots(evaluated)


def has_any_available_slot(
    target_date: date,
    availability: Sequence[Availability],
    blocked: Sequence[BlockedSlot],
    lessons: Sequence[Lesson],
    allowed_durations: Sequence[int],
    stride: int = SLOT_STRIDE_MINUTES,
) -> bool:
    """Cheap "is this date selectable" check for calendar pickers.

    Probes with the shortest allowed duration: if that does not fit, nothing longer
    will. A True answer does not guarantee slots for every duration.
    """
    if is_all_day_blocked(target_date, blocked):
        return False
    if not allowed_durations:
        return False
    slots = resolve_slots_for_date(
        target_date, availability, blocked, lessons, min(allowed_durations), stride
    )
    return any(slot.available for slot in slots)


def bookable_dates(
    start: date,
    days: int,
    availability: Sequence[Availability],
    blocked: Sequence[BlockedSlot],
    lessons: Sequence[Lesson],
    allowed_durations: Sequence[int],
    today: date | None = None,
    stride: int = SLOT_STRIDE_MINUTES,
) -> list[date]:
    """Dates in [start, start + days) that pass the feasibility check. Past dates are skipped."""
    today = today or date.today()
    result = []
    for offset in range(days):
        current = start + timedelta(days=offset)
        if current < today:
            continue
        if has_any_available_slot(
            current, availability, blocked, lessons, allowed_durations, stride
        ):
            result.append(current)
    return result
