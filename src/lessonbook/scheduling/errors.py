"""Scheduling errors.

Each error also subclasses the matching builtin so callers that only know
about ValueError / RuntimeError keep working.
"""


class SchedulingError(Exception):
    pass


class SlotUnavailableError(SchedulingError, ValueError):
    """The requested slot is not, or is no longer, bookable."""


class BookingFailedError(SchedulingError, RuntimeError):
    """The booking could not be saved. Nothing was persisted."""


class InvalidTransitionError(SchedulingError, ValueError):
    pass


class NotFoundError(SchedulingError, LookupError):
    pass


class PermissionDeniedError(SchedulingError):
    pass
