"""Booking status transitions"""

from ...models_booking import BookingStatus

TERMINAL_STATUSES = frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED, BookingStatus.NO_SHOW})

ALLOWED_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset(
        {
            BookingStatus.CONFIRMED,
            BookingStatus.CANCELLED,
            BookingStatus.RESCHEDULED,
            BookingStatus.NO_SHOW,
        }
    ),
    BookingStatus.CONFIRMED: frozenset(
        {
            BookingStatus.IN_PROGRESS,
            BookingStatus.CANCELLED,
            BookingStatus.RESCHEDULED,
            BookingStatus.NO_SHOW,
            BookingStatus.COMPLETED,
        }
    ),
    BookingStatus.RESCHEDULED: frozenset(
        {
            BookingStatus.CONFIRMED,
            BookingStatus.IN_PROGRESS,
            BookingStatus.CANCELLED,
            BookingStatus.RESCHEDULED,
            BookingStatus.NO_SHOW,
            BookingStatus.COMPLETED,
        }
    ),
    BookingStatus.IN_PROGRESS: frozenset({BookingStatus.COMPLETED, BookingStatus.CANCELLED}),
    BookingStatus.COMPLETED: frozenset(),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.NO_SHOW: frozenset(),
}


def can_transition(current: str, target: str) -> bool:
    return BookingStatus(target) in ALLOWED_TRANSITIONS[BookingStatus(current)]


def is_terminal(status: str) -> bool:
    return BookingStatus(status) in TERMINAL_STATUSES
