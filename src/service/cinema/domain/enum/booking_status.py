from enum import StrEnum


class BookingStatus(StrEnum):
    PENDING = 'pending'
    PAID = 'paid'
    CANCELLED = 'cancelled'


class BookingSeatStatus(StrEnum):
    """
    Status of one booking_seat association row.

    PENDING and PAID rows hold the seat (partial unique index). RELEASED marks the
    row of an expired pending or cancelled booking whose seat a later booking took back.
    """

    PENDING = 'pending'
    PAID = 'paid'
    RELEASED = 'released'


SEAT_HOLDING_STATUSES: tuple[str, ...] = (BookingSeatStatus.PENDING, BookingSeatStatus.PAID)
