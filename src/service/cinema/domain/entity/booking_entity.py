from datetime import datetime, timedelta
from typing import List, Optional

import attrs

from src.platform.exception.exceptions import (
    BookingCancelledError,
    BookingExpiredError,
    ConflictError,
    ValidationError,
)
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import ensure_utc
from src.service.cinema.domain.enum.booking_status import BookingStatus


EXPIRED = 'expired'


def is_hold_lapsed(*, status: str, expired_at: datetime, now: datetime) -> bool:
    return status == BookingStatus.PENDING and ensure_utc(now) >= ensure_utc(expired_at)


def effective_booking_status(*, status: str, expired_at: datetime, now: datetime) -> str:
    """Stored status, except a lapsed pending hold reads as 'expired'."""
    if is_hold_lapsed(status=status, expired_at=expired_at, now=now):
        return EXPIRED
    return str(status)


@attrs.define
class Booking:
    user_id: int
    screening_id: int
    status: BookingStatus
    expired_at: datetime
    seat_ids: List[int] = attrs.field(factory=list)
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        user_id: int,
        screening_id: int,
        seat_ids: List[int],
        now: datetime,
        hold_ttl: timedelta,
    ) -> 'Booking':
        validate_seat_selection(seat_ids)
        if user_id <= 0:
            raise ValidationError('user_id must be positive')
        if screening_id <= 0:
            raise ValidationError('screening_id must be positive')

        return cls(
            user_id=user_id,
            screening_id=screening_id,
            status=BookingStatus.PENDING,
            expired_at=now + hold_ttl,
            seat_ids=list(seat_ids),
            created_at=now,
            updated_at=now,
        )

    # Lazy expiry: nothing rewrites an expired booking, readers ask these instead

    def is_expired(self, now: datetime) -> bool:
        return is_hold_lapsed(status=self.status, expired_at=self.expired_at, now=now)

    def is_active(self, now: datetime) -> bool:
        if self.status == BookingStatus.PAID:
            return True
        return self.status == BookingStatus.PENDING and not self.is_expired(now)

    def effective_status(self, now: datetime) -> str:
        return effective_booking_status(status=self.status, expired_at=self.expired_at, now=now)

    @Logger.io
    def validate_can_create_payment(self, *, now: datetime) -> None:
        """
        Raises:
            BookingCancelledError: booking was cancelled
            BookingExpiredError: pending hold lapsed before payment started
            ConflictError: booking is already paid
        """
        if self.status == BookingStatus.CANCELLED:
            raise BookingCancelledError()
        if self.status == BookingStatus.PAID:
            raise ConflictError('booking is already paid')
        if self.is_expired(now):
            raise BookingExpiredError()


def validate_seat_selection(seat_ids: List[int]) -> None:
    if not seat_ids:
        raise ValidationError('at least one seat must be selected')
    if any(seat_id <= 0 for seat_id in seat_ids):
        raise ValidationError('seat ids must be positive')
    if len(set(seat_ids)) != len(seat_ids):
        raise ValidationError('duplicate seat in booking request')
