"""
Unit tests for the Booking entity

Test Coverage:
1. Seat selection validation (empty, duplicate, non-positive)
2. Hold creation (pending, expiry = now + ttl)
3. Lazy expiry: effective status without any write
4. Payment preconditions
"""

from datetime import timedelta

import pytest

from src.platform.exception.exceptions import (
    BookingCancelledError,
    BookingExpiredError,
    ConflictError,
    ValidationError,
)
from src.service.cinema.domain.entity.booking_entity import (
    EXPIRED,
    Booking,
    effective_booking_status,
)
from src.service.cinema.domain.entity.screening_entity import ScreeningWindow
from src.service.cinema.domain.enum.booking_status import BookingStatus
from test.test_constants import CLOCK_START, HOLD_TTL


pytestmark = pytest.mark.unit


def _booking(**overrides) -> Booking:
    params = {
        'user_id': 1,
        'screening_id': 1,
        'seat_ids': [1, 2],
        'now': CLOCK_START,
        'hold_ttl': HOLD_TTL,
    }
    params.update(overrides)
    return Booking.create(**params)


class TestBookingCreate:
    def test_create_sets_pending_hold(self):
        booking = _booking()

        assert booking.status == BookingStatus.PENDING
        assert booking.expired_at == CLOCK_START + HOLD_TTL
        assert booking.seat_ids == [1, 2]
        assert booking.id is None

    def test_empty_seat_list_is_rejected(self):
        with pytest.raises(ValidationError, match='at least one seat'):
            _booking(seat_ids=[])

    def test_duplicate_seat_is_rejected(self):
        with pytest.raises(ValidationError, match='duplicate seat'):
            _booking(seat_ids=[3, 3])

    @pytest.mark.parametrize('seat_ids', [[0], [-1, 2]])
    def test_non_positive_seat_is_rejected(self, seat_ids):
        with pytest.raises(ValidationError):
            _booking(seat_ids=seat_ids)

    def test_non_positive_screening_is_rejected(self):
        with pytest.raises(ValidationError):
            _booking(screening_id=0)


class TestLazyExpiry:
    def test_pending_before_expiry_is_active(self):
        booking = _booking()

        assert booking.is_active(CLOCK_START + timedelta(minutes=9))
        assert booking.effective_status(CLOCK_START) == 'pending'

    def test_pending_at_expiry_reads_as_expired(self):
        booking = _booking()
        at_expiry = CLOCK_START + HOLD_TTL

        assert booking.is_expired(at_expiry)
        assert not booking.is_active(at_expiry)
        assert booking.effective_status(at_expiry) == EXPIRED
        # The stored status is untouched
        assert booking.status == BookingStatus.PENDING

    def test_paid_booking_never_expires(self):
        later = CLOCK_START + timedelta(days=1)

        assert effective_booking_status(
            status=BookingStatus.PAID, expired_at=CLOCK_START, now=later
        ) == 'paid'

    def test_naive_timestamps_are_treated_as_utc(self):
        naive_expiry = (CLOCK_START + HOLD_TTL).replace(tzinfo=None)

        assert effective_booking_status(
            status=BookingStatus.PENDING, expired_at=naive_expiry, now=CLOCK_START
        ) == 'pending'


class TestPaymentPreconditions:
    def test_pending_unexpired_booking_can_be_paid(self):
        _booking().validate_can_create_payment(now=CLOCK_START)

    def test_expired_booking_cannot_be_paid(self):
        with pytest.raises(BookingExpiredError):
            _booking().validate_can_create_payment(now=CLOCK_START + HOLD_TTL)

    def test_cancelled_booking_cannot_be_paid(self):
        booking = _booking()
        booking.status = BookingStatus.CANCELLED

        with pytest.raises(BookingCancelledError):
            booking.validate_can_create_payment(now=CLOCK_START)

    def test_paid_booking_cannot_be_paid_again(self):
        booking = _booking()
        booking.status = BookingStatus.PAID

        with pytest.raises(ConflictError, match='already paid'):
            booking.validate_can_create_payment(now=CLOCK_START)


class TestScreeningWindow:
    def test_window_closes_at_start_plus_duration(self):
        window = ScreeningWindow(
            screening_id=1,
            studio_id=1,
            movie_id=1,
            start_time=CLOCK_START,
            duration_minutes=120,
        )

        assert window.is_open(CLOCK_START + timedelta(minutes=119))
        assert not window.is_open(CLOCK_START + timedelta(minutes=120))

    def test_started_screening_still_open_before_end(self):
        window = ScreeningWindow(
            screening_id=1,
            studio_id=1,
            movie_id=1,
            start_time=CLOCK_START.replace(tzinfo=None),
            duration_minutes=90,
        )

        assert window.is_open(CLOCK_START + timedelta(minutes=30))
