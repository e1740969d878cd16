"""
Unit tests for CreatePaymentUseCase

Test Coverage:
1. Amount validation before the transaction
2. Booking state checks (missing, expired, cancelled)
3. Payment method lookup
4. Idempotent reuse of an existing pending payment
"""

from datetime import timedelta

import attrs
import pytest

from src.platform.exception.exceptions import (
    BookingCancelledError,
    BookingExpiredError,
    NotFoundError,
    ValidationError,
)
from src.service.cinema.app.command.create_payment_use_case import CreatePaymentUseCase
from src.service.cinema.domain.entity.booking_entity import Booking
from src.service.cinema.domain.entity.payment_entity import Payment, PaymentMethod
from src.service.cinema.domain.enum.booking_status import BookingStatus
from test.test_constants import CLOCK_START, HOLD_TTL


pytestmark = pytest.mark.unit


class TestCreatePaymentUseCase:
    @pytest.fixture(autouse=True)
    def setup(self, mock_uow):
        self.uow = mock_uow
        self.booking = attrs.evolve(
            Booking.create(
                user_id=1, screening_id=1, seat_ids=[1, 2], now=CLOCK_START, hold_ttl=HOLD_TTL
            ),
            id=11,
        )
        self.uow.booking_command_repo.get_for_update.return_value = self.booking
        self.uow.payment_command_repo.get_method.return_value = PaymentMethod(id=3, name='Card')
        self.uow.payment_command_repo.get_pending_for_booking.return_value = None

        async def _create(*, payment):
            return attrs.evolve(payment, id=500)

        self.uow.payment_command_repo.create.side_effect = _create
        self.use_case = CreatePaymentUseCase(uow=self.uow, clock=lambda: CLOCK_START)

    @pytest.mark.asyncio
    async def test_creates_new_pending_payment(self):
        created = await self.use_case.create_payment(booking_id=11, method_id=3, amount=100000)

        assert created.payment_id == 500
        assert created.reused is False
        self.uow.commit.assert_awaited_once()
        payment = self.uow.payment_command_repo.create.call_args.kwargs['payment']
        assert payment.booking_id == 11
        assert payment.amount == 100000
        assert payment.is_pending

    @pytest.mark.asyncio
    async def test_existing_pending_payment_is_reused(self):
        self.uow.payment_command_repo.get_pending_for_booking.return_value = Payment(
            id=77, booking_id=11, payment_method_id=3, amount=100000
        )

        created = await self.use_case.create_payment(booking_id=11, method_id=3, amount=100000)

        assert created.payment_id == 77
        assert created.reused is True
        self.uow.payment_command_repo.create.assert_not_awaited()
        self.uow.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_zero_amount_rejected_before_transaction(self):
        with pytest.raises(ValidationError, match='amount must be greater than zero'):
            await self.use_case.create_payment(booking_id=11, method_id=3, amount=0)

        self.uow.__aenter__.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_booking(self):
        self.uow.booking_command_repo.get_for_update.return_value = None

        with pytest.raises(NotFoundError, match='booking not found'):
            await self.use_case.create_payment(booking_id=404, method_id=3, amount=100)

    @pytest.mark.asyncio
    async def test_expired_booking(self):
        use_case = CreatePaymentUseCase(
            uow=self.uow, clock=lambda: CLOCK_START + HOLD_TTL + timedelta(seconds=1)
        )

        with pytest.raises(BookingExpiredError):
            await use_case.create_payment(booking_id=11, method_id=3, amount=100)

        self.uow.payment_command_repo.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancelled_booking(self):
        self.booking.status = BookingStatus.CANCELLED

        with pytest.raises(BookingCancelledError):
            await self.use_case.create_payment(booking_id=11, method_id=3, amount=100)

    @pytest.mark.asyncio
    async def test_unknown_payment_method(self):
        self.uow.payment_command_repo.get_method.return_value = None

        with pytest.raises(NotFoundError, match='payment method not found'):
            await self.use_case.create_payment(booking_id=11, method_id=9, amount=100)

        self.uow.commit.assert_not_awaited()
