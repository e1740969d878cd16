"""
Unit tests for UpdatePaymentUseCase

Test Coverage:
1. Status validation
2. Duplicate / late callbacks change nothing
3. Success: booking paid, one ticket per seat, commit, then ticket job queued
4. Failure status: payment settled, booking untouched
5. Notification problems after commit never surface to the caller
"""

from unittest.mock import AsyncMock

import pytest

from src.platform.exception.exceptions import NotFoundError, NotificationError, ValidationError
from src.platform.metrics.reservation_metrics import NotificationTally
from src.service.cinema.app.command.update_payment_use_case import UpdatePaymentUseCase
from src.service.cinema.app.dto.notification_job import TicketBundleJob, TicketLine
from src.service.cinema.domain.entity.payment_entity import Payment
from src.service.cinema.domain.enum.payment_status import PaymentStatus
from test.test_constants import CLOCK_START


pytestmark = pytest.mark.unit


def _bundle_job(booking_id: int) -> TicketBundleJob:
    return TicketBundleJob(
        booking_id=booking_id,
        recipient_email='viewer@example.com',
        recipient_name='Viewer',
        movie_title='Movie',
        cinema_name='Cinema',
        studio_name='Studio 1',
        start_time=CLOCK_START,
        tickets=[TicketLine(ticket_id=1, seat_code='A1', qr_token='t-1')],
    )


class TestUpdatePaymentUseCase:
    @pytest.fixture(autouse=True)
    def setup(self, mock_uow, mock_metrics):
        self.uow = mock_uow
        self.metrics = mock_metrics
        self.queue = AsyncMock()
        self.tally = NotificationTally()

        self.payment = Payment(id=500, booking_id=11, payment_method_id=3, amount=100000)
        self.uow.payment_command_repo.get_for_update.return_value = self.payment
        self.uow.booking_command_repo.mark_paid.return_value = [1, 2]
        self.uow.ticket_repo.build_bundle_job.return_value = _bundle_job(11)

        self.use_case = UpdatePaymentUseCase(
            uow=self.uow,
            notification_queue=self.queue,
            tally=self.tally,
            clock=lambda: CLOCK_START,
            metrics=self.metrics,
        )

    @pytest.mark.asyncio
    async def test_success_marks_booking_paid_and_issues_tickets(self):
        booking_id = await self.use_case.update_payment(
            payment_id=500, status='success', transaction_id='tx1'
        )

        assert booking_id == 11
        settled = self.uow.payment_command_repo.update.call_args.kwargs['payment']
        assert settled.status == PaymentStatus.SUCCESS
        assert settled.transaction_id == 'tx1'
        self.uow.booking_command_repo.mark_paid.assert_awaited_once_with(
            booking_id=11, now=CLOCK_START
        )

        tickets = self.uow.ticket_repo.create_batch.call_args.kwargs['tickets']
        assert [ticket.seat_id for ticket in tickets] == [1, 2]
        assert len({ticket.qr_token for ticket in tickets}) == 2
        self.uow.commit.assert_awaited_once()

        self.queue.submit.assert_awaited_once()
        assert self.queue.submit.call_args.args[0].booking_id == 11
        self.metrics.record_payment_callback.assert_called_once_with(
            status=PaymentStatus.SUCCESS, applied=True
        )

    @pytest.mark.asyncio
    async def test_failed_status_leaves_booking_alone(self):
        booking_id = await self.use_case.update_payment(
            payment_id=500, status='failed', transaction_id=None
        )

        assert booking_id is None
        settled = self.uow.payment_command_repo.update.call_args.kwargs['payment']
        assert settled.status == PaymentStatus.FAILED
        self.uow.booking_command_repo.mark_paid.assert_not_awaited()
        self.uow.ticket_repo.create_batch.assert_not_awaited()
        self.uow.commit.assert_awaited_once()
        self.queue.submit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_duplicate_callback_is_a_no_op(self):
        # Given: a previous callback already settled the payment
        self.payment.status = PaymentStatus.SUCCESS
        self.payment.transaction_id = 'tx1'

        booking_id = await self.use_case.update_payment(
            payment_id=500, status='success', transaction_id='tx2'
        )

        assert booking_id is None
        self.uow.payment_command_repo.update.assert_not_awaited()
        self.uow.booking_command_repo.mark_paid.assert_not_awaited()
        self.uow.commit.assert_not_awaited()
        self.queue.submit.assert_not_awaited()
        self.metrics.record_payment_callback.assert_called_once_with(
            status=PaymentStatus.SUCCESS, applied=False
        )

    @pytest.mark.asyncio
    @pytest.mark.parametrize('status', ['pending', 'refunded', ''])
    async def test_non_terminal_or_unknown_status_rejected(self, status):
        with pytest.raises(ValidationError):
            await self.use_case.update_payment(payment_id=500, status=status, transaction_id=None)

        self.uow.__aenter__.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_payment(self):
        self.uow.payment_command_repo.get_for_update.return_value = None

        with pytest.raises(NotFoundError, match='payment not found'):
            await self.use_case.update_payment(
                payment_id=404, status='success', transaction_id='tx1'
            )

    @pytest.mark.asyncio
    async def test_queue_closed_is_counted_not_raised(self):
        self.queue.submit.side_effect = NotificationError('notification pool is shut down')

        booking_id = await self.use_case.update_payment(
            payment_id=500, status='success', transaction_id='tx1'
        )

        assert booking_id == 11
        self.uow.commit.assert_awaited_once()
        assert self.tally.failed_count == 1

    @pytest.mark.asyncio
    async def test_job_assembly_failure_is_counted_not_raised(self):
        self.uow.ticket_repo.build_bundle_job.side_effect = RuntimeError('db went away')

        booking_id = await self.use_case.update_payment(
            payment_id=500, status='success', transaction_id='tx1'
        )

        assert booking_id == 11
        self.queue.submit.assert_not_awaited()
        assert self.tally.failed_count == 1
