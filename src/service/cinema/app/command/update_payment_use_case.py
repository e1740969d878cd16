from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.reservation_metrics import NotificationTally, ReservationMetrics
from src.platform.types.clock import Clock, utc_now
from src.service.cinema.app.interface.i_notification_queue import INotificationQueue
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.domain.enum.notification_kind import NotificationKind
from src.service.cinema.domain.enum.payment_status import PaymentStatus


class UpdatePaymentUseCase:
    """
    Apply a payment provider callback.

    Flow:
    1. Lock the payment row FOR UPDATE; a duplicate or late callback finds it
       no longer pending and changes nothing
    2. On success: booking and its seat rows move to paid, one ticket per seat
    3. Commit
    4. Assemble the ticket email job and hand it to the notification pool

    Step 4 runs after the commit and can never undo it: any failure there is
    logged and counted as a failed notification.
    """

    def __init__(
        self,
        *,
        uow: AbstractUnitOfWork,
        notification_queue: INotificationQueue,
        tally: NotificationTally,
        clock: Clock = utc_now,
        metrics: ReservationMetrics | None = None,
    ) -> None:
        self.uow = uow
        self.notification_queue = notification_queue
        self.tally = tally
        self.clock = clock
        self.metrics = metrics

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        notification_queue: INotificationQueue = Depends(Provide[Container.notification_pool]),
        tally: NotificationTally = Depends(Provide[Container.notification_tally]),
        clock: Clock = Depends(Provide[Container.clock]),
        metrics: ReservationMetrics = Depends(Provide[Container.metrics]),
    ) -> Self:
        return cls(
            uow=uow,
            notification_queue=notification_queue,
            tally=tally,
            clock=clock,
            metrics=metrics,
        )

    @Logger.io
    async def update_payment(
        self, *, payment_id: int, status: str, transaction_id: Optional[str]
    ) -> Optional[int]:
        """
        Returns:
            booking id when this call turned the payment into success, else None

        Raises:
            ValidationError: status is not success or failed
            NotFoundError: payment missing
            SeatConflictError: a lapsed hold's seat was taken before payment landed
            PersistenceError: storage failure
        """
        try:
            new_status = PaymentStatus(status)
        except ValueError as e:
            raise ValidationError(f'unknown payment status: {status}') from e
        if not new_status.is_terminal:
            raise ValidationError('payment can only be settled as success or failed')

        paid_booking_id: Optional[int] = None
        async with self.uow:
            payment = await self.uow.payment_command_repo.get_for_update(payment_id=payment_id)
            if not payment:
                raise NotFoundError('payment not found')

            if not payment.is_pending:
                Logger.base.info(
                    f'🔁 [PAYMENT] Payment {payment_id} already {payment.status}, ignoring callback'
                )
                if self.metrics:
                    self.metrics.record_payment_callback(status=new_status, applied=False)
                return None

            settled = payment.settle(status=new_status, transaction_id=transaction_id)
            await self.uow.payment_command_repo.update(payment=settled)

            if new_status == PaymentStatus.SUCCESS:
                now = self.clock()
                seat_ids = await self.uow.booking_command_repo.mark_paid(
                    booking_id=payment.booking_id, now=now
                )
                await self.uow.ticket_repo.create_batch(
                    tickets=[
                        Ticket.issue(booking_id=payment.booking_id, seat_id=seat_id, now=now)
                        for seat_id in seat_ids
                    ]
                )
                paid_booking_id = payment.booking_id

            await self.uow.commit()

        if self.metrics:
            self.metrics.record_payment_callback(status=new_status, applied=True)
        Logger.base.info(f'💳 [PAYMENT] Payment {payment_id} settled as {new_status}')

        if paid_booking_id is not None:
            await self._enqueue_ticket_job(booking_id=paid_booking_id)
        return paid_booking_id

    async def _enqueue_ticket_job(self, *, booking_id: int) -> None:
        try:
            async with self.uow:
                job = await self.uow.ticket_repo.build_bundle_job(booking_id=booking_id)
            if job is None:
                Logger.base.warning(f'⚠️ [PAYMENT] No tickets to send for booking {booking_id}')
                self.tally.failed(kind=NotificationKind.TICKET_BUNDLE)
                return
            await self.notification_queue.submit(job)
        except Exception as e:
            # Payment is committed; a lost email is counted, not raised
            Logger.base.error(
                f'❌ [PAYMENT] Could not queue tickets for booking {booking_id}: '
                f'{type(e).__name__}: {e}'
            )
            self.tally.failed(kind=NotificationKind.TICKET_BUNDLE)
            return

        Logger.base.info(f'📨 [PAYMENT] Ticket email queued for booking {booking_id}')
