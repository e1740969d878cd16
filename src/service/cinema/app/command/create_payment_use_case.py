from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.types.clock import Clock, utc_now
from src.service.cinema.app.dto.payment_created import PaymentCreated
from src.service.cinema.domain.entity.payment_entity import Payment


class CreatePaymentUseCase:
    """
    Start (or resume) payment for a booking.

    The booking row is locked FOR UPDATE for the whole check-then-insert, so two
    concurrent requests for the same booking end up with one pending payment.
    """

    def __init__(self, *, uow: AbstractUnitOfWork, clock: Clock = utc_now) -> None:
        self.uow = uow
        self.clock = clock

    @classmethod
    @inject
    def depends(
        cls,
        uow: AbstractUnitOfWork = Depends(get_unit_of_work),
        clock: Clock = Depends(Provide[Container.clock]),
    ) -> Self:
        return cls(uow=uow, clock=clock)

    @Logger.io
    async def create_payment(self, *, booking_id: int, method_id: int, amount: int) -> PaymentCreated:
        """
        Raises:
            ValidationError: amount or method id not positive
            NotFoundError: booking or payment method missing
            BookingCancelledError: booking was cancelled
            BookingExpiredError: pending hold lapsed
            PersistenceError: storage failure
        """
        payment = Payment.create(booking_id=booking_id, payment_method_id=method_id, amount=amount)

        async with self.uow:
            booking = await self.uow.booking_command_repo.get_for_update(booking_id=booking_id)
            if not booking:
                raise NotFoundError('booking not found')
            booking.validate_can_create_payment(now=self.clock())

            method = await self.uow.payment_command_repo.get_method(payment_method_id=method_id)
            if not method:
                raise NotFoundError('payment method not found')

            existing = await self.uow.payment_command_repo.get_pending_for_booking(
                booking_id=booking_id
            )
            if existing and existing.id is not None:
                Logger.base.info(
                    f'🔁 [PAYMENT] Booking {booking_id} already has pending payment {existing.id}'
                )
                return PaymentCreated(payment_id=existing.id, reused=True)

            created = await self.uow.payment_command_repo.create(payment=payment)
            await self.uow.commit()

        Logger.base.info(f'💳 [PAYMENT] Created payment {created.id} for booking {booking_id}')
        return PaymentCreated(payment_id=created.id or 0, reused=False)
