from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.cinema.domain.entity.payment_entity import Payment, PaymentMethod
from src.service.cinema.domain.enum.payment_status import PaymentStatus
from src.service.cinema.driven_adapter.model.payment_method_model import PaymentMethodModel
from src.service.cinema.driven_adapter.model.payment_model import PaymentModel


class PaymentCommandRepoImpl(IPaymentCommandRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @staticmethod
    def _to_entity(db_payment: PaymentModel) -> Payment:
        return Payment(
            id=db_payment.id,
            booking_id=db_payment.booking_id,
            payment_method_id=db_payment.payment_method_id,
            amount=db_payment.amount,
            status=PaymentStatus(db_payment.status),
            transaction_id=db_payment.transaction_id,
            created_at=db_payment.created_at,
            updated_at=db_payment.updated_at,
        )

    @Logger.io
    async def get_method(self, *, payment_method_id: int) -> Optional[PaymentMethod]:
        db_method = await self.session.get(PaymentMethodModel, payment_method_id)
        if not db_method:
            return None
        return PaymentMethod(id=db_method.id, name=db_method.name)

    @Logger.io
    async def list_methods(self) -> List[PaymentMethod]:
        result = await self.session.execute(
            select(PaymentMethodModel).order_by(PaymentMethodModel.id)
        )
        return [PaymentMethod(id=m.id, name=m.name) for m in result.scalars().all()]

    @Logger.io
    async def get_pending_for_booking(self, *, booking_id: int) -> Optional[Payment]:
        result = await self.session.execute(
            select(PaymentModel)
            .where(
                PaymentModel.booking_id == booking_id,
                PaymentModel.status == PaymentStatus.PENDING,
            )
            .order_by(PaymentModel.id)
            .limit(1)
        )
        db_payment = result.scalar_one_or_none()
        return self._to_entity(db_payment) if db_payment else None

    @Logger.io
    async def create(self, *, payment: Payment) -> Payment:
        db_payment = PaymentModel(
            booking_id=payment.booking_id,
            payment_method_id=payment.payment_method_id,
            amount=payment.amount,
            status=payment.status.value,
            transaction_id=payment.transaction_id,
        )
        self.session.add(db_payment)
        await self.session.flush()
        await self.session.refresh(db_payment)
        return self._to_entity(db_payment)

    @Logger.io
    async def get_for_update(self, *, payment_id: int) -> Optional[Payment]:
        result = await self.session.execute(
            select(PaymentModel).where(PaymentModel.id == payment_id).with_for_update()
        )
        db_payment = result.scalar_one_or_none()
        return self._to_entity(db_payment) if db_payment else None

    @Logger.io
    async def update(self, *, payment: Payment) -> Payment:
        db_payment = await self.session.get(PaymentModel, payment.id)
        if not db_payment:
            raise ValueError(f'Payment {payment.id} vanished inside its own transaction')

        db_payment.status = payment.status.value
        db_payment.transaction_id = payment.transaction_id
        await self.session.flush()
        await self.session.refresh(db_payment)
        return self._to_entity(db_payment)
