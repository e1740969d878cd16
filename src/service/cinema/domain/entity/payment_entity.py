from datetime import datetime
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.enum.payment_status import PaymentStatus


@attrs.define(frozen=True)
class PaymentMethod:
    id: int
    name: str


@attrs.define
class Payment:
    booking_id: int
    payment_method_id: int
    amount: int
    status: PaymentStatus = PaymentStatus.PENDING
    transaction_id: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(cls, *, booking_id: int, payment_method_id: int, amount: int) -> 'Payment':
        if amount <= 0:
            raise ValidationError('amount must be greater than zero')
        if payment_method_id <= 0:
            raise ValidationError('payment_method is required')
        return cls(
            booking_id=booking_id,
            payment_method_id=payment_method_id,
            amount=amount,
            status=PaymentStatus.PENDING,
        )

    @property
    def is_pending(self) -> bool:
        return self.status == PaymentStatus.PENDING

    @Logger.io
    def settle(self, *, status: PaymentStatus, transaction_id: Optional[str]) -> 'Payment':
        """Move a pending payment to a terminal status reported by the provider."""
        if not status.is_terminal:
            raise ValidationError('payment can only be settled as success or failed')
        return attrs.evolve(self, status=status, transaction_id=transaction_id)
