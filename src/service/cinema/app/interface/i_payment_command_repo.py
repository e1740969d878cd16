from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.payment_entity import Payment, PaymentMethod


class IPaymentCommandRepo(ABC):
    @abstractmethod
    async def get_method(self, *, payment_method_id: int) -> Optional[PaymentMethod]:
        pass

    @abstractmethod
    async def list_methods(self) -> List[PaymentMethod]:
        pass

    @abstractmethod
    async def get_pending_for_booking(self, *, booking_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    async def create(self, *, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def get_for_update(self, *, payment_id: int) -> Optional[Payment]:
        pass

    @abstractmethod
    async def update(self, *, payment: Payment) -> Payment:
        pass
