from typing import List, Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.logging.loguru_io import Logger
from src.service.cinema.domain.entity.payment_entity import PaymentMethod


class ListPaymentMethodsUseCase:
    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def list_payment_methods(self) -> List[PaymentMethod]:
        async with self.uow:
            return await self.uow.payment_command_repo.list_methods()
