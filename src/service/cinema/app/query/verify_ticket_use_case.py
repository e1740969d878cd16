from typing import Self

from fastapi import Depends

from src.platform.database.unit_of_work import AbstractUnitOfWork, get_unit_of_work
from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.ticket_verification import TicketVerification


class VerifyTicketUseCase:
    """Resolve the token encoded in a ticket QR code back to its ticket."""

    def __init__(self, *, uow: AbstractUnitOfWork) -> None:
        self.uow = uow

    @classmethod
    def depends(cls, uow: AbstractUnitOfWork = Depends(get_unit_of_work)) -> Self:
        return cls(uow=uow)

    @Logger.io
    async def verify_ticket(self, *, token: str) -> TicketVerification:
        if not token.strip():
            raise ValidationError('token is required')

        async with self.uow:
            verification = await self.uow.ticket_repo.get_verification(qr_token=token.strip())

        if not verification:
            raise NotFoundError('ticket not found')
        return verification
