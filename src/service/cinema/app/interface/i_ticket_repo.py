from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.app.dto.notification_job import TicketBundleJob
from src.service.cinema.app.dto.ticket_verification import TicketVerification
from src.service.cinema.domain.entity.ticket_entity import Ticket


class ITicketRepo(ABC):
    @abstractmethod
    async def create_batch(self, *, tickets: List[Ticket]) -> List[Ticket]:
        pass

    @abstractmethod
    async def list_by_booking(self, *, booking_id: int) -> List[Ticket]:
        pass

    @abstractmethod
    async def get_verification(self, *, qr_token: str) -> Optional[TicketVerification]:
        pass

    @abstractmethod
    async def build_bundle_job(self, *, booking_id: int) -> Optional[TicketBundleJob]:
        """Everything the ticket email needs, read in one go. None when no tickets exist."""
        pass
