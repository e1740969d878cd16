from abc import ABC, abstractmethod
from datetime import datetime
from typing import List

from src.service.cinema.domain.entity.seat_entity import Seat, SeatAvailability


class ISeatQueryRepo(ABC):
    @abstractmethod
    async def list_seats_for_studio(self, *, studio_id: int) -> List[Seat]:
        pass

    @abstractmethod
    async def list_seat_availability(
        self, *, screening_id: int, studio_id: int, now: datetime
    ) -> List[SeatAvailability]:
        """
        Every seat of the studio. Booked when held by a paid booking or by a
        pending booking whose expired_at is still ahead of now.
        """
        pass
