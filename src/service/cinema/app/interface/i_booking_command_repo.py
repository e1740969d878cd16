from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.service.cinema.domain.entity.booking_entity import Booking


class IBookingCommandRepo(ABC):
    """Write side of booking and its seat holds. Runs inside the caller's UoW session."""

    @abstractmethod
    async def user_exists(self, *, user_id: int) -> bool:
        pass

    @abstractmethod
    async def release_lapsed_holds(
        self, *, screening_id: int, seat_ids: List[int], now: datetime
    ) -> int:
        """Free seat rows of lapsed pending holds or cancelled bookings. Returns rows released."""
        pass

    @abstractmethod
    async def create(self, *, booking: Booking) -> Booking:
        """
        Insert the booking and one hold row per seat.

        Raises:
            SeatConflictError: another active booking already holds one of the seats
        """
        pass

    @abstractmethod
    async def get_for_update(self, *, booking_id: int) -> Optional[Booking]:
        pass

    @abstractmethod
    async def mark_paid(self, *, booking_id: int, now: datetime) -> List[int]:
        """Move booking and its seat rows to paid; returns the booked seat ids."""
        pass
