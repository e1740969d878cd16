from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.service.cinema.app.dto.booking_detail import BookingDetail, BookingHistoryItem


class IBookingQueryRepo(ABC):
    """Repository interface for booking read operations"""

    @abstractmethod
    async def get_detail(self, *, booking_id: int) -> Optional[BookingDetail]:
        """Booking joined with screening, movie, studio, cinema and seat codes."""
        pass

    @abstractmethod
    async def list_history(
        self, *, user_id: int, offset: int, limit: Optional[int]
    ) -> Tuple[List[BookingHistoryItem], int]:
        """
        A user's bookings, latest screening first, plus the total count.

        limit=None returns every row.
        """
        pass
