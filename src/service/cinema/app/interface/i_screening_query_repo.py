from abc import ABC, abstractmethod
from typing import Optional

from src.service.cinema.domain.entity.screening_entity import ScreeningWindow


class IScreeningQueryRepo(ABC):
    @abstractmethod
    async def get_screening_window(
        self, *, screening_id: int, lock: bool = False
    ) -> Optional[ScreeningWindow]:
        """
        Screening with its movie duration, None when missing or soft-deleted.

        lock=True takes a shared row lock so the screening cannot be removed while
        seats are being held against it.
        """
        pass
