from datetime import datetime
from typing import List, Optional

import attrs


@attrs.define(frozen=True)
class BookingDetail:
    id: int
    user_id: int
    screening_id: int
    movie_title: str
    cinema_name: str
    studio_name: str
    start_time: datetime
    seat_codes: List[str]
    status: str
    total_price: int
    expired_at: datetime
    created_at: Optional[datetime] = None
    effective_status: str = ''  # filled in against the clock by the use case


@attrs.define(frozen=True)
class BookingHistoryItem:
    id: int
    movie_title: str
    cinema_name: str
    start_time: datetime
    seat_codes: List[str]
    status: str
    expired_at: datetime
    effective_status: str = ''


@attrs.define(frozen=True)
class Pagination:
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.total == 0 or self.limit <= 0:
            return 1 if self.total else 0
        return (self.total + self.limit - 1) // self.limit


@attrs.define(frozen=True)
class BookingHistoryPage:
    items: List[BookingHistoryItem]
    pagination: Pagination
