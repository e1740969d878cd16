from datetime import datetime, timedelta

import attrs

from src.platform.types.clock import ensure_utc


@attrs.define(frozen=True)
class ScreeningWindow:
    """
    What the reservation core needs to know about a screening.

    Bookings are accepted while now < start_time + movie duration.
    """

    screening_id: int
    studio_id: int
    movie_id: int
    start_time: datetime
    duration_minutes: int

    @property
    def closes_at(self) -> datetime:
        return ensure_utc(self.start_time) + timedelta(minutes=self.duration_minutes)

    def is_open(self, now: datetime) -> bool:
        return ensure_utc(now) < self.closes_at
