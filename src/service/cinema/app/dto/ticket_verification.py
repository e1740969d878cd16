from datetime import datetime

import attrs


@attrs.define(frozen=True)
class TicketVerification:
    ticket_id: int
    booking_id: int
    seat_code: str
    movie_title: str
    start_time: datetime
    issued_at: datetime
