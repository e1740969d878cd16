from datetime import datetime

from pydantic import BaseModel


class TicketVerifyResponse(BaseModel):
    ticket_id: int
    booking_id: int
    seat_code: str
    movie_title: str
    start_time: datetime
    issued_at: datetime
