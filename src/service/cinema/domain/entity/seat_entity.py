import attrs

from src.service.cinema.domain.enum.seat_status import SeatStatus


@attrs.define(frozen=True)
class Seat:
    id: int
    studio_id: int
    seat_code: str


@attrs.define(frozen=True)
class SeatAvailability:
    seat_id: int
    seat_code: str
    status: SeatStatus
