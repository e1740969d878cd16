from pydantic import BaseModel


class SeatResponse(BaseModel):
    model_config = {
        'json_schema_extra': {'example': {'seat_id': 1, 'seat_code': 'A1', 'status': 'available'}},
    }

    seat_id: int
    seat_code: str
    status: str  # available / booked
