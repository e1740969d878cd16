from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.list_seats_use_case import ListSeatsUseCase
from src.service.cinema.driving_adapter.http_controller.schema.seat_schema import SeatResponse


router = APIRouter()


@router.get('/{screening_id}/seats')
@Logger.io
async def list_seats(
    screening_id: int,
    use_case: ListSeatsUseCase = Depends(ListSeatsUseCase.depends),
) -> List[SeatResponse]:
    seats = await use_case.list_seats(screening_id=screening_id)
    return [
        SeatResponse(seat_id=seat.seat_id, seat_code=seat.seat_code, status=seat.status.value)
        for seat in seats
    ]
