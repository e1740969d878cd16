from fastapi import APIRouter, Depends, Query

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.query.verify_ticket_use_case import VerifyTicketUseCase
from src.service.cinema.driving_adapter.http_controller.schema.ticket_schema import (
    TicketVerifyResponse,
)


router = APIRouter()


@router.get('/verify')
@Logger.io
async def verify_ticket(
    token: str = Query(..., min_length=1),
    use_case: VerifyTicketUseCase = Depends(VerifyTicketUseCase.depends),
) -> TicketVerifyResponse:
    verification = await use_case.verify_ticket(token=token)
    return TicketVerifyResponse(
        ticket_id=verification.ticket_id,
        booking_id=verification.booking_id,
        seat_code=verification.seat_code,
        movie_title=verification.movie_title,
        start_time=verification.start_time,
        issued_at=verification.issued_at,
    )
