from fastapi import APIRouter, Depends, Query, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.app.query.list_booking_history_use_case import ListBookingHistoryUseCase
from src.service.cinema.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingDetailResponse,
    BookingHistoryItemResponse,
    BookingHistoryResponse,
    BookingResponse,
    PaginationResponse,
)


router = APIRouter()


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.create_booking(
        user_id=request.user_id,
        screening_id=request.screening_id,
        seat_ids=request.seat_ids,
    )

    if booking.id is None:
        raise ValueError('Booking ID should not be None after creation.')

    return BookingResponse(
        id=booking.id,
        user_id=booking.user_id,
        screening_id=booking.screening_id,
        status=booking.status.value,
        seat_ids=booking.seat_ids,
        expired_at=booking.expired_at,
        created_at=booking.created_at,
    )


@router.get('/history/{user_id}')
@Logger.io
async def list_booking_history(
    user_id: int,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    show_all: bool = Query(False, alias='all'),
    use_case: ListBookingHistoryUseCase = Depends(ListBookingHistoryUseCase.depends),
) -> BookingHistoryResponse:
    history = await use_case.list_history(
        user_id=user_id, page=page, limit=limit, show_all=show_all
    )
    return BookingHistoryResponse(
        items=[
            BookingHistoryItemResponse(
                id=item.id,
                movie_title=item.movie_title,
                cinema_name=item.cinema_name,
                start_time=item.start_time,
                seats=item.seat_codes,
                status=item.effective_status,
            )
            for item in history.items
        ],
        pagination=PaginationResponse(
            page=history.pagination.page,
            limit=history.pagination.limit,
            total=history.pagination.total,
            total_pages=history.pagination.total_pages,
        ),
    )


@router.get('/{booking_id}')
@Logger.io
async def get_booking(
    booking_id: int,
    use_case: GetBookingUseCase = Depends(GetBookingUseCase.depends),
) -> BookingDetailResponse:
    detail = await use_case.get_booking(booking_id=booking_id)
    return BookingDetailResponse(
        id=detail.id,
        user_id=detail.user_id,
        screening_id=detail.screening_id,
        movie_title=detail.movie_title,
        cinema_name=detail.cinema_name,
        studio_name=detail.studio_name,
        start_time=detail.start_time,
        seats=detail.seat_codes,
        status=detail.status,
        effective_status=detail.effective_status,
        total_price=detail.total_price,
        expired_at=detail.expired_at,
        created_at=detail.created_at,
    )
