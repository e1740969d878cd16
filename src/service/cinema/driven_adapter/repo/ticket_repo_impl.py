from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.notification_job import TicketBundleJob, TicketLine
from src.service.cinema.app.dto.ticket_verification import TicketVerification
from src.service.cinema.app.interface.i_ticket_repo import ITicketRepo
from src.service.cinema.domain.entity.ticket_entity import Ticket
from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.cinema_model import CinemaModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.screening_model import ScreeningModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.studio_model import StudioModel
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel
from src.service.cinema.driven_adapter.model.user_model import UserModel


class TicketRepoImpl(ITicketRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def create_batch(self, *, tickets: List[Ticket]) -> List[Ticket]:
        db_tickets = [
            TicketModel(
                booking_id=ticket.booking_id,
                seat_id=ticket.seat_id,
                qr_token=ticket.qr_token,
                issued_at=ticket.issued_at,
            )
            for ticket in tickets
        ]
        self.session.add_all(db_tickets)
        await self.session.flush()

        return [
            Ticket(
                id=db_ticket.id,
                booking_id=db_ticket.booking_id,
                seat_id=db_ticket.seat_id,
                qr_token=db_ticket.qr_token,
                issued_at=db_ticket.issued_at,
            )
            for db_ticket in db_tickets
        ]

    @Logger.io
    async def list_by_booking(self, *, booking_id: int) -> List[Ticket]:
        result = await self.session.execute(
            select(TicketModel, SeatModel.seat_code)
            .join(SeatModel, SeatModel.id == TicketModel.seat_id)
            .where(TicketModel.booking_id == booking_id)
            .order_by(SeatModel.seat_code)
        )
        return [
            Ticket(
                id=db_ticket.id,
                booking_id=db_ticket.booking_id,
                seat_id=db_ticket.seat_id,
                qr_token=db_ticket.qr_token,
                issued_at=db_ticket.issued_at,
                seat_code=seat_code,
            )
            for db_ticket, seat_code in result.all()
        ]

    @Logger.io
    async def get_verification(self, *, qr_token: str) -> Optional[TicketVerification]:
        result = await self.session.execute(
            select(TicketModel, SeatModel.seat_code, MovieModel.title, ScreeningModel.start_time)
            .join(SeatModel, SeatModel.id == TicketModel.seat_id)
            .join(BookingModel, BookingModel.id == TicketModel.booking_id)
            .join(ScreeningModel, ScreeningModel.id == BookingModel.screening_id)
            .join(MovieModel, MovieModel.id == ScreeningModel.movie_id)
            .where(TicketModel.qr_token == qr_token)
        )
        row = result.first()
        if row is None:
            return None

        db_ticket, seat_code, movie_title, start_time = row
        return TicketVerification(
            ticket_id=db_ticket.id,
            booking_id=db_ticket.booking_id,
            seat_code=seat_code,
            movie_title=movie_title,
            start_time=start_time,
            issued_at=db_ticket.issued_at,
        )

    @Logger.io
    async def build_bundle_job(self, *, booking_id: int) -> Optional[TicketBundleJob]:
        result = await self.session.execute(
            select(
                UserModel.email,
                UserModel.name,
                MovieModel.title,
                CinemaModel.name,
                StudioModel.name,
                ScreeningModel.start_time,
            )
            .select_from(BookingModel)
            .join(UserModel, UserModel.id == BookingModel.user_id)
            .join(ScreeningModel, ScreeningModel.id == BookingModel.screening_id)
            .join(MovieModel, MovieModel.id == ScreeningModel.movie_id)
            .join(StudioModel, StudioModel.id == ScreeningModel.studio_id)
            .join(CinemaModel, CinemaModel.id == StudioModel.cinema_id)
            .where(BookingModel.id == booking_id)
        )
        row = result.first()
        tickets = await self.list_by_booking(booking_id=booking_id)
        if row is None or not tickets:
            return None

        email, user_name, movie_title, cinema_name, studio_name, start_time = row
        return TicketBundleJob(
            booking_id=booking_id,
            recipient_email=email,
            recipient_name=user_name,
            movie_title=movie_title,
            cinema_name=cinema_name,
            studio_name=studio_name,
            start_time=start_time,
            tickets=[
                TicketLine(
                    ticket_id=ticket.id or 0,
                    seat_code=ticket.seat_code or '',
                    qr_token=ticket.qr_token,
                )
                for ticket in tickets
            ],
        )
