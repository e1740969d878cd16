from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class TicketModel(Base):
    __tablename__ = 'ticket'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('booking.id'), nullable=False, index=True
    )
    seat_id: Mapped[int] = mapped_column(Integer, ForeignKey('seat.id'), nullable=False)
    qr_token: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    issued_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (UniqueConstraint('booking_id', 'seat_id', name='uq_ticket_booking_seat'),)
