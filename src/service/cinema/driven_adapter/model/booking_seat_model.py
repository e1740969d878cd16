from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from src.platform.database.orm_db_setting import Base


# Only rows that still hold their seat take part in uniqueness; released rows stay as history
_HOLDING = text("booking_status IN ('pending', 'paid')")


class BookingSeatModel(Base):
    __tablename__ = 'booking_seat'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    booking_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('booking.id'), nullable=False, index=True
    )
    screening_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('screening.id'), nullable=False
    )
    seat_id: Mapped[int] = mapped_column(Integer, ForeignKey('seat.id'), nullable=False)
    booking_status: Mapped[str] = mapped_column(String(20), default='pending', nullable=False)
    hold_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        Index(
            'uq_booking_seat_active',
            'screening_id',
            'seat_id',
            unique=True,
            postgresql_where=_HOLDING,
            sqlite_where=_HOLDING,
        ),
    )
