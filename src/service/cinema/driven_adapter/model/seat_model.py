from sqlalchemy import ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class SeatModel(Base):
    __tablename__ = 'seat'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    studio_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('studio.id'), nullable=False, index=True
    )
    seat_code: Mapped[str] = mapped_column(String(10), nullable=False)

    __table_args__ = (UniqueConstraint('studio_id', 'seat_code', name='uq_seat_studio_code'),)
