from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class StudioModel(Base):
    __tablename__ = 'studio'

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    cinema_id: Mapped[int] = mapped_column(
        Integer, ForeignKey('cinema.id'), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False, default='regular')
    price: Mapped[int] = mapped_column(Integer, nullable=False)  # per seat
