from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.interface.i_screening_query_repo import IScreeningQueryRepo
from src.service.cinema.domain.entity.screening_entity import ScreeningWindow
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.screening_model import ScreeningModel


class ScreeningQueryRepoImpl(IScreeningQueryRepo):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    @Logger.io
    async def get_screening_window(
        self, *, screening_id: int, lock: bool = False
    ) -> Optional[ScreeningWindow]:
        stmt = (
            select(
                ScreeningModel.id,
                ScreeningModel.studio_id,
                ScreeningModel.movie_id,
                ScreeningModel.start_time,
                MovieModel.duration_minutes,
            )
            .join(MovieModel, MovieModel.id == ScreeningModel.movie_id)
            .where(ScreeningModel.id == screening_id, ScreeningModel.deleted_at.is_(None))
        )
        if lock:
            # FOR SHARE OF screening; SQLite has no row locks and drops the clause
            stmt = stmt.with_for_update(read=True, of=ScreeningModel)

        row = (await self.session.execute(stmt)).first()
        if row is None:
            return None

        return ScreeningWindow(
            screening_id=row.id,
            studio_id=row.studio_id,
            movie_id=row.movie_id,
            start_time=row.start_time,
            duration_minutes=row.duration_minutes,
        )
