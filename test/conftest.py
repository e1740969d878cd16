"""
Test Configuration and Fixtures

This module provides:
- Environment setup that must happen before application modules read settings
- A fresh SQLite database per test (tables created from the ORM metadata)
- Seed data: one user, cinema, studio with four seats, a screening and a payment method
- A movable clock so hold expiry is tested without sleeping

Architecture:
- Unit tests (test/**/*_unit_test.py): mock the unit of work, no database
- Integration tests: real SqlAlchemyUnitOfWork against the per-test database
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# core_setting.settings and the loguru sinks are built at import time
# =============================================================================
import os
from pathlib import Path


def _early_setup_test_environment() -> None:
    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DEBUG'] = 'false'
    os.environ['NOTIFICATION_BACKEND'] = 'console'
    os.environ['DATABASE_URL_OVERRIDE'] = 'sqlite+aiosqlite:///:memory:'
    os.environ.setdefault('BOOKING_HOLD_TTL_SECONDS', '600')


_early_setup_test_environment()

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import datetime, timedelta  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402

from src.platform.database.orm_db_setting import Database  # noqa: E402
from src.platform.database.unit_of_work import SqlAlchemyUnitOfWork  # noqa: E402
from src.service.cinema.driven_adapter.model import (  # noqa: E402
    CinemaModel,
    MovieModel,
    PaymentMethodModel,
    ScreeningModel,
    SeatModel,
    StudioModel,
    UserModel,
)
from test.test_constants import (  # noqa: E402
    CINEMA_NAME,
    CLOCK_START,
    MOVIE_DURATION_MINUTES,
    MOVIE_TITLE,
    PAYMENT_METHOD_NAME,
    SCREENING_STARTS_AFTER,
    SEAT_CODES,
    SEAT_PRICE,
    STUDIO_NAME,
    TEST_USER_EMAIL,
    TEST_USER_NAME,
)


class MovableClock:
    """Clock whose "now" only changes when a test moves it."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock() -> MovableClock:
    return MovableClock(CLOCK_START)


@pytest_asyncio.fixture
async def database(tmp_path: Path) -> AsyncGenerator[Database, None]:
    db = Database(url=f'sqlite+aiosqlite:///{tmp_path / "cinema_test.db"}')
    await db.create_tables()
    yield db
    await db.drop_tables()
    await db.dispose()


@pytest.fixture
def uow_factory(database: Database):
    """Each call builds an independent unit of work, like separate requests would."""

    def _factory() -> SqlAlchemyUnitOfWork:
        return SqlAlchemyUnitOfWork(session_factory=database.session_factory)

    return _factory


@pytest_asyncio.fixture
async def seeded(database: Database) -> dict[str, int]:
    """Ids of the seed rows: user, screening, seats (by code), studio and payment method."""
    async with database.session() as session:
        user = UserModel(email=TEST_USER_EMAIL, name=TEST_USER_NAME)
        cinema = CinemaModel(name=CINEMA_NAME, location='Downtown')
        movie = MovieModel(title=MOVIE_TITLE, duration_minutes=MOVIE_DURATION_MINUTES)
        session.add_all([user, cinema, movie])
        await session.flush()

        studio = StudioModel(cinema_id=cinema.id, name=STUDIO_NAME, type='regular', price=SEAT_PRICE)
        session.add(studio)
        await session.flush()

        seats = [SeatModel(studio_id=studio.id, seat_code=code) for code in SEAT_CODES]
        start_time = CLOCK_START + SCREENING_STARTS_AFTER
        screening = ScreeningModel(
            studio_id=studio.id,
            movie_id=movie.id,
            start_time=start_time,
            end_time=start_time + timedelta(minutes=MOVIE_DURATION_MINUTES),
        )
        method = PaymentMethodModel(name=PAYMENT_METHOD_NAME)
        session.add_all([*seats, screening, method])
        await session.flush()

        ids = {
            'user_id': user.id,
            'studio_id': studio.id,
            'screening_id': screening.id,
            'payment_method_id': method.id,
            **{f'seat_{seat.seat_code}': seat.id for seat in seats},
        }
        await session.commit()
    return ids
