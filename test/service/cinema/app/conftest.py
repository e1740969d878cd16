from unittest.mock import AsyncMock, MagicMock

import pytest

from src.service.cinema.domain.entity.screening_entity import ScreeningWindow
from test.test_constants import CLOCK_START, MOVIE_DURATION_MINUTES, SCREENING_STARTS_AFTER


@pytest.fixture
def mock_uow() -> AsyncMock:
    """Unit of work whose repositories are all AsyncMocks; `async with` returns it unchanged."""
    uow = AsyncMock()
    uow.booking_command_repo = AsyncMock()
    uow.booking_query_repo = AsyncMock()
    uow.screening_query_repo = AsyncMock()
    uow.seat_query_repo = AsyncMock()
    uow.payment_command_repo = AsyncMock()
    uow.ticket_repo = AsyncMock()
    return uow


@pytest.fixture
def mock_metrics() -> MagicMock:
    return MagicMock()


@pytest.fixture
def open_window() -> ScreeningWindow:
    return ScreeningWindow(
        screening_id=1,
        studio_id=10,
        movie_id=100,
        start_time=CLOCK_START + SCREENING_STARTS_AFTER,
        duration_minutes=MOVIE_DURATION_MINUTES,
    )
