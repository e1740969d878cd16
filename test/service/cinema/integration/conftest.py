from datetime import timedelta
from typing import Callable, List
from unittest.mock import AsyncMock

import pytest
from sqlalchemy import func, select

from src.platform.database.orm_db_setting import Database
from src.platform.metrics.reservation_metrics import NotificationTally
from src.service.cinema.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.cinema.app.command.create_payment_use_case import CreatePaymentUseCase
from src.service.cinema.app.command.update_payment_use_case import UpdatePaymentUseCase
from src.service.cinema.domain.entity.booking_entity import Booking
from test.test_constants import HOLD_TTL


class CinemaScenario:
    """Wires use cases to fresh units of work, one per call, like separate requests."""

    def __init__(self, *, uow_factory: Callable, clock, database: Database, seeded: dict) -> None:
        self.uow_factory = uow_factory
        self.clock = clock
        self.database = database
        self.ids = seeded
        self.hold_ttl = HOLD_TTL
        self.notification_queue = AsyncMock()
        self.tally = NotificationTally()

    def seat(self, code: str) -> int:
        return self.ids[f'seat_{code}']

    async def book(self, *codes: str, user_id: int | None = None) -> Booking:
        use_case = CreateBookingUseCase(
            uow=self.uow_factory(), hold_ttl=self.hold_ttl, clock=self.clock
        )
        return await use_case.create_booking(
            user_id=user_id or self.ids['user_id'],
            screening_id=self.ids['screening_id'],
            seat_ids=[self.seat(code) for code in codes],
        )

    async def pay(self, booking_id: int, amount: int = 100000):
        use_case = CreatePaymentUseCase(uow=self.uow_factory(), clock=self.clock)
        return await use_case.create_payment(
            booking_id=booking_id, method_id=self.ids['payment_method_id'], amount=amount
        )

    async def callback(self, payment_id: int, status: str, transaction_id: str | None):
        use_case = UpdatePaymentUseCase(
            uow=self.uow_factory(),
            notification_queue=self.notification_queue,
            tally=self.tally,
            clock=self.clock,
        )
        return await use_case.update_payment(
            payment_id=payment_id, status=status, transaction_id=transaction_id
        )

    async def count(self, model, *criteria) -> int:
        async with self.database.session() as session:
            return await session.scalar(select(func.count()).select_from(model).where(*criteria)) or 0

    async def rows(self, model, *criteria) -> List:
        async with self.database.session() as session:
            result = await session.execute(select(model).where(*criteria).order_by(model.id))
            return list(result.scalars().all())


@pytest.fixture
def scenario(uow_factory, clock, database, seeded) -> CinemaScenario:
    return CinemaScenario(uow_factory=uow_factory, clock=clock, database=database, seeded=seeded)


@pytest.fixture
def short_hold(scenario) -> CinemaScenario:
    scenario.hold_ttl = timedelta(seconds=1)
    return scenario
