"""
Integration tests for booking reads: detail and paginated history
"""

import pytest

from src.platform.exception.exceptions import NotFoundError, ValidationError
from src.service.cinema.app.query.get_booking_use_case import GetBookingUseCase
from src.service.cinema.app.query.list_booking_history_use_case import ListBookingHistoryUseCase
from src.service.cinema.app.query.list_payment_methods_use_case import ListPaymentMethodsUseCase
from test.test_constants import (
    CINEMA_NAME,
    MOVIE_TITLE,
    PAYMENT_METHOD_NAME,
    SEAT_PRICE,
    STUDIO_NAME,
)


@pytest.mark.integration
class TestGetBooking:
    @pytest.mark.asyncio
    async def test_detail_joins_screening_context(self, scenario):
        booking = await scenario.book('A3', 'A1')

        detail = await GetBookingUseCase(uow=scenario.uow_factory(), clock=scenario.clock).get_booking(
            booking_id=booking.id
        )

        assert detail.movie_title == MOVIE_TITLE
        assert detail.cinema_name == CINEMA_NAME
        assert detail.studio_name == STUDIO_NAME
        assert detail.seat_codes == ['A1', 'A3']
        assert detail.total_price == 2 * SEAT_PRICE
        assert detail.status == 'pending'
        assert detail.effective_status == 'pending'

    @pytest.mark.asyncio
    async def test_missing_booking(self, scenario):
        with pytest.raises(NotFoundError):
            await GetBookingUseCase(uow=scenario.uow_factory()).get_booking(booking_id=1)


@pytest.mark.integration
class TestBookingHistory:
    @pytest.mark.asyncio
    async def test_pages_newest_first(self, scenario):
        ids = [(await scenario.book(code)).id for code in ('A1', 'A2', 'A3', 'A4')]
        use_case = ListBookingHistoryUseCase(uow=scenario.uow_factory(), clock=scenario.clock)

        first = await use_case.list_history(user_id=scenario.ids['user_id'], page=1, limit=3)
        second = await use_case.list_history(user_id=scenario.ids['user_id'], page=2, limit=3)

        assert [item.id for item in first.items] == list(reversed(ids))[:3]
        assert [item.id for item in second.items] == [ids[0]]
        assert first.pagination.total == 4
        assert first.pagination.total_pages == 2
        assert second.items[0].seat_codes == ['A1']

    @pytest.mark.asyncio
    async def test_show_all_ignores_paging(self, scenario):
        for code in ('A1', 'A2', 'A3'):
            await scenario.book(code)

        history = await ListBookingHistoryUseCase(
            uow=scenario.uow_factory(), clock=scenario.clock
        ).list_history(user_id=scenario.ids['user_id'], page=1, limit=1, show_all=True)

        assert len(history.items) == 3
        assert history.pagination.limit == 3

    @pytest.mark.asyncio
    async def test_lapsed_holds_listed_as_expired(self, short_hold):
        await short_hold.book('A1')
        short_hold.clock.advance(seconds=1)

        history = await ListBookingHistoryUseCase(
            uow=short_hold.uow_factory(), clock=short_hold.clock
        ).list_history(user_id=short_hold.ids['user_id'])

        assert history.items[0].status == 'pending'
        assert history.items[0].effective_status == 'expired'

    @pytest.mark.asyncio
    async def test_user_without_bookings(self, scenario):
        history = await ListBookingHistoryUseCase(uow=scenario.uow_factory()).list_history(user_id=999)

        assert history.items == []
        assert history.pagination.total == 0
        assert history.pagination.total_pages == 0

    @pytest.mark.asyncio
    async def test_page_must_be_positive(self, scenario):
        with pytest.raises(ValidationError):
            await ListBookingHistoryUseCase(uow=scenario.uow_factory()).list_history(
                user_id=1, page=0
            )


@pytest.mark.integration
class TestListPaymentMethods:
    @pytest.mark.asyncio
    async def test_lists_seeded_methods(self, scenario):
        methods = await ListPaymentMethodsUseCase(uow=scenario.uow_factory()).list_payment_methods()

        assert [method.name for method in methods] == [PAYMENT_METHOD_NAME]
