#!/usr/bin/env python3
"""
Database Seed Script
Populate demo data into the database

Features:
1. Create Users - a couple of viewers to book with
2. Create Cinemas - each with studios and a row/column seat grid
3. Create Screenings - every movie in every studio, today and the next days
4. Create Payment Methods

Notes:
- Cinemas, movies, studios and screenings have no API; this script is how they get in
- Safe to run on an empty schema only; run script/reset_database.py first to start over
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
import os
import string
from typing import List

from src.platform.database.orm_db_setting import Database
from src.service.cinema.driven_adapter.model import (
    CinemaModel,
    MovieModel,
    PaymentMethodModel,
    ScreeningModel,
    SeatModel,
    StudioModel,
    UserModel,
)


SEAT_ROWS = int(os.getenv('SEAT_ROWS', '5'))
SEAT_COLS = int(os.getenv('SEAT_COLS', '10'))
SCREENING_DAYS = int(os.getenv('SCREENING_DAYS', '3'))
SHOW_HOURS = (13, 16, 19)


@dataclass
class StudioConfig:
    """Studio seed configuration"""

    name: str
    type: str
    price: int


@dataclass
class CinemaConfig:
    """Cinema seed configuration"""

    name: str
    location: str
    studios: List[StudioConfig]


TEST_USERS = [
    ('viewer@t.com', 'init viewer'),
    ('viewer_1@t.com', 'Load Test User'),
]

MOVIES = [
    ('The Long Night', 130),
    ('Paper Boats', 95),
    ('Orbit Nine', 148),
]

CINEMAS = [
    CinemaConfig(
        name='Grand Cinema',
        location='Downtown',
        studios=[
            StudioConfig(name='Studio 1', type='regular', price=50000),
            StudioConfig(name='Studio 2', type='premiere', price=90000),
        ],
    ),
    CinemaConfig(
        name='Riverside Cinema',
        location='Riverside Mall',
        studios=[StudioConfig(name='Studio 1', type='regular', price=45000)],
    ),
]

PAYMENT_METHODS = ['Virtual Account', 'Credit Card', 'E-Wallet']


def _seat_codes(rows: int, cols: int) -> List[str]:
    return [f'{row}{col}' for row in string.ascii_uppercase[:rows] for col in range(1, cols + 1)]


def _show_times(days: int) -> List[datetime]:
    today = datetime.now(timezone.utc).replace(hour=0, minute=0, second=0, microsecond=0)
    return [
        today + timedelta(days=day, hours=hour) for day in range(days) for hour in SHOW_HOURS
    ]


async def seed(database: Database) -> None:
    await database.create_tables()

    async with database.session() as session:
        print('👤 Creating users...')
        session.add_all([UserModel(email=email, name=name) for email, name in TEST_USERS])

        print('🎬 Creating movies...')
        movies = [MovieModel(title=title, duration_minutes=minutes) for title, minutes in MOVIES]
        session.add_all(movies)

        print('💳 Creating payment methods...')
        session.add_all([PaymentMethodModel(name=name) for name in PAYMENT_METHODS])
        await session.flush()

        studios: List[StudioModel] = []
        for cinema_config in CINEMAS:
            print(f'🏢 Creating cinema: {cinema_config.name}')
            cinema = CinemaModel(name=cinema_config.name, location=cinema_config.location)
            session.add(cinema)
            await session.flush()

            for studio_config in cinema_config.studios:
                studio = StudioModel(
                    cinema_id=cinema.id,
                    name=studio_config.name,
                    type=studio_config.type,
                    price=studio_config.price,
                )
                session.add(studio)
                await session.flush()
                studios.append(studio)

                session.add_all(
                    [
                        SeatModel(studio_id=studio.id, seat_code=code)
                        for code in _seat_codes(SEAT_ROWS, SEAT_COLS)
                    ]
                )

        print('🗓️  Creating screenings...')
        screening_count = 0
        for studio in studios:
            for index, start_time in enumerate(_show_times(SCREENING_DAYS)):
                movie = movies[index % len(movies)]
                session.add(
                    ScreeningModel(
                        studio_id=studio.id,
                        movie_id=movie.id,
                        start_time=start_time,
                        end_time=start_time + timedelta(minutes=movie.duration_minutes),
                    )
                )
                screening_count += 1

        await session.commit()

    print(
        f'✅ Seeded {len(TEST_USERS)} users, {len(CINEMAS)} cinemas, {len(studios)} studios '
        f'({SEAT_ROWS * SEAT_COLS} seats each), {screening_count} screenings'
    )


async def main() -> None:
    database = Database()
    try:
        await seed(database)
    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
