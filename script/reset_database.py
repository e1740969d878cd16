#!/usr/bin/env python3
"""
Database Reset Script
Reset the database schema

Features:
1. Drop every table registered on the ORM metadata
2. Create them again, including the partial unique index on booking_seat

Notes:
- This script only resets the schema, it does not seed data
- To seed demo data, run `python script/seed_data.py`
"""

import asyncio

from src.platform.config.core_setting import settings
from src.platform.database.orm_db_setting import Database


async def main() -> None:
    database = Database()
    print(f'🗄️  Resetting {settings.DATABASE_URL_ASYNC.split("@")[-1]}')
    try:
        await database.drop_tables()
        print('🧹 Tables dropped')
        await database.create_tables()
        print('✅ Tables created')
    finally:
        await database.dispose()


if __name__ == '__main__':
    asyncio.run(main())
