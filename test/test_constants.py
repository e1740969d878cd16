"""
Test Constants - fixed seed values so assertions stay readable
"""

from datetime import datetime, timedelta, timezone


# ============================================================================
# Clock
# ============================================================================
CLOCK_START = datetime(2026, 1, 10, 10, 0, tzinfo=timezone.utc)
HOLD_TTL = timedelta(minutes=10)

# ============================================================================
# Seed data
# ============================================================================
TEST_USER_EMAIL = 'viewer@example.com'
TEST_USER_NAME = 'Test Viewer'

CINEMA_NAME = 'Grand Cinema'
STUDIO_NAME = 'Studio 1'
MOVIE_TITLE = 'The Long Night'
MOVIE_DURATION_MINUTES = 130
SEAT_PRICE = 50000
SEAT_CODES = ('A1', 'A2', 'A3', 'A4')

# Screening starts 8 hours after CLOCK_START, so the booking window is open at first
SCREENING_STARTS_AFTER = timedelta(hours=8)

PAYMENT_METHOD_NAME = 'Virtual Account'
