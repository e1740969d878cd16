from datetime import datetime
import secrets
from typing import Optional
import uuid

import attrs


def generate_qr_token() -> str:
    """128 random bits from the OS CSPRNG, rendered as a UUID string."""
    return str(uuid.UUID(bytes=secrets.token_bytes(16)))


@attrs.define
class Ticket:
    booking_id: int
    seat_id: int
    qr_token: str
    issued_at: datetime
    seat_code: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def issue(cls, *, booking_id: int, seat_id: int, now: datetime) -> 'Ticket':
        return cls(
            booking_id=booking_id,
            seat_id=seat_id,
            qr_token=generate_qr_token(),
            issued_at=now,
        )
