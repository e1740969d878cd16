"""
Jobs handed to the notification worker pool.

A job is fully assembled before it is queued: workers never touch the database,
they only render attachments and deliver.
"""

from datetime import datetime
from typing import List, Optional

import attrs

from src.service.cinema.domain.enum.notification_kind import NotificationKind


@attrs.define(frozen=True)
class TicketLine:
    ticket_id: int
    seat_code: str
    qr_token: str


@attrs.define(frozen=True)
class TicketBundleJob:
    booking_id: int
    recipient_email: str
    recipient_name: str
    movie_title: str
    cinema_name: str
    studio_name: str
    start_time: datetime
    tickets: List[TicketLine] = attrs.field(factory=list)

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.TICKET_BUNDLE


@attrs.define(frozen=True)
class VerificationCodeJob:
    recipient_email: str
    recipient_name: str
    code: str
    expires_in_minutes: int = 5

    @property
    def kind(self) -> NotificationKind:
        return NotificationKind.VERIFICATION_CODE


NotificationJob = TicketBundleJob | VerificationCodeJob


@attrs.define(frozen=True)
class Attachment:
    filename: str
    content: bytes
    mime_type: str = 'image/png'
    content_id: Optional[str] = None
