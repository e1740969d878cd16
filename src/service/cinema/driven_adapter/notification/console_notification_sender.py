"""Notification sender that logs instead of delivering, for local runs and tests."""

from collections import deque
from datetime import datetime, timezone
from typing import Deque, List

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.notification_job import Attachment
from src.service.cinema.app.interface.i_notification_sender import INotificationSender


class ConsoleNotificationSender(INotificationSender):
    def __init__(self, debug: bool = True, history_size: int = 100) -> None:
        self.debug = debug
        # Most recent emails only, for tests
        self.sent_emails: Deque[dict] = deque(maxlen=history_size)

    @Logger.io
    async def send(
        self,
        *,
        to: str,
        subject: str,
        html_body: str,
        attachments: List[Attachment],
    ) -> bool:
        email_data = {
            'to': to,
            'subject': subject,
            'body': html_body,
            'attachments': [a.filename for a in attachments],
            'sent_at': datetime.now(timezone.utc),
        }
        self.sent_emails.append(email_data)

        if self.debug:
            Logger.base.info(
                f'📧 [MOCK-EMAIL] To: {to} | Subject: {subject} | '
                f'Attachments: {", ".join(email_data["attachments"]) or "-"}'
            )
        return True
