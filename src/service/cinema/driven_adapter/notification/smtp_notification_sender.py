from email.message import EmailMessage
import smtplib
from typing import List

import anyio
import anyio.to_thread

from src.platform.exception.exceptions import NotificationError
from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.dto.notification_job import Attachment
from src.service.cinema.app.interface.i_notification_sender import INotificationSender


class SmtpNotificationSender(INotificationSender):
    """
    HTML email over SMTP (STARTTLS when use_tls).

    smtplib blocks, so each delivery runs in a worker thread. One connection per
    email; no pooling, no retry.
    """

    def __init__(
        self,
        *,
        host: str,
        port: int,
        username: str,
        password: str,
        sender: str,
        use_tls: bool = True,
        timeout: float = 10.0,
    ) -> None:
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.sender = sender
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(
        self, *, to: str, subject: str, html_body: str, attachments: List[Attachment]
    ) -> EmailMessage:
        message = EmailMessage()
        message['From'] = self.sender
        message['To'] = to
        message['Subject'] = subject
        message.set_content('This email requires an HTML capable client.')
        message.add_alternative(html_body, subtype='html')

        for attachment in attachments:
            maintype, _, subtype = attachment.mime_type.partition('/')
            message.add_attachment(
                attachment.content,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )
        return message

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as client:
            if self.use_tls:
                client.starttls()
            if self.username:
                client.login(self.username, self.password)
            client.send_message(message)

    @Logger.io
    async def send(
        self,
        *,
        to: str,
        subject: str,
        html_body: str,
        attachments: List[Attachment],
    ) -> bool:
        message = self._build_message(
            to=to, subject=subject, html_body=html_body, attachments=attachments
        )
        try:
            await anyio.to_thread.run_sync(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            raise NotificationError(f'SMTP delivery to {to} failed: {e}') from e

        Logger.base.info(f'📧 [SMTP] Sent "{subject}" to {to}')
        return True
