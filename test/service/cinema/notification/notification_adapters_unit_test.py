"""
Unit tests for the notification adapters: email templates, QR renderer, SMTP and console senders
"""

from datetime import datetime, timezone
import smtplib
from unittest.mock import MagicMock, patch

import pytest

from src.platform.exception.exceptions import NotificationError
from src.service.cinema.app.dto.notification_job import (
    Attachment,
    TicketBundleJob,
    TicketLine,
    VerificationCodeJob,
)
from src.service.cinema.driven_adapter.notification.console_notification_sender import (
    ConsoleNotificationSender,
)
from src.service.cinema.driven_adapter.notification.email_template import (
    render_ticket_email,
    render_verification_email,
    ticket_verify_url,
)
from src.service.cinema.driven_adapter.notification.qr_renderer_impl import QrCodeRenderer
from src.service.cinema.driven_adapter.notification.smtp_notification_sender import (
    SmtpNotificationSender,
)


pytestmark = pytest.mark.unit

PNG_MAGIC = b'\x89PNG\r\n\x1a\n'


def _job(**overrides) -> TicketBundleJob:
    params = {
        'booking_id': 21,
        'recipient_email': 'viewer@example.com',
        'recipient_name': 'Viewer',
        'movie_title': 'The Long Night',
        'cinema_name': 'Grand Cinema',
        'studio_name': 'Studio 1',
        'start_time': datetime(2026, 1, 10, 18, 0, tzinfo=timezone.utc),
        'tickets': [
            TicketLine(ticket_id=1, seat_code='A1', qr_token='tok-1'),
            TicketLine(ticket_id=2, seat_code='A2', qr_token='tok-2'),
        ],
    }
    params.update(overrides)
    return TicketBundleJob(**params)


class TestEmailTemplate:
    def test_verify_url_strips_trailing_slash(self):
        assert ticket_verify_url('https://cinema.example/', 'abc') == (
            'https://cinema.example/tickets/verify?token=abc'
        )

    def test_ticket_email_lists_booking_details(self):
        html = render_ticket_email(_job())

        assert '#21' in html
        assert 'The Long Night' in html
        assert 'Grand Cinema' in html
        assert 'A1, A2' in html
        assert '10 January 2026' in html
        assert '18.00' in html

    def test_ticket_email_uses_display_timezone(self):
        html = render_ticket_email(_job(), timezone_name='Asia/Jakarta')

        assert '01.00' in html
        assert '11 January 2026' in html

    def test_user_supplied_text_is_escaped(self):
        html = render_ticket_email(_job(recipient_name='<script>x</script>'))

        assert '<script>' not in html
        assert '&lt;script&gt;' in html

    def test_verification_email_shows_code_and_expiry(self):
        html = render_verification_email(
            VerificationCodeJob(recipient_email='a@b.c', recipient_name='Ann', code='123456')
        )

        assert '123456' in html
        assert '5 minutes' in html


class TestQrCodeRenderer:
    def test_renders_png_of_requested_size(self):
        from io import BytesIO

        from PIL import Image

        png = QrCodeRenderer(size_px=128).render('https://cinema.example/tickets/verify?token=x')

        assert png.startswith(PNG_MAGIC)
        assert Image.open(BytesIO(png)).size == (128, 128)

    def test_empty_payload_rejected(self):
        with pytest.raises(ValueError):
            QrCodeRenderer().render('')


class TestConsoleNotificationSender:
    @pytest.mark.asyncio
    async def test_keeps_only_recent_emails(self):
        sender = ConsoleNotificationSender(debug=False, history_size=2)

        for index in range(3):
            sent = await sender.send(
                to=f'viewer{index}@example.com',
                subject='Your Ticket Is Ready',
                html_body='<p>hi</p>',
                attachments=[Attachment(filename='ticket-1-A1.png', content=PNG_MAGIC)],
            )
            assert sent is True

        assert [email['to'] for email in sender.sent_emails] == [
            'viewer1@example.com',
            'viewer2@example.com',
        ]
        assert sender.sent_emails[-1]['attachments'] == ['ticket-1-A1.png']


class TestSmtpNotificationSender:
    def setup_method(self):
        self.sender = SmtpNotificationSender(
            host='smtp.test',
            port=587,
            username='mailer',
            password='secret',
            sender='no-reply@cinema.test',
            use_tls=True,
        )

    @pytest.mark.asyncio
    async def test_sends_html_with_attachments(self):
        client = MagicMock()
        with patch('smtplib.SMTP') as smtp_cls:
            smtp_cls.return_value.__enter__.return_value = client

            sent = await self.sender.send(
                to='viewer@example.com',
                subject='Your Ticket Is Ready',
                html_body='<p>hi</p>',
                attachments=[Attachment(filename='ticket-1-A1.png', content=b'png')],
            )

        assert sent is True
        smtp_cls.assert_called_once_with('smtp.test', 587, timeout=10.0)
        client.starttls.assert_called_once()
        client.login.assert_called_once_with('mailer', 'secret')
        message = client.send_message.call_args.args[0]
        assert message['To'] == 'viewer@example.com'
        assert message['Subject'] == 'Your Ticket Is Ready'
        filenames = [part.get_filename() for part in message.iter_attachments()]
        assert filenames == ['ticket-1-A1.png']

    @pytest.mark.asyncio
    async def test_smtp_failure_becomes_notification_error(self):
        with patch('smtplib.SMTP') as smtp_cls:
            smtp_cls.return_value.__enter__.return_value.send_message.side_effect = (
                smtplib.SMTPRecipientsRefused({'viewer@example.com': (550, b'no such user')})
            )

            with pytest.raises(NotificationError):
                await self.sender.send(
                    to='viewer@example.com', subject='s', html_body='<p/>', attachments=[]
                )

    @pytest.mark.asyncio
    async def test_connection_refused_becomes_notification_error(self):
        with patch('smtplib.SMTP', side_effect=ConnectionRefusedError()):
            with pytest.raises(NotificationError):
                await self.sender.send(to='x@example.com', subject='s', html_body='', attachments=[])
