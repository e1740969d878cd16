"""Application layer DTOs"""

from src.service.cinema.app.dto.booking_detail import (
    BookingDetail,
    BookingHistoryItem,
    BookingHistoryPage,
    Pagination,
)
from src.service.cinema.app.dto.notification_job import (
    Attachment,
    NotificationJob,
    TicketBundleJob,
    TicketLine,
    VerificationCodeJob,
)
from src.service.cinema.app.dto.payment_created import PaymentCreated
from src.service.cinema.app.dto.ticket_verification import TicketVerification

__all__ = [
    'Attachment',
    'BookingDetail',
    'BookingHistoryItem',
    'BookingHistoryPage',
    'NotificationJob',
    'Pagination',
    'PaymentCreated',
    'TicketBundleJob',
    'TicketLine',
    'TicketVerification',
    'VerificationCodeJob',
]
