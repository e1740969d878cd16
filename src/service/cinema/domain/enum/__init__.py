"""Cinema Domain Enums"""

from src.service.cinema.domain.enum.booking_status import BookingSeatStatus, BookingStatus
from src.service.cinema.domain.enum.notification_kind import NotificationKind
from src.service.cinema.domain.enum.payment_status import PaymentStatus
from src.service.cinema.domain.enum.seat_status import SeatStatus

__all__ = ['BookingSeatStatus', 'BookingStatus', 'NotificationKind', 'PaymentStatus', 'SeatStatus']
