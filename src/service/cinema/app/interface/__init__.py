"""Application layer interfaces (Ports)"""

from src.service.cinema.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.cinema.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.cinema.app.interface.i_notification_queue import INotificationQueue
from src.service.cinema.app.interface.i_notification_sender import INotificationSender
from src.service.cinema.app.interface.i_payment_command_repo import IPaymentCommandRepo
from src.service.cinema.app.interface.i_qr_renderer import IQrRenderer
from src.service.cinema.app.interface.i_screening_query_repo import IScreeningQueryRepo
from src.service.cinema.app.interface.i_seat_query_repo import ISeatQueryRepo
from src.service.cinema.app.interface.i_ticket_repo import ITicketRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'INotificationQueue',
    'INotificationSender',
    'IPaymentCommandRepo',
    'IQrRenderer',
    'IScreeningQueryRepo',
    'ISeatQueryRepo',
    'ITicketRepo',
]
