"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.cinema.driven_adapter.model.booking_model import BookingModel
from src.service.cinema.driven_adapter.model.booking_seat_model import BookingSeatModel
from src.service.cinema.driven_adapter.model.cinema_model import CinemaModel
from src.service.cinema.driven_adapter.model.movie_model import MovieModel
from src.service.cinema.driven_adapter.model.payment_method_model import PaymentMethodModel
from src.service.cinema.driven_adapter.model.payment_model import PaymentModel
from src.service.cinema.driven_adapter.model.screening_model import ScreeningModel
from src.service.cinema.driven_adapter.model.seat_model import SeatModel
from src.service.cinema.driven_adapter.model.studio_model import StudioModel
from src.service.cinema.driven_adapter.model.ticket_model import TicketModel
from src.service.cinema.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'BookingSeatModel',
    'CinemaModel',
    'MovieModel',
    'PaymentMethodModel',
    'PaymentModel',
    'ScreeningModel',
    'SeatModel',
    'StudioModel',
    'TicketModel',
    'UserModel',
]
