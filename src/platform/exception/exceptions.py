class CustomBaseError(Exception):
    """Base class for all custom exceptions - controls logging behavior in @Logger.io"""

    def __init__(self, message: str, status_code: int) -> None:
        self.message = message
        self.status_code = status_code
        super().__init__(message)


class DomainError(CustomBaseError):
    def __init__(self, message: str, status_code: int = 400) -> None:
        super().__init__(message, status_code)


class ValidationError(DomainError):
    """Malformed input, rejected before any transaction opens."""

    def __init__(self, message: str) -> None:
        super().__init__(message, 400)


class NotFoundError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 404)


class ConflictError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 409)


class SeatConflictError(ConflictError):
    def __init__(self, message: str = 'one or more seats already booked') -> None:
        super().__init__(message)


class BookingClosedError(ConflictError):
    def __init__(self, message: str = 'booking is closed for this screening') -> None:
        super().__init__(message)


class BookingCancelledError(ConflictError):
    def __init__(self, message: str = 'booking is already cancelled') -> None:
        super().__init__(message)


class BookingExpiredError(ConflictError):
    def __init__(self, message: str = 'booking hold has expired') -> None:
        super().__init__(message)


class PersistenceError(CustomBaseError):
    """Storage failure other than a known conflict. Never retried internally."""

    def __init__(self, message: str = 'persistence failure') -> None:
        super().__init__(message, 503)


class NotificationError(CustomBaseError):
    def __init__(self, message: str) -> None:
        super().__init__(message, 502)
