from enum import StrEnum


class PaymentStatus(StrEnum):
    PENDING = 'pending'
    SUCCESS = 'success'
    FAILED = 'failed'

    @property
    def is_terminal(self) -> bool:
        return self is not PaymentStatus.PENDING
