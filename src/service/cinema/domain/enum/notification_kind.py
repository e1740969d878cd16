from enum import StrEnum


class NotificationKind(StrEnum):
    VERIFICATION_CODE = 'verification_code'
    TICKET_BUNDLE = 'ticket_bundle'
