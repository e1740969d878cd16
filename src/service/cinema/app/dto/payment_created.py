import attrs


@attrs.define(frozen=True)
class PaymentCreated:
    payment_id: int
    reused: bool  # an existing pending payment was handed back
