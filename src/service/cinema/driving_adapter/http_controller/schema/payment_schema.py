from typing import Optional

from pydantic import BaseModel, Field


class PaymentMethodResponse(BaseModel):
    id: int
    name: str


class PaymentCreateRequest(BaseModel):
    booking_id: int = Field(gt=0)
    payment_method_id: int
    amount: int

    class Config:
        json_schema_extra = {'example': {'booking_id': 7, 'payment_method_id': 1, 'amount': 100000}}


class PaymentCreateResponse(BaseModel):
    payment_id: int
    reused: bool


class PaymentCallbackRequest(BaseModel):
    payment_id: int = Field(gt=0)
    status: str  # success / failed
    transaction_id: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {'payment_id': 3, 'status': 'success', 'transaction_id': 'T-1'}
        }


class PaymentCallbackResponse(BaseModel):
    payment_id: int
    booking_id: Optional[int] = None  # set only when this callback marked the booking paid
