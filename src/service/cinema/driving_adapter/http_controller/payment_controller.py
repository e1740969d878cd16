from typing import List

from fastapi import APIRouter, Depends, status

from src.platform.logging.loguru_io import Logger
from src.service.cinema.app.command.create_payment_use_case import CreatePaymentUseCase
from src.service.cinema.app.command.update_payment_use_case import UpdatePaymentUseCase
from src.service.cinema.app.query.list_payment_methods_use_case import ListPaymentMethodsUseCase
from src.service.cinema.driving_adapter.http_controller.schema.payment_schema import (
    PaymentCallbackRequest,
    PaymentCallbackResponse,
    PaymentCreateRequest,
    PaymentCreateResponse,
    PaymentMethodResponse,
)


router = APIRouter()


@router.get('/methods')
@Logger.io
async def list_payment_methods(
    use_case: ListPaymentMethodsUseCase = Depends(ListPaymentMethodsUseCase.depends),
) -> List[PaymentMethodResponse]:
    methods = await use_case.list_payment_methods()
    return [PaymentMethodResponse(id=method.id, name=method.name) for method in methods]


@router.post('', status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_payment(
    request: PaymentCreateRequest,
    use_case: CreatePaymentUseCase = Depends(CreatePaymentUseCase.depends),
) -> PaymentCreateResponse:
    created = await use_case.create_payment(
        booking_id=request.booking_id,
        method_id=request.payment_method_id,
        amount=request.amount,
    )
    return PaymentCreateResponse(payment_id=created.payment_id, reused=created.reused)


@router.post('/callback')
@Logger.io
async def payment_callback(
    request: PaymentCallbackRequest,
    use_case: UpdatePaymentUseCase = Depends(UpdatePaymentUseCase.depends),
) -> PaymentCallbackResponse:
    """Webhook from the payment provider. Safe to deliver more than once."""
    booking_id = await use_case.update_payment(
        payment_id=request.payment_id,
        status=request.status,
        transaction_id=request.transaction_id,
    )
    return PaymentCallbackResponse(payment_id=request.payment_id, booking_id=booking_id)
