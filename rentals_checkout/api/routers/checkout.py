from datetime import date

from fastapi import APIRouter, Depends, Query, Response, status

from rentals_checkout.api.dependencies import get_use_cases
from rentals_checkout.api.schemas.checkout import (
    CheckoutRequest,
    CheckoutResponse,
    PaymentMethodResponse,
    QuoteResponse,
)
from rentals_checkout.application.dtos.checkout_dto import CheckoutStatus
from rentals_checkout.application.use_cases.create_booking import CheckoutCommand

router = APIRouter()


@router.get(
    "/properties/{property_id}/quote",
    response_model=QuoteResponse,
    status_code=status.HTTP_200_OK,
)
async def get_quote(
    property_id: str,
    check_in: date | None = Query(default=None),
    check_out: date | None = Query(default=None),
    guest_count: int = Query(default=1, ge=1),
    use_cases=Depends(get_use_cases),
) -> QuoteResponse:
    quote = await use_cases["get_quote"].execute(
        property_id=property_id,
        check_in=check_in,
        check_out=check_out,
        guest_count=guest_count,
    )
    return QuoteResponse.from_quote(quote)


@router.get("/payment-methods", response_model=list[PaymentMethodResponse])
async def list_payment_methods(use_cases=Depends(get_use_cases)) -> list[PaymentMethodResponse]:
    options = await use_cases["list_payment_methods"].execute()
    return [PaymentMethodResponse.from_option(option) for option in options]


@router.post(
    "/checkout",
    response_model=CheckoutResponse,
    status_code=status.HTTP_201_CREATED,
)
async def checkout(
    payload: CheckoutRequest,
    response: Response,
    use_cases=Depends(get_use_cases),
) -> CheckoutResponse:
    outcome = await use_cases["checkout"].execute(
        CheckoutCommand(
            property_id=payload.property_id,
            payment_method=payload.payment_method,
            check_in=payload.check_in,
            check_out=payload.check_out,
            guest_count=payload.guest_count,
            guest_id=payload.guest_id,
            guest_notes=payload.guest_notes,
            special_requests=payload.special_requests,
        )
    )
    if outcome.status == CheckoutStatus.BOOKING_FAILED:
        response.status_code = status.HTTP_502_BAD_GATEWAY
    return CheckoutResponse.from_outcome(outcome)
