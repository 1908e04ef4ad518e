"""
Payment return routes.

Each request renders a fresh return screen, so the screen's "retry" action
is a reload of the same return URL: the client issues the GET again with the
gateway's query string. Reconciliation is deduplicated per order_id, so a
reload after success never posts twice. "abandon" is the POST route below.
"""

from fastapi import APIRouter, Depends, Request, Response, status

from rentals_checkout.api.dependencies import get_return_slot, get_use_cases
from rentals_checkout.api.return_location import CookieReturnLocationSlot
from rentals_checkout.api.schemas.checkout import (
    AbandonResponse,
    PaymentReturnResponse,
    StartPaymentFlowRequest,
    StartPaymentFlowResponse,
)
from rentals_checkout.domain.entities.payment_return import PaymentReturnScreen

router = APIRouter()


@router.post(
    "/payment-flow/start",
    response_model=StartPaymentFlowResponse,
    status_code=status.HTTP_200_OK,
)
async def start_payment_flow(
    payload: StartPaymentFlowRequest,
    response: Response,
    slot: CookieReturnLocationSlot = Depends(get_return_slot),
) -> StartPaymentFlowResponse:
    await slot.store(payload.return_to)
    slot.apply(response)
    return StartPaymentFlowResponse(return_to=payload.return_to)


@router.get(
    "/payments/return",
    response_model=PaymentReturnResponse,
    status_code=status.HTTP_200_OK,
)
async def payment_return(
    request: Request,
    response: Response,
    slot: CookieReturnLocationSlot = Depends(get_return_slot),
    use_cases=Depends(get_use_cases),
) -> PaymentReturnResponse:
    screen = PaymentReturnScreen()
    view = await use_cases["payment_return"].load(screen, request.query_params, slot)
    slot.apply(response)
    return PaymentReturnResponse.from_view(view)


@router.post(
    "/payments/return/abandon",
    response_model=AbandonResponse,
    status_code=status.HTTP_200_OK,
)
async def abandon_payment_return(
    response: Response,
    slot: CookieReturnLocationSlot = Depends(get_return_slot),
    use_cases=Depends(get_use_cases),
) -> AbandonResponse:
    location = await use_cases["payment_return"].abandon(slot)
    slot.apply(response)
    return AbandonResponse(redirect_to=location)
