import re
from collections.abc import Iterable, Mapping
from datetime import datetime
from decimal import Decimal

from rentals_checkout.application.messages import describe_provider_status
from rentals_checkout.domain.constants import GATEWAY_STATUS_SUCCEEDED
from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.errors import (
    MissingCallbackParametersError,
    PaymentNotSucceededError,
)

PARAM_ORDER_ID = "orderId"
PARAM_AMOUNT = "amount"
PARAM_STATUS = "status"

ALLOWED_PARAMS = (PARAM_ORDER_ID, PARAM_AMOUNT, PARAM_STATUS)

_AMOUNT_PATTERN = re.compile(r"^\d+(\.\d{1,2})?$")

QueryParams = Mapping[str, str] | Iterable[tuple[str, str]]


def _collect(params: QueryParams) -> dict[str, str]:
    """Aplana los parámetros rechazando claves repetidas o desconocidas."""
    if hasattr(params, "multi_items"):
        pairs = params.multi_items()
    elif isinstance(params, Mapping):
        pairs = params.items()
    else:
        pairs = params

    collected: dict[str, str] = {}
    for key, value in pairs:
        if key not in ALLOWED_PARAMS:
            raise MissingCallbackParametersError(key, MissingCallbackParametersError.REASON_UNEXPECTED)
        if key in collected:
            raise MissingCallbackParametersError(key, MissingCallbackParametersError.REASON_INVALID)
        collected[key] = value
    return collected


def _required(collected: dict[str, str], key: str) -> str:
    value = (collected.get(key) or "").strip()
    if not value:
        raise MissingCallbackParametersError(key)
    return value


def _parse_amount(raw: str) -> Decimal:
    if not _AMOUNT_PATTERN.match(raw):
        raise MissingCallbackParametersError(PARAM_AMOUNT, MissingCallbackParametersError.REASON_INVALID)
    return Decimal(raw)


def parse_return(params: QueryParams, received_at: datetime) -> PaymentWebhookEvent:
    """
    Valida la redirección de la pasarela y la convierte en un evento tipado.

    Los parámetros son datos no confiables del navegador: nada se corrige ni se
    adivina. Solo el literal SUCCEEDED cuenta como éxito.

    Raises:
        MissingCallbackParametersError: Falta orderId o amount, o hay parámetros
            desconocidos, repetidos o mal formados.
        PaymentNotSucceededError: status distinto de SUCCEEDED (incluido ausente).
    """
    collected = _collect(params)
    order_id = _required(collected, PARAM_ORDER_ID)
    amount = _parse_amount(_required(collected, PARAM_AMOUNT))

    provider_status = collected.get(PARAM_STATUS)
    if provider_status != GATEWAY_STATUS_SUCCEEDED:
        raise PaymentNotSucceededError(
            provider_status,
            message=describe_provider_status(provider_status),
        )

    return PaymentWebhookEvent(
        order_id=order_id,
        amount=amount,
        provider_status=provider_status,
        received_at=received_at,
    )
