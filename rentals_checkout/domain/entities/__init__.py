"""Entidades del dominio de checkout."""

from rentals_checkout.domain.entities.booking import Booking
from rentals_checkout.domain.entities.payment import Payment, PaymentStatus
from rentals_checkout.domain.entities.payment_method import (
    PaymentMethod,
    PaymentMethodOption,
    requires_payment_record,
)
from rentals_checkout.domain.entities.payment_return import (
    PaymentReturnScreen,
    ReconciliationOutcome,
    ReturnScreenAction,
    ReturnScreenState,
)
from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.entities.property import Property
from rentals_checkout.domain.entities.quote import Quote

__all__ = [
    # Pricing
    "Property",
    "Quote",
    # Booking
    "Booking",
    # Payment
    "Payment",
    "PaymentStatus",
    "PaymentMethod",
    "PaymentMethodOption",
    "requires_payment_record",
    # Return flow
    "PaymentWebhookEvent",
    "PaymentReturnScreen",
    "ReconciliationOutcome",
    "ReturnScreenAction",
    "ReturnScreenState",
]
