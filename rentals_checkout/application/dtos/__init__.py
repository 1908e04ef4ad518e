"""DTOs (Data Transfer Objects) de la capa de aplicación."""

from rentals_checkout.application.dtos.checkout_dto import CheckoutOutcome, CheckoutStatus
from rentals_checkout.application.dtos.return_dto import PaymentReturnView

__all__ = [
    # Checkout DTOs
    "CheckoutOutcome",
    "CheckoutStatus",
    # Return DTOs
    "PaymentReturnView",
]
