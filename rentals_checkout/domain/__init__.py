"""
Capa de Dominio - Checkout de alquileres.

Esta capa contiene la lógica de negocio pura, sin dependencias de frameworks.
Incluye entidades, value objects y excepciones de dominio.

Estructura:
- entities/: Entidades del dominio (Quote, Booking, Payment, etc.)
- value_objects/: Objetos de valor inmutables (Money, StayDates, FeeSchedule)
- errors.py: Excepciones específicas del dominio
- constants.py: Constantes del dominio
"""

from rentals_checkout.domain.constants import (
    DEFAULT_RETURN_LOCATION,
    GATEWAY_STATUS_SUCCEEDED,
    RECONCILE_SCOPE,
)
from rentals_checkout.domain.entities import (
    Booking,
    Payment,
    PaymentMethod,
    PaymentReturnScreen,
    PaymentStatus,
    PaymentWebhookEvent,
    Property,
    Quote,
    ReconciliationOutcome,
)
from rentals_checkout.domain.errors import (
    BookingCreationFailedError,
    DomainError,
    InvalidDateRangeError,
    InvalidMoneyError,
    InvalidPaymentTransitionError,
    InvalidScreenTransitionError,
    MissingCallbackParametersError,
    PaymentNotSucceededError,
    PaymentRegistrationFailedError,
    PropertyUnavailableError,
    ReconciliationTransportError,
    ValidationError,
)
from rentals_checkout.domain.value_objects import FeeSchedule, Money, StayDates

__all__ = [
    # Constants
    "DEFAULT_RETURN_LOCATION",
    "GATEWAY_STATUS_SUCCEEDED",
    "RECONCILE_SCOPE",
    # Entities
    "Booking",
    "Payment",
    "PaymentMethod",
    "PaymentReturnScreen",
    "PaymentStatus",
    "PaymentWebhookEvent",
    "Property",
    "Quote",
    "ReconciliationOutcome",
    # Value Objects
    "FeeSchedule",
    "Money",
    "StayDates",
    # Errors
    "DomainError",
    "ValidationError",
    "InvalidDateRangeError",
    "InvalidMoneyError",
    "PropertyUnavailableError",
    "BookingCreationFailedError",
    "PaymentRegistrationFailedError",
    "InvalidPaymentTransitionError",
    "MissingCallbackParametersError",
    "PaymentNotSucceededError",
    "ReconciliationTransportError",
    "InvalidScreenTransitionError",
]
