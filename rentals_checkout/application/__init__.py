"""
Capa de Aplicación - Checkout de alquileres.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso del checkout y del retorno del pago
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
- messages.py: Mensajes visibles para el usuario
"""

from rentals_checkout.application.dtos import CheckoutOutcome, CheckoutStatus, PaymentReturnView
from rentals_checkout.application.interfaces import (
    BackendError,
    BackendRejectedError,
    BackendUnavailableError,
    Clock,
    FakeClock,
    IdempotencyRepo,
    RentalsBackend,
    ReturnLocationSlot,
    SystemClock,
    TransactionManager,
)

__all__ = [
    # DTOs
    "CheckoutOutcome",
    "CheckoutStatus",
    "PaymentReturnView",
    # Interfaces - Repositories
    "IdempotencyRepo",
    # Interfaces - Gateways
    "RentalsBackend",
    "BackendError",
    "BackendUnavailableError",
    "BackendRejectedError",
    # Interfaces - Navigation
    "ReturnLocationSlot",
    # Interfaces - Infrastructure
    "TransactionManager",
    # Interfaces - Utilities
    "Clock",
    "SystemClock",
    "FakeClock",
]
