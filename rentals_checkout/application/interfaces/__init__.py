"""Interfaces (Puertos) de la capa de aplicación."""

from rentals_checkout.application.interfaces.clock import Clock, FakeClock, SystemClock
from rentals_checkout.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
    LedgerUnavailableError,
)
from rentals_checkout.application.interfaces.rentals_backend import (
    BackendError,
    BackendRejectedError,
    BackendUnavailableError,
    BookingDraft,
    CreatedBooking,
    CreatedPayment,
    PaymentAccount,
    PaymentDraft,
    RentalsBackend,
)
from rentals_checkout.application.interfaces.return_location import ReturnLocationSlot
from rentals_checkout.application.interfaces.transaction_manager import TransactionManager

__all__ = [
    # Repositories
    "IdempotencyRepo",
    "IdempotencyRecord",
    "LedgerUnavailableError",
    # Gateways
    "RentalsBackend",
    "BookingDraft",
    "CreatedBooking",
    "PaymentDraft",
    "CreatedPayment",
    "PaymentAccount",
    "BackendError",
    "BackendUnavailableError",
    "BackendRejectedError",
    # Navigation
    "ReturnLocationSlot",
    # Infrastructure
    "TransactionManager",
    "Clock",
    "SystemClock",
    "FakeClock",
]
