"""
Implementaciones en memoria para desarrollo y testing.

Estas implementaciones almacenan datos en diccionarios en memoria,
útiles para tests unitarios y desarrollo sin base de datos ni backend.
"""

from rentals_checkout.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from rentals_checkout.infrastructure.in_memory.rentals_backend import DEMO_PROPERTY, StubRentalsBackend
from rentals_checkout.infrastructure.in_memory.return_location import InMemoryReturnLocationSlot
from rentals_checkout.infrastructure.in_memory.transaction_manager import NoopTransactionManager

__all__ = [
    "InMemoryIdempotencyRepo",
    "InMemoryReturnLocationSlot",
    "NoopTransactionManager",
    "StubRentalsBackend",
    "DEMO_PROPERTY",
]
