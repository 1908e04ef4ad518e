"""
Capa de Infraestructura - Checkout de alquileres.

Esta capa contiene las implementaciones concretas de los puertos (interfaces).
Incluye adaptadores para la base de datos del registro de reconciliaciones,
el backend de alquileres y versiones en memoria.

Estructura:
- db/: Repositorio SQL del registro de reconciliaciones
- gateways/: Cliente HTTP del backend de alquileres
- in_memory/: Implementaciones in-memory para testing y desarrollo
- circuit_breaker.py: Circuit breaker de las llamadas al backend
"""

# Database
from rentals_checkout.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from rentals_checkout.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager

# Gateways
from rentals_checkout.infrastructure.gateways.rentals_backend_http import RentalsBackendHTTP

# In-Memory (for testing)
from rentals_checkout.infrastructure.in_memory import (
    InMemoryIdempotencyRepo,
    InMemoryReturnLocationSlot,
    NoopTransactionManager,
    StubRentalsBackend,
)

__all__ = [
    # Database
    "IdempotencyRepoSQL",
    "SQLAlchemyTransactionManager",
    # Gateways
    "RentalsBackendHTTP",
    # In-Memory
    "InMemoryIdempotencyRepo",
    "InMemoryReturnLocationSlot",
    "NoopTransactionManager",
    "StubRentalsBackend",
]
