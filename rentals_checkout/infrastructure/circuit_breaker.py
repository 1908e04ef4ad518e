"""
Circuit Breaker configuration for rentals backend calls.

Every HTTP call to the rentals backend (units, bookings, payments, webhooks)
goes through ``backend_breaker`` so a backend outage fails fast instead of
piling up requests that wait for the full timeout.

Circuit Breaker Pattern:
- CLOSED: Normal operation, requests pass through
- OPEN: Too many failures, requests fail immediately
- HALF_OPEN: Testing if service recovered, limited requests allowed

Configuration:
- fail_max: Number of consecutive failures before opening circuit
- reset_timeout: Seconds to wait before attempting recovery (HALF_OPEN)
"""

import logging

from pybreaker import CircuitBreaker, CircuitBreakerError, CircuitBreakerListener

logger = logging.getLogger(__name__)


backend_breaker = CircuitBreaker(
    fail_max=5,  # Open circuit after 5 consecutive failures
    reset_timeout=60,  # Wait 60 seconds before attempting recovery
    name="rentals_backend_circuit_breaker",
)


def log_circuit_state_change(breaker_name: str, old_state: str, new_state: str):
    """Log circuit breaker state changes for monitoring and alerting."""
    logger.warning(
        "Circuit breaker state changed",
        extra={
            "breaker_name": breaker_name,
            "old_state": old_state,
            "new_state": new_state,
        }
    )


class StateChangeLogger(CircuitBreakerListener):
    """Listener for circuit breaker state changes."""

    def __init__(self, name: str):
        self.name = name

    def state_change(self, cb, old_state, new_state):
        log_circuit_state_change(
            self.name, old_state.name if old_state else None, new_state.name
        )


backend_breaker.add_listener(StateChangeLogger("rentals_backend"))


__all__ = [
    "backend_breaker",
    "CircuitBreakerError",
]
