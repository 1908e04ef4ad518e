from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.entities.property import Property
from rentals_checkout.domain.entities.quote import Quote


class BackendError(Exception):
    """Fallo al hablar con el backend de alquileres."""

    def __init__(self, message: str, status_code: int | None = None, detail: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.detail = detail


class BackendUnavailableError(BackendError):
    """Red, timeout o circuito abierto: el backend no respondió."""


class BackendRejectedError(BackendError):
    """El backend respondió con un estado no 2xx."""


@dataclass
class BookingDraft:
    quote: Quote
    guest_id: str | None = None
    guest_notes: str | None = None
    special_requests: str | None = None


@dataclass
class CreatedBooking:
    booking_id: str
    payload: dict[str, Any] | None = None


@dataclass
class PaymentDraft:
    booking_id: str
    property_id: str
    user_id: str | None
    amount: Decimal
    payment_method: str
    payment_origin: str
    description: str
    comments: str
    invoice_id: str
    idempotency_key: str


@dataclass
class CreatedPayment:
    payment_id: str | None
    status: str
    payload: dict[str, Any] | None = None


@dataclass
class PaymentAccount:
    yape_number: str | None = None
    plin_number: str | None = None


class RentalsBackend(ABC):
    """Puerto hacia el backend de registro (reservas, pagos, webhooks)."""

    @abstractmethod
    async def get_property(self, property_id: str) -> Property:
        """GET /units/{id}."""

    @abstractmethod
    async def get_payment_account(self) -> PaymentAccount:
        """GET /payment-accounts/ del anfitrión."""

    @abstractmethod
    async def create_booking(self, draft: BookingDraft) -> CreatedBooking:
        """POST /bookings/. Debe devolver un id durable."""

    @abstractmethod
    async def create_payment(self, draft: PaymentDraft) -> CreatedPayment:
        """POST /payments/ con Idempotency-Key."""

    @abstractmethod
    async def post_payment_webhook(
        self, provider: str, event: PaymentWebhookEvent, idempotency_key: str
    ) -> dict[str, Any] | None:
        """POST /webhooks/{provider}. Idempotente por order_id en el backend."""
