from decimal import Decimal
from typing import Any

from rentals_checkout.application.interfaces.clock import Clock, SystemClock
from rentals_checkout.application.interfaces.rentals_backend import (
    BackendError,
    BackendRejectedError,
    BookingDraft,
    CreatedBooking,
    CreatedPayment,
    PaymentAccount,
    PaymentDraft,
    RentalsBackend,
)
from rentals_checkout.domain.entities.booking import Booking
from rentals_checkout.domain.entities.payment import Payment
from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.entities.property import Property

DEMO_PROPERTY = Property(
    id="prop-001",
    nightly_rate=Decimal("100.00"),
    title="Departamento en Miraflores",
    address="Av. Larco 123, Miraflores, Lima",
    max_guests=4,
)


class StubRentalsBackend(RentalsBackend):
    """
    Backend en memoria para desarrollo y pruebas.

    Guarda reservas y pagos, es idempotente por Idempotency-Key en pagos y por
    order_id en webhooks, y permite simular fallos por operación.
    """

    def __init__(
        self,
        properties: list[Property] | None = None,
        payment_account: PaymentAccount | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._clock = clock or SystemClock()
        self.properties: dict[str, Property] = {
            prop.id: prop for prop in (properties if properties is not None else [DEMO_PROPERTY])
        }
        self.payment_account = payment_account or PaymentAccount(
            yape_number="987654321", plin_number="912345678"
        )
        self.bookings: dict[str, Booking] = {}
        self.payments: dict[str, Payment] = {}
        self.webhook_events: dict[str, PaymentWebhookEvent] = {}
        self.webhook_calls: list[tuple[str, str, str]] = []
        self._payments_by_key: dict[str, str] = {}
        self._booking_seq = 0
        self._payment_seq = 0

        # Fallos simulados: si se asigna una excepción, la operación la lanza.
        self.property_error: BackendError | None = None
        self.payment_account_error: BackendError | None = None
        self.booking_error: BackendError | None = None
        self.payment_error: BackendError | None = None
        self.webhook_error: BackendError | None = None

    async def get_property(self, property_id: str) -> Property:
        if self.property_error:
            raise self.property_error
        prop = self.properties.get(property_id)
        if prop is None:
            raise BackendRejectedError("Unit not found", status_code=404, detail="Propiedad no encontrada")
        return prop

    async def get_payment_account(self) -> PaymentAccount:
        if self.payment_account_error:
            raise self.payment_account_error
        return self.payment_account

    async def create_booking(self, draft: BookingDraft) -> CreatedBooking:
        if self.booking_error:
            raise self.booking_error
        self._booking_seq += 1
        booking_id = f"BK-{self._booking_seq:05d}"
        self.bookings[booking_id] = Booking.from_quote(
            booking_id=booking_id,
            quote=draft.quote,
            guest_id=draft.guest_id,
            guest_notes=draft.guest_notes,
        )
        return CreatedBooking(booking_id=booking_id, payload={"public_id": booking_id})

    async def create_payment(self, draft: PaymentDraft) -> CreatedPayment:
        if self.payment_error:
            raise self.payment_error
        existing_id = self._payments_by_key.get(draft.idempotency_key)
        if existing_id:
            payment = self.payments[existing_id]
            return CreatedPayment(payment_id=payment.id, status=payment.status.value)

        self._payment_seq += 1
        payment = Payment.create_pending(
            booking_id=draft.booking_id,
            amount=draft.amount,
            method=draft.payment_method,
            created_at=self._clock.now(),
            payment_id=f"PAY-{self._payment_seq:05d}",
        )
        self.payments[payment.id] = payment
        self._payments_by_key[draft.idempotency_key] = payment.id
        return CreatedPayment(payment_id=payment.id, status=payment.status.value)

    async def post_payment_webhook(
        self, provider: str, event: PaymentWebhookEvent, idempotency_key: str
    ) -> dict[str, Any] | None:
        self.webhook_calls.append((provider, event.order_id, idempotency_key))
        if self.webhook_error:
            raise self.webhook_error
        if event.order_id not in self.webhook_events:
            self.webhook_events[event.order_id] = event
            payment = self._find_payment(event.order_id)
            if payment is not None and not payment.is_final:
                payment.succeed(event.provider_transaction_id, at=self._clock.now())
        return {"order_id": event.order_id, "status": "received"}

    def _find_payment(self, order_id: str) -> Payment | None:
        if order_id in self.payments:
            return self.payments[order_id]
        for payment in self.payments.values():
            if payment.booking_id == order_id:
                return payment
        return None
