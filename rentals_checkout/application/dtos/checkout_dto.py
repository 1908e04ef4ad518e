"""DTOs para el checkout."""

from dataclasses import dataclass
from enum import Enum

from rentals_checkout.domain.entities.booking import Booking
from rentals_checkout.domain.entities.quote import Quote


class CheckoutStatus(str, Enum):
    """Resultado del checkout."""

    BOOKED = "booked"
    BOOKED_PAYMENT_FAILED = "booked_payment_failed"
    BOOKING_FAILED = "booking_failed"


@dataclass
class CheckoutOutcome:
    """Resultado visible del orquestador de reservas."""

    status: CheckoutStatus
    message: str
    redirect_to: str | None
    quote: Quote | None = None
    booking: Booking | None = None
    payment_id: str | None = None
    payment_message: str | None = None
    error_code: str | None = None

    @property
    def is_booked(self) -> bool:
        """La reserva existe (con o sin pago registrado)."""
        return self.status in (CheckoutStatus.BOOKED, CheckoutStatus.BOOKED_PAYMENT_FAILED)
