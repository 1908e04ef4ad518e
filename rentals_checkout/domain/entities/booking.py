"""Entidad Booking - reserva confirmada por el backend."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from rentals_checkout.domain.constants import BOOKING_STATUS_CREATED
from rentals_checkout.domain.entities.quote import Quote


@dataclass(frozen=True)
class Booking:
    """
    Reserva creada en el backend.

    El id lo asigna el backend. Una vez creada, el checkout nunca la modifica.
    """

    id: str
    property_id: str
    check_in: date | datetime
    check_out: date | datetime
    guest_count: int
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    taxes: Decimal
    total: Decimal
    guest_id: str | None = None
    guest_notes: str | None = None
    status: str = BOOKING_STATUS_CREATED

    @classmethod
    def from_quote(
        cls,
        booking_id: str,
        quote: Quote,
        guest_id: str | None = None,
        guest_notes: str | None = None,
    ) -> "Booking":
        """Factory: la reserva hereda los montos exactos del presupuesto."""
        return cls(
            id=booking_id,
            property_id=quote.property_id,
            check_in=quote.check_in,
            check_out=quote.check_out,
            guest_count=quote.guest_count,
            subtotal=quote.subtotal,
            cleaning_fee=quote.cleaning_fee,
            service_fee=quote.service_fee,
            taxes=quote.taxes,
            total=quote.total,
            guest_id=guest_id,
            guest_notes=guest_notes,
        )
