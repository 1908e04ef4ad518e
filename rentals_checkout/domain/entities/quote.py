"""Entidad Quote - presupuesto de una estadía."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from rentals_checkout.domain.entities.property import Property
from rentals_checkout.domain.errors import ValidationError
from rentals_checkout.domain.value_objects.fee_schedule import FeeSchedule
from rentals_checkout.domain.value_objects.money import Money
from rentals_checkout.domain.value_objects.stay_dates import StayDates


@dataclass(frozen=True)
class Quote:
    """
    Presupuesto efímero de una estadía.

    Los montos son exactos: el total es la suma de los cuatro componentes y el
    mismo valor que se muestra es el que se envía al backend.
    """

    property_id: str
    check_in: date | datetime
    check_out: date | datetime
    guest_count: int
    nights: int
    nightly_rate: Decimal
    subtotal: Decimal
    cleaning_fee: Decimal
    service_fee: Decimal
    taxes: Decimal
    total: Decimal
    currency_code: str = "PEN"

    # === Propiedades ===

    @property
    def total_money(self) -> Money:
        return Money(amount=self.total, currency_code=self.currency_code)

    # === Factory ===

    @classmethod
    def compute(
        cls,
        property: Property,
        stay: StayDates,
        guest_count: int,
        fees: FeeSchedule,
    ) -> "Quote":
        """
        Calcula el presupuesto.

        Orden fijo: subtotal -> limpieza -> servicio (sobre subtotal) ->
        impuestos (sobre subtotal + limpieza + servicio).

        Raises:
            ValidationError: Si guest_count < 1 o supera la capacidad.
        """
        if guest_count is None or guest_count < 1:
            raise ValidationError("guest_count", "debe haber al menos 1 huésped")
        if property.max_guests is not None and guest_count > property.max_guests:
            raise ValidationError(
                "guest_count",
                f"la propiedad admite como máximo {property.max_guests} huéspedes",
            )

        currency = fees.currency_code
        nightly = Money(amount=property.nightly_rate, currency_code=currency)
        nights = stay.nights

        subtotal = nightly.multiply(nights)
        cleaning = Money(amount=fees.cleaning_fee, currency_code=currency)
        service = subtotal.multiply(fees.service_fee_rate)
        taxes = (subtotal + cleaning + service).multiply(fees.tax_rate)
        total = subtotal + cleaning + service + taxes

        return cls(
            property_id=property.id,
            check_in=stay.check_in,
            check_out=stay.check_out,
            guest_count=guest_count,
            nights=nights,
            nightly_rate=nightly.amount,
            subtotal=subtotal.amount,
            cleaning_fee=cleaning.amount,
            service_fee=service.amount,
            taxes=taxes.amount,
            total=total.amount,
            currency_code=currency,
        )
