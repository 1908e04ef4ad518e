"""Value Object FeeSchedule - cargos y tasas aplicados a un presupuesto."""

from dataclasses import dataclass
from decimal import Decimal

from rentals_checkout.domain.errors import InvalidMoneyError


@dataclass(frozen=True)
class FeeSchedule:
    """
    Cargos fijos y tasas del checkout.

    Attributes:
        cleaning_fee: Cargo de limpieza fijo por estadía.
        service_fee_rate: Porcentaje sobre el subtotal (0.10 = 10%).
        tax_rate: Porcentaje sobre subtotal + limpieza + servicio (0.18 = 18%).
        currency_code: Moneda de todos los montos.
    """

    cleaning_fee: Decimal = Decimal("50")
    service_fee_rate: Decimal = Decimal("0.10")
    tax_rate: Decimal = Decimal("0.18")
    currency_code: str = "PEN"

    def __post_init__(self) -> None:
        for name in ("cleaning_fee", "service_fee_rate", "tax_rate"):
            value = getattr(self, name)
            if isinstance(value, float):
                raise InvalidMoneyError(f"{name} no puede ser float: {value!r}")
            if not isinstance(value, Decimal):
                object.__setattr__(self, name, Decimal(str(value)))
            if getattr(self, name) < 0:
                raise InvalidMoneyError(f"{name} no puede ser negativo: {value}")
