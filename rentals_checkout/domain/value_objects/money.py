"""Value Object Money - representa un valor monetario con su moneda."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from rentals_checkout.domain.errors import InvalidMoneyError


@dataclass(frozen=True)
class Money:
    """
    Value Object inmutable que representa un monto monetario.

    El monto se guarda exacto (sin redondeo intermedio); el redondeo a dos
    decimales solo se aplica al mostrarlo.

    Attributes:
        amount: Monto decimal exacto.
        currency_code: Código ISO 4217 de la moneda (ej: PEN).
    """

    amount: Decimal
    currency_code: str = "PEN"

    def __post_init__(self) -> None:
        if isinstance(self.amount, float):
            raise InvalidMoneyError(f"amount no puede ser float: {self.amount!r}")
        if not isinstance(self.amount, Decimal):
            try:
                object.__setattr__(self, "amount", Decimal(str(self.amount)))
            except InvalidOperation as exc:
                raise InvalidMoneyError(f"amount no es decimal: {self.amount!r}") from exc

        if not self.amount.is_finite():
            raise InvalidMoneyError(f"amount debe ser finito: {self.amount}")

        if len(self.currency_code) != 3:
            raise InvalidMoneyError(f"currency_code debe ser de 3 caracteres: {self.currency_code}")

        if self.amount < 0:
            raise InvalidMoneyError(f"amount no puede ser negativo: {self.amount}")

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            raise TypeError(f"No se puede sumar Money con {type(other)}")
        if self.currency_code != other.currency_code:
            raise InvalidMoneyError(
                f"No se pueden sumar montos de diferentes monedas: "
                f"{self.currency_code} vs {other.currency_code}"
            )
        return Money(amount=self.amount + other.amount, currency_code=self.currency_code)

    def multiply(self, factor: Decimal | int) -> "Money":
        """Multiplica por un factor exacto (noches, tasas)."""
        if isinstance(factor, float):
            raise TypeError("factor no puede ser float")
        return Money(amount=self.amount * Decimal(factor), currency_code=self.currency_code)

    def display(self) -> str:
        """Formato para el usuario, ej: 'S/ 967.60'."""
        if self.currency_code == "PEN":
            return f"S/ {self.amount:.2f}"
        return f"{self.amount:.2f} {self.currency_code}"

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency_code}"
