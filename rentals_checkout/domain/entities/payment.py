"""Entidad Payment - pago asociado a una reserva."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from rentals_checkout.domain.entities.payment_method import PaymentMethod
from rentals_checkout.domain.errors import InvalidPaymentTransitionError


class PaymentStatus(str, Enum):
    """Estados posibles de un pago."""

    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class Payment:
    """
    Pago de una reserva.

    Solo existe cuando el método no es efectivo. El estado solo avanza de
    pending a succeeded o failed; un estado final no cambia.
    """

    # Identificadores
    id: str | None = None
    booking_id: str = ""

    # Monto
    amount: Decimal = Decimal("0")
    currency_code: str = "PEN"
    method: str = PaymentMethod.YAPE.value

    # Estado
    status: PaymentStatus = PaymentStatus.PENDING
    provider_transaction_id: str | None = None

    # Timestamps
    created_at: datetime | None = None
    updated_at: datetime | None = None

    # === Propiedades ===

    @property
    def is_final(self) -> bool:
        """Verifica si el pago está en un estado final (no puede cambiar)."""
        return self.status in (PaymentStatus.SUCCEEDED, PaymentStatus.FAILED)

    # === Métodos de negocio ===

    def succeed(self, provider_transaction_id: str, at: datetime) -> None:
        """Marca el pago como exitoso."""
        if self.is_final:
            raise InvalidPaymentTransitionError(self.status.value, PaymentStatus.SUCCEEDED.value)
        self.status = PaymentStatus.SUCCEEDED
        self.provider_transaction_id = provider_transaction_id
        self.updated_at = at

    def fail(self, at: datetime) -> None:
        """Marca el pago como fallido."""
        if self.is_final:
            raise InvalidPaymentTransitionError(self.status.value, PaymentStatus.FAILED.value)
        self.status = PaymentStatus.FAILED
        self.updated_at = at

    @classmethod
    def create_pending(
        cls,
        booking_id: str,
        amount: Decimal,
        method: str,
        created_at: datetime,
        currency_code: str = "PEN",
        payment_id: str | None = None,
    ) -> "Payment":
        """Factory para crear un pago pendiente."""
        return cls(
            id=payment_id,
            booking_id=booking_id,
            amount=amount,
            currency_code=currency_code,
            method=method,
            status=PaymentStatus.PENDING,
            created_at=created_at,
            updated_at=created_at,
        )
