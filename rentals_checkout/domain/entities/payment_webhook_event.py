"""Entidad PaymentWebhookEvent - retorno normalizado de la pasarela."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any


@dataclass(frozen=True)
class PaymentWebhookEvent:
    """
    Evento de pago construido desde la redirección de la pasarela.

    provider_transaction_id es siempre el order_id: es el acoplamiento
    acordado con el backend para reconciliar.
    """

    order_id: str
    amount: Decimal
    provider_status: str
    received_at: datetime

    @property
    def provider_transaction_id(self) -> str:
        return self.order_id

    def to_payload(self) -> dict[str, Any]:
        return {
            "order_id": self.order_id,
            "amount": str(self.amount),
            "status": self.provider_status,
            "provider_transaction_id": self.provider_transaction_id,
            "received_at": self.received_at.isoformat(),
        }
