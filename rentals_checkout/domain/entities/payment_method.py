"""Métodos de pago ofrecidos en el checkout."""

from dataclasses import dataclass
from enum import Enum


class PaymentMethod(str, Enum):
    """Métodos de pago conocidos. La pasarela puede usar otros códigos."""

    CASH = "cash"
    YAPE = "yape"
    PLIN = "plin"
    BANK_TRANSFER = "bank_transfer"


def requires_payment_record(method: str | PaymentMethod) -> bool:
    """Solo el pago en efectivo se registra fuera del sistema."""
    value = method.value if isinstance(method, PaymentMethod) else str(method)
    return value.strip().lower() != PaymentMethod.CASH.value


@dataclass(frozen=True)
class PaymentMethodOption:
    """Opción de pago para el selector del checkout."""

    code: str
    name: str
    description: str
