"""DTOs para el retorno de la pasarela."""

from dataclasses import dataclass, field


@dataclass
class PaymentReturnView:
    """Lo que la pantalla de retorno muestra tras procesar una carga."""

    state: str
    message: str
    order_id: str | None = None
    error_code: str | None = None
    actions: list[str] = field(default_factory=list)
    redirect_to: str | None = None
    redirect_delay_seconds: float | None = None
