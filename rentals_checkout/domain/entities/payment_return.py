"""Pantalla de retorno del pago: máquina de estados por carga de página."""

from dataclasses import dataclass, field
from enum import Enum

from rentals_checkout.domain.errors import InvalidScreenTransitionError


class ReconciliationOutcome(str, Enum):
    """Resultado de la reconciliación con el backend."""

    SUCCESS = "success"
    SUCCESS_WITH_WARNING = "success_with_warning"
    ERROR = "error"


class ReturnScreenState(str, Enum):
    """Estados visibles de la pantalla de retorno."""

    PROCESSING = "processing"
    SUCCESS = "success"
    SUCCESS_WITH_WARNING = "success_with_warning"
    ERROR = "error"


class ReturnScreenAction(str, Enum):
    RETRY = "retry"
    ABANDON = "abandon"


_TERMINAL_BY_OUTCOME = {
    ReconciliationOutcome.SUCCESS: ReturnScreenState.SUCCESS,
    ReconciliationOutcome.SUCCESS_WITH_WARNING: ReturnScreenState.SUCCESS_WITH_WARNING,
    ReconciliationOutcome.ERROR: ReturnScreenState.ERROR,
}


@dataclass
class PaymentReturnScreen:
    """
    Estado de una carga de la pantalla de retorno.

    processing -> success | success_with_warning | error. Reintentar solo es
    posible desde error. El guard de un solo disparo evita procesar dos veces
    el mismo order_id en la misma carga.
    """

    state: ReturnScreenState = ReturnScreenState.PROCESSING
    order_id: str | None = None
    message: str | None = None
    error_code: str | None = None
    redirect_to: str | None = None
    attempts: int = 0
    _claimed: set[str] = field(default_factory=set, repr=False)

    # === Propiedades ===

    @property
    def is_terminal(self) -> bool:
        return self.state != ReturnScreenState.PROCESSING

    @property
    def is_successful(self) -> bool:
        return self.state in (ReturnScreenState.SUCCESS, ReturnScreenState.SUCCESS_WITH_WARNING)

    @property
    def actions(self) -> list[str]:
        if self.state == ReturnScreenState.ERROR:
            return [ReturnScreenAction.RETRY.value, ReturnScreenAction.ABANDON.value]
        return []

    # === Métodos de negocio ===

    def claim(self, key: str) -> bool:
        """
        Reclama el procesamiento de una clave (order_id o los parámetros crudos).

        Returns:
            True la primera vez; False si ya se reclamó en esta carga.
        """
        if key in self._claimed:
            return False
        self._claimed.add(key)
        self.attempts += 1
        return True

    def resolve(self, outcome: ReconciliationOutcome, message: str, order_id: str | None = None) -> None:
        """Lleva la pantalla a un estado terminal."""
        if self.is_terminal:
            raise InvalidScreenTransitionError(self.state.value, outcome.value)
        self.state = _TERMINAL_BY_OUTCOME[outcome]
        self.message = message
        if order_id:
            self.order_id = order_id

    def fail(self, error_code: str, message: str) -> None:
        self.resolve(ReconciliationOutcome.ERROR, message)
        self.error_code = error_code

    def begin_retry(self) -> None:
        """Vuelve a processing; solo desde error."""
        if self.state != ReturnScreenState.ERROR:
            raise InvalidScreenTransitionError(self.state.value, ReturnScreenAction.RETRY.value)
        self.state = ReturnScreenState.PROCESSING
        self.message = None
        self.error_code = None
        self._claimed.clear()
