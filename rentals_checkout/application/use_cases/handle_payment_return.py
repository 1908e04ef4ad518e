import logging
from collections.abc import Mapping

from rentals_checkout.application import messages
from rentals_checkout.application.dtos.return_dto import PaymentReturnView
from rentals_checkout.application.interfaces.clock import Clock
from rentals_checkout.application.interfaces.return_location import ReturnLocationSlot
from rentals_checkout.application.use_cases.parse_gateway_return import (
    PARAM_ORDER_ID,
    QueryParams,
    parse_return,
)
from rentals_checkout.application.use_cases.reconcile_payment import ReconcilePaymentUseCase
from rentals_checkout.domain.constants import DEFAULT_RETURN_LOCATION
from rentals_checkout.domain.entities.payment_return import (
    PaymentReturnScreen,
    ReconciliationOutcome,
    ReturnScreenAction,
    ReturnScreenState,
)
from rentals_checkout.domain.errors import (
    InvalidScreenTransitionError,
    MissingCallbackParametersError,
    PaymentNotSucceededError,
)

_MESSAGES_BY_OUTCOME = {
    ReconciliationOutcome.SUCCESS: messages.PAYMENT_CONFIRMED,
    ReconciliationOutcome.SUCCESS_WITH_WARNING: messages.PAYMENT_CONFIRMED_WITH_WARNING,
}


def _pairs(params: QueryParams) -> list[tuple[str, str]]:
    if hasattr(params, "multi_items"):
        return list(params.multi_items())
    if isinstance(params, Mapping):
        return list(params.items())
    return list(params)


def _screen_key(pairs: list[tuple[str, str]]) -> str:
    """Clave del guard: el orderId, o los parámetros crudos si no hay orderId."""
    for key, value in pairs:
        if key == PARAM_ORDER_ID and value and value.strip():
            return value.strip()
    return "&".join(f"{key}={value}" for key, value in sorted(pairs))


class HandlePaymentReturnUseCase:
    """Conduce la pantalla de retorno: parsear, reconciliar y devolver al usuario."""

    def __init__(
        self,
        reconcile: ReconcilePaymentUseCase,
        clock: Clock,
        default_return_location: str = DEFAULT_RETURN_LOCATION,
        redirect_delay_seconds: float = 3.0,
    ) -> None:
        self._reconcile = reconcile
        self._clock = clock
        self._default_return_location = default_return_location
        self._redirect_delay_seconds = redirect_delay_seconds
        self._logger = logging.getLogger(__name__)

    async def load(
        self,
        screen: PaymentReturnScreen,
        params: QueryParams,
        slot: ReturnLocationSlot,
    ) -> PaymentReturnView:
        pairs = _pairs(params)
        if not screen.claim(_screen_key(pairs)):
            # Misma carga, mismo orderId: no se vuelve a procesar.
            return self.render(screen)

        try:
            event = parse_return(pairs, received_at=self._clock.now())
        except MissingCallbackParametersError as exc:
            self._logger.warning(
                "Payment return rejected",
                extra={"field": exc.field, "reason": exc.reason},
            )
            screen.fail(exc.code, messages.MISSING_PAYMENT_INFO)
            return self.render(screen)
        except PaymentNotSucceededError as exc:
            self._logger.info(
                "Payment return reports a non-success status",
                extra={"provider_status": exc.provider_status},
            )
            screen.fail(exc.code, exc.message)
            return self.render(screen)

        outcome = await self._reconcile.execute(event)
        screen.resolve(outcome, _MESSAGES_BY_OUTCOME[outcome], order_id=event.order_id)
        screen.redirect_to = await slot.consume(self._default_return_location)
        return self.render(screen)

    async def retry(
        self,
        screen: PaymentReturnScreen,
        params: QueryParams,
        slot: ReturnLocationSlot,
    ) -> PaymentReturnView:
        """Vuelve a procesar los mismos parámetros; solo desde error."""
        screen.begin_retry()
        return await self.load(screen, params, slot)

    async def abandon(
        self,
        slot: ReturnLocationSlot,
        screen: PaymentReturnScreen | None = None,
    ) -> str:
        """Sale de la pantalla de error hacia la ubicación guardada, sin tocar el backend."""
        if screen is not None and screen.state != ReturnScreenState.ERROR:
            raise InvalidScreenTransitionError(screen.state.value, ReturnScreenAction.ABANDON.value)
        location = await slot.consume(self._default_return_location)
        if screen is not None:
            screen.redirect_to = location
        return location

    def render(self, screen: PaymentReturnScreen) -> PaymentReturnView:
        return PaymentReturnView(
            state=screen.state.value,
            message=screen.message or "",
            order_id=screen.order_id,
            error_code=screen.error_code,
            actions=screen.actions,
            redirect_to=screen.redirect_to,
            redirect_delay_seconds=self._redirect_delay_seconds if screen.is_successful else None,
        )
