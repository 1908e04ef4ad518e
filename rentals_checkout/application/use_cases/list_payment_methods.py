import logging

from rentals_checkout.application.interfaces.rentals_backend import BackendError, RentalsBackend
from rentals_checkout.domain.entities.payment_method import PaymentMethod, PaymentMethodOption

CASH_OPTION = PaymentMethodOption(
    code=PaymentMethod.CASH.value,
    name="Efectivo",
    description="Pago en efectivo",
)


class ListPaymentMethodsUseCase:
    """Métodos de pago que ofrece el anfitrión. Efectivo siempre está disponible."""

    def __init__(self, backend: RentalsBackend) -> None:
        self._backend = backend
        self._logger = logging.getLogger(__name__)

    async def execute(self) -> list[PaymentMethodOption]:
        try:
            account = await self._backend.get_payment_account()
        except BackendError as exc:
            self._logger.warning(
                "Payment account unavailable, offering cash only",
                extra={"status_code": exc.status_code},
            )
            return [CASH_OPTION]

        options: list[PaymentMethodOption] = []
        if account.plin_number:
            options.append(
                PaymentMethodOption(
                    code=PaymentMethod.PLIN.value,
                    name="Plin",
                    description=f"Plin: # {account.plin_number}",
                )
            )
        if account.yape_number:
            options.append(
                PaymentMethodOption(
                    code=PaymentMethod.YAPE.value,
                    name="Yape",
                    description=f"Yape: # {account.yape_number}",
                )
            )
        options.append(CASH_OPTION)
        return options
