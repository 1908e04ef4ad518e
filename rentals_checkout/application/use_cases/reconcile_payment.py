import hashlib
import json
import logging

from rentals_checkout.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
    LedgerUnavailableError,
)
from rentals_checkout.application.interfaces.rentals_backend import BackendError, RentalsBackend
from rentals_checkout.application.interfaces.transaction_manager import TransactionManager
from rentals_checkout.application.single_flight import SingleFlight
from rentals_checkout.domain.constants import RECONCILE_SCOPE
from rentals_checkout.domain.entities.payment_return import ReconciliationOutcome
from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.errors import ReconciliationTransportError


def _hash_event(event: PaymentWebhookEvent) -> str:
    normalized = json.dumps(
        {
            "order_id": event.order_id,
            "amount": str(event.amount),
            "status": event.provider_status,
        },
        sort_keys=True,
        separators=(",", ":"),
    )
    return hashlib.sha256(normalized.encode()).hexdigest()


class ReconcilePaymentUseCase:
    """
    Reenvía al backend el resultado confirmado por la pasarela.

    Como máximo un envío por order_id: las llamadas concurrentes comparten el
    mismo envío y una reconciliación exitosa queda registrada. Si el registro
    falla, el pago confirmado se sigue tratando como éxito. El backend
    recibe el order_id como Idempotency-Key; nunca se genera otro.
    """

    def __init__(
        self,
        backend: RentalsBackend,
        idempotency_repo: IdempotencyRepo,
        transaction_manager: TransactionManager,
        single_flight: SingleFlight,
        provider: str,
    ) -> None:
        self._backend = backend
        self._idempotency_repo = idempotency_repo
        self._transaction_manager = transaction_manager
        self._single_flight = single_flight
        self._provider = provider
        self._logger = logging.getLogger(__name__)

    async def execute(self, event: PaymentWebhookEvent) -> ReconciliationOutcome:
        return await self._single_flight.do(event.order_id, lambda: self._reconcile(event))

    async def _reconcile(self, event: PaymentWebhookEvent) -> ReconciliationOutcome:
        req_hash = _hash_event(event)

        existing = None
        try:
            async with self._transaction_manager.start():
                existing = await self._idempotency_repo.get(scope=RECONCILE_SCOPE, idem_key=event.order_id)
        except LedgerUnavailableError as exc:
            # El backend deduplica por order_id; se envía igual.
            self._logger.warning(
                "Reconciliation ledger unavailable, posting without replay check",
                extra={"order_id": event.order_id, "error": str(exc)},
            )
        if existing:
            if existing.request_hash != req_hash:
                self._logger.warning(
                    "Replayed payment return differs from the reconciled one",
                    extra={"order_id": event.order_id, "amount": str(event.amount)},
                )
            else:
                self._logger.info("Payment already reconciled", extra={"order_id": event.order_id})
            return ReconciliationOutcome(existing.outcome)

        try:
            await self._backend.post_payment_webhook(
                provider=self._provider,
                event=event,
                idempotency_key=event.order_id,
            )
        except BackendError as exc:
            transport_error = ReconciliationTransportError(event.order_id, exc.message)
            self._logger.warning(
                transport_error.message,
                extra={"order_id": event.order_id, "status_code": exc.status_code},
            )
            return ReconciliationOutcome.SUCCESS_WITH_WARNING

        try:
            async with self._transaction_manager.start():
                await self._idempotency_repo.save(
                    IdempotencyRecord(
                        scope=RECONCILE_SCOPE,
                        idem_key=event.order_id,
                        request_hash=req_hash,
                        outcome=ReconciliationOutcome.SUCCESS.value,
                    )
                )
        except LedgerUnavailableError as exc:
            self._logger.warning(
                "Payment reconciled but not recorded in the ledger",
                extra={"order_id": event.order_id, "error": str(exc)},
            )
            return ReconciliationOutcome.SUCCESS
        self._logger.info(
            "Payment reconciled",
            extra={"order_id": event.order_id, "amount": str(event.amount)},
        )
        return ReconciliationOutcome.SUCCESS
