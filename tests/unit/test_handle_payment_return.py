from unittest.mock import AsyncMock

import pytest

from rentals_checkout.application import messages
from rentals_checkout.application.interfaces.idempotency_repo import LedgerUnavailableError
from rentals_checkout.application.interfaces.rentals_backend import BackendUnavailableError
from rentals_checkout.application.single_flight import SingleFlight
from rentals_checkout.application.use_cases.handle_payment_return import HandlePaymentReturnUseCase
from rentals_checkout.application.use_cases.reconcile_payment import ReconcilePaymentUseCase
from rentals_checkout.domain.entities.payment_return import PaymentReturnScreen, ReconciliationOutcome
from rentals_checkout.domain.errors import InvalidScreenTransitionError
from rentals_checkout.infrastructure.in_memory import (
    InMemoryIdempotencyRepo,
    InMemoryReturnLocationSlot,
    NoopTransactionManager,
    StubRentalsBackend,
)


class BrokenLedger(InMemoryIdempotencyRepo):
    async def get(self, scope, idem_key):
        raise LedgerUnavailableError("connection refused")

    async def save(self, record):
        raise LedgerUnavailableError("connection refused")


@pytest.fixture
def backend():
    return StubRentalsBackend()


@pytest.fixture
def use_case(backend, fake_clock):
    reconcile = ReconcilePaymentUseCase(
        backend=backend,
        idempotency_repo=InMemoryIdempotencyRepo(),
        transaction_manager=NoopTransactionManager(),
        single_flight=SingleFlight(),
        provider="gateway",
    )
    return HandlePaymentReturnUseCase(reconcile=reconcile, clock=fake_clock)


@pytest.mark.asyncio
async def test_success_redirects_to_stored_location(use_case, succeeded_return_params):
    slot = InMemoryReturnLocationSlot("/bookings/BK-00001")
    screen = PaymentReturnScreen()

    view = await use_case.load(screen, succeeded_return_params, slot)

    assert view.state == "success"
    assert view.message == messages.PAYMENT_CONFIRMED
    assert view.order_id == "BK-00001"
    assert view.redirect_to == "/bookings/BK-00001"
    assert view.redirect_delay_seconds == 3.0
    assert await slot.peek() is None


@pytest.mark.asyncio
async def test_success_without_stored_location_uses_default(use_case, succeeded_return_params):
    slot = InMemoryReturnLocationSlot()

    view = await use_case.load(PaymentReturnScreen(), succeeded_return_params, slot)

    assert view.redirect_to == "/bookings"


@pytest.mark.asyncio
async def test_same_order_id_in_one_load_is_processed_once(use_case, backend, succeeded_return_params):
    slot = InMemoryReturnLocationSlot()
    screen = PaymentReturnScreen()

    await use_case.load(screen, succeeded_return_params, slot)
    view = await use_case.load(screen, succeeded_return_params, slot)

    assert view.state == "success"
    assert len(backend.webhook_calls) == 1


@pytest.mark.asyncio
async def test_backend_outage_still_confirms_payment(use_case, backend, succeeded_return_params):
    backend.webhook_error = BackendUnavailableError("down")
    slot = InMemoryReturnLocationSlot("/bookings/BK-00001")

    view = await use_case.load(PaymentReturnScreen(), succeeded_return_params, slot)

    assert view.state == "success_with_warning"
    assert view.message == messages.PAYMENT_CONFIRMED_WITH_WARNING
    assert view.redirect_to == "/bookings/BK-00001"


@pytest.mark.asyncio
async def test_missing_params_show_error_and_keep_slot(use_case, backend):
    slot = InMemoryReturnLocationSlot("/bookings/BK-00001")

    view = await use_case.load(PaymentReturnScreen(), {"status": "SUCCEEDED"}, slot)

    assert view.state == "error"
    assert view.message == messages.MISSING_PAYMENT_INFO
    assert view.error_code == "MISSING_CALLBACK_PARAMETERS"
    assert view.actions == ["retry", "abandon"]
    assert view.redirect_to is None
    assert view.redirect_delay_seconds is None
    assert backend.webhook_calls == []
    assert await slot.peek() == "/bookings/BK-00001"


@pytest.mark.asyncio
async def test_failed_status_never_reaches_backend(use_case, backend):
    slot = InMemoryReturnLocationSlot()

    view = await use_case.load(
        PaymentReturnScreen(),
        {"orderId": "BK-00001", "amount": "967.60", "status": "insufficient_funds"},
        slot,
    )

    assert view.state == "error"
    assert view.error_code == "PAYMENT_NOT_SUCCEEDED"
    assert view.message == "Fondos insuficientes para completar la transacción."
    assert backend.webhook_calls == []


@pytest.mark.asyncio
async def test_retry_after_error_processes_again(fake_clock, succeeded_return_params):
    reconcile = AsyncMock(spec=ReconcilePaymentUseCase)
    reconcile.execute.return_value = ReconciliationOutcome.SUCCESS
    use_case = HandlePaymentReturnUseCase(reconcile=reconcile, clock=fake_clock)
    screen = PaymentReturnScreen()
    screen.claim("BK-00001")
    screen.fail("RECONCILIATION_TRANSPORT_ERROR", "fallo")

    view = await use_case.retry(screen, succeeded_return_params, InMemoryReturnLocationSlot())

    assert view.state == "success"
    reconcile.execute.assert_awaited_once()


@pytest.mark.asyncio
async def test_retry_from_success_is_rejected(use_case, succeeded_return_params):
    screen = PaymentReturnScreen()
    slot = InMemoryReturnLocationSlot()
    await use_case.load(screen, succeeded_return_params, slot)

    with pytest.raises(InvalidScreenTransitionError):
        await use_case.retry(screen, succeeded_return_params, slot)


@pytest.mark.asyncio
async def test_abandon_from_error_consumes_slot(use_case, backend):
    slot = InMemoryReturnLocationSlot("/properties/prop-001")
    screen = PaymentReturnScreen()
    await use_case.load(screen, {}, slot)

    location = await use_case.abandon(slot, screen)

    assert location == "/properties/prop-001"
    assert screen.redirect_to == "/properties/prop-001"
    assert await slot.peek() is None
    assert backend.webhook_calls == []


@pytest.mark.asyncio
async def test_abandon_outside_error_is_rejected(use_case):
    with pytest.raises(InvalidScreenTransitionError):
        await use_case.abandon(InMemoryReturnLocationSlot(), PaymentReturnScreen())


@pytest.mark.asyncio
async def test_ledger_outage_still_confirms_payment(backend, fake_clock, succeeded_return_params):
    reconcile = ReconcilePaymentUseCase(
        backend=backend,
        idempotency_repo=BrokenLedger(),
        transaction_manager=NoopTransactionManager(),
        single_flight=SingleFlight(),
        provider="gateway",
    )
    use_case = HandlePaymentReturnUseCase(reconcile=reconcile, clock=fake_clock)
    slot = InMemoryReturnLocationSlot("/bookings/BK-00001")

    view = await use_case.load(PaymentReturnScreen(), succeeded_return_params, slot)

    assert view.state == "success"
    assert view.message == messages.PAYMENT_CONFIRMED
    assert view.redirect_to == "/bookings/BK-00001"
    assert len(backend.webhook_calls) == 1
