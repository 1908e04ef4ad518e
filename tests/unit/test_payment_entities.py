from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from rentals_checkout.domain.entities.payment import Payment, PaymentStatus
from rentals_checkout.domain.entities.payment_method import PaymentMethod, requires_payment_record
from rentals_checkout.domain.entities.payment_return import (
    PaymentReturnScreen,
    ReconciliationOutcome,
    ReturnScreenState,
)
from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.errors import InvalidPaymentTransitionError, InvalidScreenTransitionError

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


class TestPayment:
    def test_pending_payment_succeeds_once(self):
        payment = Payment.create_pending("BK-1", Decimal("967.60"), "yape", created_at=NOW)

        payment.succeed("BK-1", at=NOW + timedelta(minutes=5))

        assert payment.status == PaymentStatus.SUCCEEDED
        assert payment.provider_transaction_id == "BK-1"
        assert payment.is_final
        with pytest.raises(InvalidPaymentTransitionError):
            payment.succeed("BK-1", at=NOW)

    def test_failed_payment_cannot_succeed(self):
        payment = Payment.create_pending("BK-1", Decimal("10"), "plin", created_at=NOW)
        payment.fail(at=NOW)

        with pytest.raises(InvalidPaymentTransitionError) as exc_info:
            payment.succeed("BK-1", at=NOW)

        assert exc_info.value.current_status == "failed"


@pytest.mark.parametrize(
    "method, expected",
    [
        ("cash", False),
        (PaymentMethod.CASH, False),
        (" CASH ", False),
        ("yape", True),
        ("plin", True),
        ("card", True),
    ],
)
def test_only_cash_skips_the_payment_record(method, expected):
    assert requires_payment_record(method) is expected


def test_webhook_event_uses_order_id_as_transaction_id():
    event = PaymentWebhookEvent("BK-7", Decimal("150.00"), "SUCCEEDED", received_at=NOW)

    payload = event.to_payload()

    assert payload["provider_transaction_id"] == "BK-7"
    assert payload["amount"] == "150.00"
    assert payload["status"] == "SUCCEEDED"


class TestPaymentReturnScreen:
    def test_claim_is_single_shot_per_key(self):
        screen = PaymentReturnScreen()

        assert screen.claim("BK-1") is True
        assert screen.claim("BK-1") is False
        assert screen.attempts == 1

    def test_resolve_moves_to_terminal_state(self):
        screen = PaymentReturnScreen()

        screen.resolve(ReconciliationOutcome.SUCCESS_WITH_WARNING, "recibido", order_id="BK-1")

        assert screen.state == ReturnScreenState.SUCCESS_WITH_WARNING
        assert screen.is_successful
        assert screen.actions == []
        with pytest.raises(InvalidScreenTransitionError):
            screen.resolve(ReconciliationOutcome.SUCCESS, "otra vez")

    def test_error_offers_retry_and_abandon(self):
        screen = PaymentReturnScreen()

        screen.fail("PAYMENT_NOT_SUCCEEDED", "El pago fue cancelado por el usuario.")

        assert screen.state == ReturnScreenState.ERROR
        assert screen.actions == ["retry", "abandon"]
        assert screen.error_code == "PAYMENT_NOT_SUCCEEDED"

    def test_retry_only_from_error(self):
        screen = PaymentReturnScreen()
        screen.claim("BK-1")
        with pytest.raises(InvalidScreenTransitionError):
            screen.begin_retry()

        screen.fail("X", "fallo")
        screen.begin_retry()

        assert screen.state == ReturnScreenState.PROCESSING
        assert screen.message is None
        assert screen.claim("BK-1") is True
