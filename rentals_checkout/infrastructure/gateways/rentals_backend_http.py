import json
import logging
from collections.abc import Awaitable, Callable
from decimal import Decimal, InvalidOperation
from typing import Any

import httpx

from rentals_checkout.application.interfaces.rentals_backend import (
    BackendRejectedError,
    BackendUnavailableError,
    BookingDraft,
    CreatedBooking,
    CreatedPayment,
    PaymentAccount,
    PaymentDraft,
    RentalsBackend,
)
from rentals_checkout.domain.entities.payment_webhook_event import PaymentWebhookEvent
from rentals_checkout.domain.entities.property import Property
from rentals_checkout.infrastructure.circuit_breaker import CircuitBreakerError, backend_breaker

logger = logging.getLogger(__name__)


def _money(value: Decimal) -> str:
    return str(value)


def _booking_payload(draft: BookingDraft) -> dict[str, Any]:
    quote = draft.quote
    return {
        "property_id": quote.property_id,
        "check_in_date": quote.check_in.isoformat(),
        "check_out_date": quote.check_out.isoformat(),
        "guests_count": quote.guest_count,
        "nightly_rate": _money(quote.nightly_rate),
        "total_nights": quote.nights,
        "subtotal": _money(quote.subtotal),
        "cleaning_fee": _money(quote.cleaning_fee),
        "service_fee": _money(quote.service_fee),
        "taxes": _money(quote.taxes),
        "total_amount": _money(quote.total),
        "guest_id": draft.guest_id,
        "special_requests": draft.special_requests or "",
        "guest_notes": draft.guest_notes or "",
    }


def _payment_payload(draft: PaymentDraft) -> dict[str, Any]:
    return {
        "booking_id": draft.booking_id,
        "property_id": draft.property_id,
        "user_id": draft.user_id,
        "amount": _money(draft.amount),
        "payment_method": draft.payment_method,
        "payment_origin": draft.payment_origin,
        "description": draft.description,
        "comments": draft.comments,
        "invoice_id": draft.invoice_id,
    }


class RentalsBackendHTTP(RentalsBackend):
    def __init__(
        self,
        base_url: str,
        payments_base_url: str | None = None,
        api_token: str | None = None,
        timeout_seconds: float = 10.0,
    ) -> None:
        """
        HTTP client for the rentals backend, protected by a circuit breaker.

        Args:
            base_url: Base URL of the rentals backend API
            payments_base_url: Base URL for payment webhooks (defaults to base_url)
            api_token: Bearer token sent on every request when set
            timeout_seconds: Request timeout in seconds (1-30)
        """
        self._base_url = base_url.rstrip("/")
        self._payments_base_url = (payments_base_url or base_url).rstrip("/")
        self._api_token = api_token
        self._timeout = timeout_seconds

    def _headers(self, idempotency_key: str | None = None) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._api_token:
            headers["Authorization"] = f"Bearer {self._api_token}"
        if idempotency_key:
            headers["Idempotency-Key"] = idempotency_key
        return headers

    async def _send(
        self,
        url: str,
        call: Callable[[httpx.AsyncClient], Awaitable[httpx.Response]],
    ) -> Any:
        """
        Run one HTTP call through the circuit breaker and return the decoded body.

        Network errors, timeouts and an open circuit raise BackendUnavailableError;
        any non-2xx response raises BackendRejectedError.
        """

        async def _make_request():
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await call(client)

        try:
            response = await backend_breaker.call_async(_make_request)
        except CircuitBreakerError as exc:
            logger.error(
                "Rentals backend circuit breaker is open - service unavailable",
                extra={"url": url, "circuit_state": str(exc)},
            )
            raise BackendUnavailableError(
                "Rentals backend temporarily unavailable (circuit breaker open)"
            ) from exc
        except httpx.TimeoutException as exc:
            logger.warning(
                "Rentals backend request timeout",
                extra={"url": url, "timeout": self._timeout},
            )
            raise BackendUnavailableError(f"Timeout after {self._timeout}s") from exc
        except httpx.HTTPError as exc:
            logger.error("Rentals backend HTTP error", exc_info=exc, extra={"url": url})
            raise BackendUnavailableError(str(exc) or exc.__class__.__name__) from exc

        body: Any = None
        try:
            body = response.json()
        except (json.JSONDecodeError, ValueError):
            body = None

        if 200 <= response.status_code < 300:
            return body

        detail = body.get("detail") if isinstance(body, dict) else None
        logger.warning(
            "Rentals backend rejected request",
            extra={"url": url, "status_code": response.status_code},
        )
        raise BackendRejectedError(
            f"Rentals backend responded {response.status_code}",
            status_code=response.status_code,
            detail=detail,
        )

    async def get_property(self, property_id: str) -> Property:
        url = f"{self._base_url}/units/{property_id}"
        body = await self._send(url, lambda client: client.get(url, headers=self._headers()))
        if not isinstance(body, dict):
            raise BackendRejectedError("Malformed unit payload", status_code=200)
        try:
            nightly_rate = Decimal(str(body["nightly_rate"]))
        except (KeyError, InvalidOperation) as exc:
            raise BackendRejectedError("Unit has no valid nightly_rate", status_code=200) from exc
        return Property(
            id=str(body.get("public_id") or body.get("id") or property_id),
            nightly_rate=nightly_rate,
            title=body.get("title") or "",
            address=body.get("address"),
            max_guests=body.get("max_guests"),
        )

    async def get_payment_account(self) -> PaymentAccount:
        url = f"{self._base_url}/payment-accounts/"
        body = await self._send(url, lambda client: client.get(url, headers=self._headers()))
        if not isinstance(body, dict):
            return PaymentAccount()
        return PaymentAccount(
            yape_number=body.get("yape_number"),
            plin_number=body.get("plin_number"),
        )

    async def create_booking(self, draft: BookingDraft) -> CreatedBooking:
        url = f"{self._base_url}/bookings/"
        payload = _booking_payload(draft)
        body = await self._send(
            url, lambda client: client.post(url, json=payload, headers=self._headers())
        )
        booking_id = None
        if isinstance(body, dict):
            booking_id = body.get("public_id") or body.get("id")
        if not booking_id:
            raise BackendRejectedError(
                "Booking response has no id", status_code=200, detail="Error al crear la reserva"
            )
        return CreatedBooking(booking_id=str(booking_id), payload=body)

    async def create_payment(self, draft: PaymentDraft) -> CreatedPayment:
        url = f"{self._base_url}/payments/"
        payload = _payment_payload(draft)
        headers = self._headers(idempotency_key=draft.idempotency_key)
        body = await self._send(url, lambda client: client.post(url, json=payload, headers=headers))
        payment_id = None
        status = "pending"
        if isinstance(body, dict):
            payment_id = body.get("public_id") or body.get("id")
            status = body.get("status") or status
        return CreatedPayment(
            payment_id=str(payment_id) if payment_id is not None else None,
            status=status,
            payload=body,
        )

    async def post_payment_webhook(
        self, provider: str, event: PaymentWebhookEvent, idempotency_key: str
    ) -> dict[str, Any] | None:
        url = f"{self._payments_base_url}/webhooks/{provider}"
        payload = event.to_payload()
        headers = self._headers(idempotency_key=idempotency_key)
        body = await self._send(url, lambda client: client.post(url, json=payload, headers=headers))
        return body if isinstance(body, dict) else None
