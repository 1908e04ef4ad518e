import logging
from dataclasses import dataclass
from datetime import date, datetime

from rentals_checkout.application import messages
from rentals_checkout.application.dtos.checkout_dto import CheckoutOutcome, CheckoutStatus
from rentals_checkout.application.interfaces.clock import Clock
from rentals_checkout.application.interfaces.rentals_backend import (
    BackendError,
    BookingDraft,
    CreatedPayment,
    PaymentDraft,
    RentalsBackend,
)
from rentals_checkout.application.use_cases.compute_quote import GetQuoteUseCase
from rentals_checkout.domain.constants import DEFAULT_RETURN_LOCATION
from rentals_checkout.domain.entities.booking import Booking
from rentals_checkout.domain.entities.payment import Payment
from rentals_checkout.domain.entities.payment_method import requires_payment_record
from rentals_checkout.domain.entities.quote import Quote
from rentals_checkout.domain.errors import (
    BookingCreationFailedError,
    PaymentRegistrationFailedError,
)


def payment_idempotency_key(booking_id: str) -> str:
    return f"booking-{booking_id}-payment"


class CreateBookingUseCase:
    """
    Orquesta la reserva y, si el método lo requiere, el registro del pago.

    La reserva gana: un fallo en el pago nunca deshace la reserva.
    """

    def __init__(
        self,
        backend: RentalsBackend,
        clock: Clock,
        redirect_to: str = DEFAULT_RETURN_LOCATION,
    ) -> None:
        self._backend = backend
        self._clock = clock
        self._redirect_to = redirect_to
        self._logger = logging.getLogger(__name__)

    async def execute(
        self,
        quote: Quote,
        payment_method: str,
        guest_id: str | None = None,
        guest_notes: str | None = None,
        special_requests: str | None = None,
    ) -> CheckoutOutcome:
        try:
            booking = await self._create_booking(quote, guest_id, guest_notes, special_requests)
        except BookingCreationFailedError as exc:
            return CheckoutOutcome(
                status=CheckoutStatus.BOOKING_FAILED,
                message=exc.message,
                redirect_to=None,
                quote=quote,
                error_code=exc.code,
            )

        if not requires_payment_record(payment_method):
            return CheckoutOutcome(
                status=CheckoutStatus.BOOKED,
                message=messages.BOOKING_CREATED,
                redirect_to=self._redirect_to,
                quote=quote,
                booking=booking,
            )

        try:
            payment = await self._register_payment(booking, payment_method)
        except PaymentRegistrationFailedError as exc:
            return CheckoutOutcome(
                status=CheckoutStatus.BOOKED_PAYMENT_FAILED,
                message=messages.BOOKING_CREATED_PAYMENT_FAILED,
                redirect_to=self._redirect_to,
                quote=quote,
                booking=booking,
                payment_message=exc.message,
                error_code=exc.code,
            )

        return CheckoutOutcome(
            status=CheckoutStatus.BOOKED,
            message=messages.BOOKING_CREATED,
            redirect_to=self._redirect_to,
            quote=quote,
            booking=booking,
            payment_id=payment.id,
            payment_message=messages.PAYMENT_REGISTERED,
        )

    async def _create_booking(
        self,
        quote: Quote,
        guest_id: str | None,
        guest_notes: str | None,
        special_requests: str | None,
    ) -> Booking:
        draft = BookingDraft(
            quote=quote,
            guest_id=guest_id,
            guest_notes=guest_notes,
            special_requests=special_requests,
        )
        try:
            created = await self._backend.create_booking(draft)
        except BackendError as exc:
            self._logger.warning(
                "Booking creation failed",
                extra={"property_id": quote.property_id, "status_code": exc.status_code},
            )
            raise BookingCreationFailedError(
                detail=messages.describe_backend_error(exc, fallback=messages.BOOKING_FAILED),
                status_code=exc.status_code,
            ) from exc

        if not created.booking_id:
            raise BookingCreationFailedError(detail=messages.BOOKING_FAILED)

        self._logger.info(
            "Booking created",
            extra={"booking_id": created.booking_id, "property_id": quote.property_id},
        )
        return Booking.from_quote(
            booking_id=created.booking_id,
            quote=quote,
            guest_id=guest_id,
            guest_notes=guest_notes,
        )

    async def _register_payment(self, booking: Booking, payment_method: str) -> Payment:
        payment = Payment.create_pending(
            booking_id=booking.id,
            amount=booking.total,
            method=payment_method,
            created_at=self._clock.now(),
        )
        draft = PaymentDraft(
            booking_id=booking.id,
            property_id=booking.property_id,
            user_id=booking.guest_id,
            amount=payment.amount,
            payment_method=payment.method,
            payment_origin=payment.method,
            description=f"Pago por reserva {booking.id}",
            comments=f"Reserva del {booking.check_in.isoformat()} al {booking.check_out.isoformat()}",
            invoice_id=f"inv_{booking.id}",
            idempotency_key=payment_idempotency_key(booking.id),
        )
        try:
            created: CreatedPayment = await self._backend.create_payment(draft)
        except BackendError as exc:
            self._logger.warning(
                "Payment registration failed, booking kept",
                extra={"booking_id": booking.id, "status_code": exc.status_code},
            )
            raise PaymentRegistrationFailedError(
                booking.id, detail=messages.describe_backend_error(exc)
            ) from exc

        payment.id = created.payment_id
        self._logger.info(
            "Payment registered",
            extra={"booking_id": booking.id, "payment_id": created.payment_id},
        )
        return payment


@dataclass
class CheckoutCommand:
    property_id: str
    payment_method: str
    check_in: date | datetime | None = None
    check_out: date | datetime | None = None
    guest_count: int = 1
    guest_id: str | None = None
    guest_notes: str | None = None
    special_requests: str | None = None


class CheckoutUseCase:
    """Presupuesto + reserva + pago en una sola acción del usuario."""

    def __init__(self, get_quote: GetQuoteUseCase, create_booking: CreateBookingUseCase) -> None:
        self._get_quote = get_quote
        self._create_booking = create_booking

    async def execute(self, command: CheckoutCommand) -> CheckoutOutcome:
        quote = await self._get_quote.execute(
            property_id=command.property_id,
            check_in=command.check_in,
            check_out=command.check_out,
            guest_count=command.guest_count,
        )
        return await self._create_booking.execute(
            quote=quote,
            payment_method=command.payment_method,
            guest_id=command.guest_id,
            guest_notes=command.guest_notes,
            special_requests=command.special_requests,
        )
