from datetime import date

from pydantic import BaseModel, ConfigDict, Field, condecimal, constr, field_validator

from rentals_checkout.api.return_location import is_safe_return_location
from rentals_checkout.application.dtos.checkout_dto import CheckoutOutcome
from rentals_checkout.application.dtos.return_dto import PaymentReturnView
from rentals_checkout.domain.entities.payment_method import PaymentMethodOption
from rentals_checkout.domain.entities.quote import Quote

Amount = condecimal(ge=0)


class QuoteResponse(BaseModel):
    property_id: str
    check_in: date
    check_out: date
    guest_count: int
    nights: int
    currency_code: str
    nightly_rate: Amount
    subtotal: Amount
    cleaning_fee: Amount
    service_fee: Amount
    taxes: Amount
    total: Amount
    total_display: str

    @classmethod
    def from_quote(cls, quote: Quote) -> "QuoteResponse":
        return cls(
            property_id=quote.property_id,
            check_in=quote.check_in,
            check_out=quote.check_out,
            guest_count=quote.guest_count,
            nights=quote.nights,
            currency_code=quote.currency_code,
            nightly_rate=quote.nightly_rate,
            subtotal=quote.subtotal,
            cleaning_fee=quote.cleaning_fee,
            service_fee=quote.service_fee,
            taxes=quote.taxes,
            total=quote.total,
            total_display=quote.total_money.display(),
        )


class PaymentMethodResponse(BaseModel):
    code: str
    name: str
    description: str

    @classmethod
    def from_option(cls, option: PaymentMethodOption) -> "PaymentMethodResponse":
        return cls(code=option.code, name=option.name, description=option.description)


class CheckoutRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    property_id: constr(strip_whitespace=True, min_length=1, max_length=64)
    check_in: date | None = None
    check_out: date | None = None
    guest_count: int = Field(default=1, ge=1)
    payment_method: constr(strip_whitespace=True, to_lower=True, min_length=1, max_length=32)
    guest_id: str | None = None
    guest_notes: constr(max_length=1000) | None = None
    special_requests: constr(max_length=1000) | None = None


class BookingSummary(BaseModel):
    booking_id: str
    status: str
    total: Amount


class CheckoutResponse(BaseModel):
    status: str
    message: str
    redirect_to: str | None = None
    booking: BookingSummary | None = None
    payment_id: str | None = None
    payment_message: str | None = None
    error_code: str | None = None
    quote: QuoteResponse | None = None

    @classmethod
    def from_outcome(cls, outcome: CheckoutOutcome) -> "CheckoutResponse":
        booking = None
        if outcome.booking:
            booking = BookingSummary(
                booking_id=outcome.booking.id,
                status=outcome.booking.status,
                total=outcome.booking.total,
            )
        return cls(
            status=outcome.status.value,
            message=outcome.message,
            redirect_to=outcome.redirect_to,
            booking=booking,
            payment_id=outcome.payment_id,
            payment_message=outcome.payment_message,
            error_code=outcome.error_code,
            quote=QuoteResponse.from_quote(outcome.quote) if outcome.quote else None,
        )


class StartPaymentFlowRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    return_to: str = "/bookings"

    @field_validator("return_to")
    @classmethod
    def validate_return_to(cls, value: str) -> str:
        if not is_safe_return_location(value):
            raise ValueError("return_to must be a relative path on this site")
        return value


class StartPaymentFlowResponse(BaseModel):
    return_to: str


class PaymentReturnResponse(BaseModel):
    state: str
    message: str
    order_id: str | None = None
    error_code: str | None = None
    actions: list[str] = Field(default_factory=list)
    redirect_to: str | None = None
    redirect_delay_seconds: float | None = None

    @classmethod
    def from_view(cls, view: PaymentReturnView) -> "PaymentReturnResponse":
        return cls(
            state=view.state,
            message=view.message,
            order_id=view.order_id,
            error_code=view.error_code,
            actions=view.actions,
            redirect_to=view.redirect_to,
            redirect_delay_seconds=view.redirect_delay_seconds,
        )


class AbandonResponse(BaseModel):
    redirect_to: str
