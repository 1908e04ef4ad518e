from datetime import date, datetime, timezone
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from rentals_checkout.application.interfaces.rentals_backend import BackendRejectedError
from rentals_checkout.application.use_cases.compute_quote import GetQuoteUseCase, compute_quote
from rentals_checkout.domain.entities.property import Property
from rentals_checkout.domain.errors import (
    InvalidDateRangeError,
    InvalidMoneyError,
    PropertyUnavailableError,
    ValidationError,
)
from rentals_checkout.domain.value_objects.money import Money
from rentals_checkout.domain.value_objects.stay_dates import StayDates


def test_week_stay_at_100_per_night(sample_property, fees, week_stay):
    check_in, check_out = week_stay

    quote = compute_quote(sample_property, check_in, check_out, guest_count=2, fees=fees)

    assert quote.nights == 7
    assert quote.subtotal == Decimal("700.00")
    assert quote.cleaning_fee == Decimal("50.00")
    assert quote.service_fee == Decimal("70.00")
    assert quote.taxes == Decimal("147.60")
    assert quote.total == Decimal("967.60")
    assert quote.total_money.display() == "S/ 967.60"


def test_total_is_exact_sum_of_components(fees):
    prop = Property(id="p-odd", nightly_rate=Decimal("133.37"))

    quote = compute_quote(prop, date(2026, 5, 1), date(2026, 5, 4), guest_count=1, fees=fees)

    assert quote.total == quote.subtotal + quote.cleaning_fee + quote.service_fee + quote.taxes
    assert quote.service_fee == quote.subtotal * Decimal("0.10")
    assert quote.taxes == (quote.subtotal + quote.cleaning_fee + quote.service_fee) * Decimal("0.18")


def test_same_inputs_same_quote(sample_property, fees, week_stay):
    check_in, check_out = week_stay

    first = compute_quote(sample_property, check_in, check_out, 2, fees)
    second = compute_quote(sample_property, check_in, check_out, 2, fees)

    assert first == second


def test_partial_day_counts_as_a_full_night(sample_property, fees):
    check_in = datetime(2026, 3, 1, 14, 0, tzinfo=timezone.utc)
    check_out = datetime(2026, 3, 3, 10, 0, tzinfo=timezone.utc)

    quote = compute_quote(sample_property, check_in, check_out, guest_count=1, fees=fees)

    assert quote.nights == 2
    assert quote.subtotal == Decimal("200.00")


@pytest.mark.parametrize(
    "check_in, check_out",
    [
        (date(2026, 3, 8), date(2026, 3, 1)),
        (date(2026, 3, 1), date(2026, 3, 1)),
    ],
)
def test_check_out_not_after_check_in_is_rejected(sample_property, fees, check_in, check_out):
    with pytest.raises(InvalidDateRangeError):
        compute_quote(sample_property, check_in, check_out, guest_count=1, fees=fees)


@pytest.mark.parametrize(
    "check_in, check_out",
    [
        (datetime(2026, 3, 1, 15, 0, tzinfo=timezone.utc), datetime(2026, 3, 8, 11, 0)),
        (datetime(2026, 3, 1, 15, 0), datetime(2026, 3, 8, 11, 0, tzinfo=timezone.utc)),
    ],
)
def test_mixed_timezone_awareness_is_rejected(sample_property, fees, check_in, check_out):
    with pytest.raises(InvalidDateRangeError):
        compute_quote(sample_property, check_in, check_out, guest_count=1, fees=fees)


def test_date_with_aware_datetime_is_accepted(sample_property, fees):
    quote = compute_quote(
        sample_property,
        date(2026, 3, 1),
        datetime(2026, 3, 3, 10, 0, tzinfo=timezone.utc),
        guest_count=1,
        fees=fees,
    )

    assert quote.nights == 3


def test_guest_count_must_be_positive(sample_property, fees, week_stay):
    with pytest.raises(ValidationError) as exc_info:
        compute_quote(sample_property, *week_stay, guest_count=0, fees=fees)
    assert exc_info.value.field == "guest_count"


def test_guest_count_above_capacity_is_rejected(sample_property, fees, week_stay):
    with pytest.raises(ValidationError):
        compute_quote(sample_property, *week_stay, guest_count=5, fees=fees)


def test_money_rejects_negative_and_float():
    with pytest.raises(InvalidMoneyError):
        Money(Decimal("-1"))
    with pytest.raises(InvalidMoneyError):
        Money(10.5)


def test_default_stay_is_seven_nights_from_today():
    stay = StayDates.default_from(date(2026, 3, 1))

    assert stay.check_out == date(2026, 3, 8)
    assert stay.nights == 7


@pytest.mark.asyncio
async def test_get_quote_rejects_dates_before_loading_the_property(fees, fake_clock):
    backend = AsyncMock()
    use_case = GetQuoteUseCase(backend=backend, fees=fees, clock=fake_clock)

    with pytest.raises(InvalidDateRangeError):
        await use_case.execute("prop-001", check_in=date(2026, 3, 8), check_out=date(2026, 3, 1))

    backend.get_property.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_quote_defaults_to_a_week_from_today(sample_property, fees, fake_clock):
    backend = AsyncMock()
    backend.get_property.return_value = sample_property
    use_case = GetQuoteUseCase(backend=backend, fees=fees, clock=fake_clock)

    quote = await use_case.execute("prop-001")

    assert quote.check_in == fake_clock.today()
    assert quote.nights == 7
    assert quote.guest_count == 1
    assert quote.total == Decimal("967.60")


@pytest.mark.asyncio
async def test_get_quote_maps_missing_property(fees, fake_clock):
    backend = AsyncMock()
    backend.get_property.side_effect = BackendRejectedError("not found", status_code=404)
    use_case = GetQuoteUseCase(backend=backend, fees=fees, clock=fake_clock)

    with pytest.raises(PropertyUnavailableError) as exc_info:
        await use_case.execute("missing", check_in=date(2026, 3, 1), check_out=date(2026, 3, 2))

    assert exc_info.value.status_code == 404
    assert exc_info.value.message == "Recurso no encontrado."
