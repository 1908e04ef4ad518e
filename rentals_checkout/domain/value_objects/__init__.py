"""Value Objects del dominio de checkout."""

from rentals_checkout.domain.value_objects.fee_schedule import FeeSchedule
from rentals_checkout.domain.value_objects.money import Money
from rentals_checkout.domain.value_objects.stay_dates import StayDates

__all__ = ["Money", "StayDates", "FeeSchedule"]
