import logging
from datetime import date, datetime, timedelta

from rentals_checkout.application.interfaces.clock import Clock
from rentals_checkout.application.interfaces.rentals_backend import BackendError, RentalsBackend
from rentals_checkout.application.messages import describe_backend_error
from rentals_checkout.domain.entities.property import Property
from rentals_checkout.domain.entities.quote import Quote
from rentals_checkout.domain.errors import PropertyUnavailableError, ValidationError
from rentals_checkout.domain.value_objects.fee_schedule import FeeSchedule
from rentals_checkout.domain.value_objects.stay_dates import StayDates

logger = logging.getLogger(__name__)


def compute_quote(
    property: Property,
    check_in: date | datetime,
    check_out: date | datetime,
    guest_count: int,
    fees: FeeSchedule,
) -> Quote:
    """Función pura: mismas entradas, mismo presupuesto."""
    stay = StayDates(check_in=check_in, check_out=check_out)
    return Quote.compute(property=property, stay=stay, guest_count=guest_count, fees=fees)


async def load_property(backend: RentalsBackend, property_id: str) -> Property:
    try:
        return await backend.get_property(property_id)
    except BackendError as exc:
        logger.warning(
            "Property could not be loaded",
            extra={"property_id": property_id, "status_code": exc.status_code},
        )
        raise PropertyUnavailableError(
            property_id,
            detail=describe_backend_error(exc),
            status_code=exc.status_code,
        ) from exc


class GetQuoteUseCase:
    def __init__(
        self,
        backend: RentalsBackend,
        fees: FeeSchedule,
        clock: Clock,
        default_stay_nights: int = 7,
    ) -> None:
        self._backend = backend
        self._fees = fees
        self._clock = clock
        self._default_stay_nights = default_stay_nights

    def resolve_stay(
        self,
        check_in: date | datetime | None,
        check_out: date | datetime | None,
    ) -> StayDates:
        """Aplica la estadía por defecto (hoy + N noches) a las fechas ausentes."""
        if check_in is None and check_out is None:
            return StayDates.default_from(self._clock.today(), self._default_stay_nights)
        if check_in is None:
            check_in = self._clock.today()
        if check_out is None:
            check_out = check_in + timedelta(days=self._default_stay_nights)
        return StayDates(check_in=check_in, check_out=check_out)

    async def execute(
        self,
        property_id: str,
        check_in: date | datetime | None = None,
        check_out: date | datetime | None = None,
        guest_count: int = 1,
    ) -> Quote:
        # Fechas y huéspedes se validan antes de cualquier llamada de red.
        stay = self.resolve_stay(check_in, check_out)
        if guest_count < 1:
            raise ValidationError("guest_count", "debe haber al menos 1 huésped")

        property = await load_property(self._backend, property_id)
        quote = Quote.compute(property=property, stay=stay, guest_count=guest_count, fees=self._fees)
        logger.info(
            "Quote computed",
            extra={"property_id": property_id, "nights": quote.nights, "total": str(quote.total)},
        )
        return quote
