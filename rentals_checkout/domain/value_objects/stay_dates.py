"""Value Object StayDates - rango de fechas de una estadía."""

import math
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta

from rentals_checkout.domain.errors import InvalidDateRangeError

SECONDS_PER_DAY = 86400


def _as_datetime(value: date | datetime, like: date | datetime) -> datetime:
    if isinstance(value, datetime):
        return value
    tzinfo = like.tzinfo if isinstance(like, datetime) else None
    return datetime.combine(value, time.min, tzinfo=tzinfo)


def _is_aware(value: date | datetime) -> bool:
    return isinstance(value, datetime) and value.utcoffset() is not None


@dataclass(frozen=True)
class StayDates:
    """
    Value Object inmutable con la entrada y salida de una estadía.

    Regla de negocio: cualquier fracción de día cuenta como noche completa
    (noches = techo de la diferencia en días).

    Attributes:
        check_in: Fecha (o fecha/hora) de entrada.
        check_out: Fecha (o fecha/hora) de salida.
    """

    check_in: date | datetime
    check_out: date | datetime

    def __post_init__(self) -> None:
        if self.check_in is None or self.check_out is None:
            raise InvalidDateRangeError("Debes indicar las fechas de entrada y salida")
        if (
            isinstance(self.check_in, datetime)
            and isinstance(self.check_out, datetime)
            and _is_aware(self.check_in) != _is_aware(self.check_out)
        ):
            raise InvalidDateRangeError("No se pueden mezclar fechas con y sin zona horaria")
        if self._end <= self._start:
            raise InvalidDateRangeError(
                f"La fecha de salida debe ser posterior a la de entrada: "
                f"{self.check_in.isoformat()} >= {self.check_out.isoformat()}"
            )

    @property
    def _start(self) -> datetime:
        return _as_datetime(self.check_in, self.check_out)

    @property
    def _end(self) -> datetime:
        return _as_datetime(self.check_out, self.check_in)

    @property
    def duration(self) -> timedelta:
        return self._end - self._start

    @property
    def nights(self) -> int:
        """Noches cobrables; siempre >= 1."""
        return max(1, math.ceil(self.duration.total_seconds() / SECONDS_PER_DAY))

    def __str__(self) -> str:
        return f"{self.check_in.isoformat()} -> {self.check_out.isoformat()}"

    @classmethod
    def default_from(cls, today: date, nights: int = 7) -> "StayDates":
        """Estadía por defecto del checkout: hoy hasta hoy + N noches."""
        return cls(check_in=today, check_out=today + timedelta(days=nights))
