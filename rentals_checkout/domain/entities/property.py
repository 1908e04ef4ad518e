"""Entidad Property - instantánea de solo lectura de una propiedad del backend."""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class Property:
    """
    Datos de la propiedad que necesita el checkout.

    La propiedad es propiedad del backend; aquí solo se lee.
    """

    id: str
    nightly_rate: Decimal
    title: str = ""
    address: str | None = None
    max_guests: int | None = None
    currency_code: str = "PEN"
