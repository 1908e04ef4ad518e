"""Mensajes visibles para el usuario del checkout."""

from typing import Any

from rentals_checkout.application.interfaces.rentals_backend import (
    BackendError,
    BackendUnavailableError,
)

BOOKING_CREATED = "Reserva creada exitosamente"
PAYMENT_REGISTERED = "Pago registrado exitosamente"
BOOKING_CREATED_PAYMENT_FAILED = "Reserva creada pero error al registrar el pago"
BOOKING_FAILED = "Error al crear la reserva"

PAYMENT_CONFIRMED = "¡Pago confirmado! Tu reserva está lista."
PAYMENT_CONFIRMED_WITH_WARNING = (
    "Tu pago fue recibido. Estamos terminando de registrarlo; "
    "lo verás reflejado en tus reservas en unos minutos."
)
MISSING_PAYMENT_INFO = "No se recibió la información del pago. Verifica el estado en tus reservas."

_HTTP_STATUS_MESSAGES = {
    401: "Tu sesión ha expirado. Por favor, inicia sesión nuevamente.",
    403: "No tienes permisos para realizar esta acción.",
    404: "Recurso no encontrado.",
    500: "Error interno del servidor.",
}
CONNECTION_ERROR = "Error de conexión. Verifica tu conexión a internet."
UNEXPECTED_ERROR = "Ha ocurrido un error inesperado."

_PROVIDER_STATUS_MESSAGES = {
    "expired": "El tiempo para completar el pago ha expirado.",
    "cancelled": "El pago fue cancelado por el usuario.",
    "insufficient_funds": "Fondos insuficientes para completar la transacción.",
    "invalid_card": "Los datos de la tarjeta son inválidos.",
    "network_error": "Error de conexión. Por favor intenta nuevamente.",
}
PAYMENT_FAILED_DEFAULT = "Ocurrió un error inesperado durante el procesamiento del pago."


def _format_validation_detail(detail: list[Any]) -> str:
    parts = []
    for item in detail:
        if isinstance(item, dict):
            loc = ".".join(str(piece) for piece in item.get("loc", []))
            parts.append(f"{loc}: {item.get('msg', '')}" if loc else str(item.get("msg", "")))
        else:
            parts.append(str(item))
    return ", ".join(parts)


def describe_backend_error(exc: BackendError, fallback: str | None = None) -> str:
    """Traduce un error del backend al mensaje que ve el usuario."""
    if isinstance(exc, BackendUnavailableError):
        return CONNECTION_ERROR

    detail = exc.detail
    if exc.status_code == 422 and isinstance(detail, list):
        return _format_validation_detail(detail)
    if isinstance(detail, str) and detail:
        return detail
    if exc.status_code in _HTTP_STATUS_MESSAGES:
        return _HTTP_STATUS_MESSAGES[exc.status_code]
    return fallback or UNEXPECTED_ERROR


def describe_provider_status(provider_status: str | None) -> str:
    """Mensaje para un estado de pasarela distinto de éxito."""
    if not provider_status:
        return PAYMENT_FAILED_DEFAULT
    return _PROVIDER_STATUS_MESSAGES.get(provider_status.strip().lower(), PAYMENT_FAILED_DEFAULT)
