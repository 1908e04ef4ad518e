"""Excepciones de dominio para el checkout de alquileres."""


class DomainError(Exception):
    """Clase base para todos los errores de dominio."""

    def __init__(self, message: str, code: str | None = None):
        self.message = message
        self.code = code or self.__class__.__name__
        super().__init__(self.message)


# === Errores de Validación ===


class ValidationError(DomainError):
    """Error de validación de datos de entrada."""

    def __init__(self, field: str, message: str):
        super().__init__(
            message=f"Validación fallida en '{field}': {message}",
            code="VALIDATION_ERROR",
        )
        self.field = field


class InvalidDateRangeError(DomainError):
    """Rango de fechas inválido (salida no posterior a la entrada)."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_DATE_RANGE")


class InvalidMoneyError(DomainError):
    """Monto monetario inválido."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_MONEY")


# === Errores de Propiedad ===


class PropertyUnavailableError(DomainError):
    """No se pudo cargar la propiedad desde el backend."""

    def __init__(self, property_id: str, detail: str | None = None, status_code: int | None = None):
        super().__init__(
            message=detail or f"No se pudo cargar la propiedad {property_id}",
            code="PROPERTY_UNAVAILABLE",
        )
        self.property_id = property_id
        self.status_code = status_code


# === Errores de Reserva y Pago ===


class BookingCreationFailedError(DomainError):
    """El backend no creó la reserva. No se intenta ningún pago."""

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        super().__init__(
            message=detail or "Error al crear la reserva",
            code="BOOKING_CREATION_FAILED",
        )
        self.status_code = status_code


class PaymentRegistrationFailedError(DomainError):
    """La reserva existe pero el registro del pago falló."""

    def __init__(self, booking_id: str, detail: str | None = None):
        super().__init__(
            message=detail or f"Error al registrar el pago de la reserva {booking_id}",
            code="PAYMENT_REGISTRATION_FAILED",
        )
        self.booking_id = booking_id


class InvalidPaymentTransitionError(DomainError):
    """El estado actual del pago no admite la transición pedida."""

    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            message=f"No se puede pasar un pago de '{current_status}' a '{target_status}'",
            code="INVALID_PAYMENT_TRANSITION",
        )
        self.current_status = current_status
        self.target_status = target_status


# === Errores del retorno de la pasarela ===


class MissingCallbackParametersError(DomainError):
    """La redirección de la pasarela no trae parámetros utilizables."""

    REASON_MISSING = "missing"
    REASON_INVALID = "invalid"
    REASON_UNEXPECTED = "unexpected"

    def __init__(self, field: str, reason: str = REASON_MISSING):
        messages = {
            self.REASON_MISSING: f"Falta el parámetro '{field}' en el retorno del pago",
            self.REASON_INVALID: f"El parámetro '{field}' del retorno del pago no es válido",
            self.REASON_UNEXPECTED: f"Parámetro no esperado en el retorno del pago: '{field}'",
        }
        super().__init__(
            message=messages.get(reason, messages[self.REASON_MISSING]),
            code="MISSING_CALLBACK_PARAMETERS",
        )
        self.field = field
        self.reason = reason


class PaymentNotSucceededError(DomainError):
    """La pasarela reporta un estado distinto de éxito."""

    def __init__(self, provider_status: str | None, message: str | None = None):
        super().__init__(
            message=message or f"El pago no se completó (estado: {provider_status or 'desconocido'})",
            code="PAYMENT_NOT_SUCCEEDED",
        )
        self.provider_status = provider_status


class ReconciliationTransportError(DomainError):
    """No se pudo notificar al backend el resultado del pago."""

    def __init__(self, order_id: str, detail: str | None = None):
        super().__init__(
            message=f"No se pudo notificar el pago {order_id} al backend: {detail or 'sin detalle'}",
            code="RECONCILIATION_TRANSPORT_ERROR",
        )
        self.order_id = order_id
        self.detail = detail


class InvalidScreenTransitionError(DomainError):
    """La pantalla de retorno no admite la acción en su estado actual."""

    def __init__(self, current_state: str, action: str):
        super().__init__(
            message=f"No se puede '{action}' en estado '{current_state}'",
            code="INVALID_SCREEN_TRANSITION",
        )
        self.current_state = current_state
        self.action = action
