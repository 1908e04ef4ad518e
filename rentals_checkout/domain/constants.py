GATEWAY_STATUS_SUCCEEDED = "SUCCEEDED"

BOOKING_STATUS_CREATED = "created"

RECONCILE_SCOPE = "PAYMENT_RECONCILE"

DEFAULT_RETURN_LOCATION = "/bookings"
