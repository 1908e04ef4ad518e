import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from rentals_checkout.api.deps import engine
from rentals_checkout.api.routers.checkout import router as checkout_router
from rentals_checkout.api.routers.health import router as health_router
from rentals_checkout.api.routers.payment_return import router as payment_return_router
from rentals_checkout.domain.errors import DomainError, PropertyUnavailableError
from rentals_checkout.infrastructure.db.tables import metadata

# Configure structured logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DOMAIN_ERROR_STATUS = {
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_DATE_RANGE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "INVALID_MONEY": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "MISSING_CALLBACK_PARAMETERS": status.HTTP_400_BAD_REQUEST,
    "PAYMENT_NOT_SUCCEEDED": status.HTTP_400_BAD_REQUEST,
    "BOOKING_CREATION_FAILED": status.HTTP_502_BAD_GATEWAY,
    "PROPERTY_UNAVAILABLE": status.HTTP_502_BAD_GATEWAY,
    "INVALID_PAYMENT_TRANSITION": status.HTTP_409_CONFLICT,
    "INVALID_SCREEN_TRANSITION": status.HTTP_409_CONFLICT,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Reconciliation ledger tables (for dev/demo purposes)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield
    await engine.dispose()

app = FastAPI(
    title="HogarPeru Rentals Checkout API",
    version="0.1.0",
    lifespan=lifespan
)


@app.exception_handler(DomainError)
async def domain_exception_handler(request: Request, exc: DomainError):
    status_code = DOMAIN_ERROR_STATUS.get(exc.code, status.HTTP_400_BAD_REQUEST)
    if isinstance(exc, PropertyUnavailableError) and exc.status_code == status.HTTP_404_NOT_FOUND:
        status_code = status.HTTP_404_NOT_FOUND

    logger.info(
        "Domain error",
        extra={"code": exc.code, "path": request.url.path, "status_code": status_code},
    )
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
    )


# Global Exception Handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """
    Global exception handler to prevent stack trace exposure to clients.
    All unhandled exceptions are logged internally and return a generic error message.
    """
    error_id = str(uuid.uuid4())

    logger.error(
        "Unhandled exception occurred",
        exc_info=exc,
        extra={
            "error_id": error_id,
            "path": request.url.path,
            "method": request.method,
            "client_host": request.client.host if request.client else None,
        }
    )

    return JSONResponse(
        status_code=500,
        content={
            "detail": "Internal server error",
            "error_id": error_id,
            "message": "An unexpected error occurred. Please contact support with the error_id if the issue persists."
        }
    )


app.include_router(health_router, tags=["Health"])
app.include_router(checkout_router, prefix="/api/v1", tags=["Checkout"])
app.include_router(payment_return_router, prefix="/api/v1", tags=["Payment Return"])
