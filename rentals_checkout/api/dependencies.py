from functools import lru_cache

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from rentals_checkout.api.deps import AsyncSessionLocal
from rentals_checkout.api.return_location import CookieReturnLocationSlot
from rentals_checkout.application.interfaces.clock import SystemClock
from rentals_checkout.application.single_flight import SingleFlight
from rentals_checkout.application.use_cases.compute_quote import GetQuoteUseCase
from rentals_checkout.application.use_cases.create_booking import CheckoutUseCase, CreateBookingUseCase
from rentals_checkout.application.use_cases.handle_payment_return import HandlePaymentReturnUseCase
from rentals_checkout.application.use_cases.list_payment_methods import ListPaymentMethodsUseCase
from rentals_checkout.application.use_cases.reconcile_payment import ReconcilePaymentUseCase
from rentals_checkout.config import Settings, get_settings
from rentals_checkout.infrastructure.db.repositories.idempotency_repo_sql import IdempotencyRepoSQL
from rentals_checkout.infrastructure.db.transaction_manager import SQLAlchemyTransactionManager
from rentals_checkout.infrastructure.gateways.rentals_backend_http import RentalsBackendHTTP
from rentals_checkout.infrastructure.in_memory.idempotency_repo import InMemoryIdempotencyRepo
from rentals_checkout.infrastructure.in_memory.rentals_backend import StubRentalsBackend
from rentals_checkout.infrastructure.in_memory.transaction_manager import NoopTransactionManager


async def get_session(settings: Settings = Depends(get_settings)) -> AsyncSession | None:
    if settings.use_in_memory:
        yield None
        return
    async with AsyncSessionLocal() as session:
        yield session


@lru_cache(maxsize=1)
def _single_flight() -> SingleFlight:
    # Compartido por proceso: las reconciliaciones concurrentes de un mismo
    # order_id se agrupan aunque lleguen en requests distintos.
    return SingleFlight()


@lru_cache(maxsize=1)
def _in_memory_bundle():
    return {
        "backend": StubRentalsBackend(),
        "idempotency_repo": InMemoryIdempotencyRepo(),
        "tx_manager": NoopTransactionManager(),
    }


@lru_cache(maxsize=4)
def _http_backend(
    base_url: str,
    payments_base_url: str | None,
    api_token: str | None,
    timeout_seconds: float,
) -> RentalsBackendHTTP:
    return RentalsBackendHTTP(
        base_url=base_url,
        payments_base_url=payments_base_url,
        api_token=api_token,
        timeout_seconds=timeout_seconds,
    )


def _build_use_cases(settings: Settings, backend, idempotency_repo, tx_manager) -> dict:
    clock = SystemClock()
    get_quote = GetQuoteUseCase(
        backend=backend,
        fees=settings.fee_schedule(),
        clock=clock,
        default_stay_nights=settings.default_stay_nights,
    )
    create_booking = CreateBookingUseCase(
        backend=backend,
        clock=clock,
        redirect_to=settings.default_return_location,
    )
    reconcile = ReconcilePaymentUseCase(
        backend=backend,
        idempotency_repo=idempotency_repo,
        transaction_manager=tx_manager,
        single_flight=_single_flight(),
        provider=settings.payment_provider,
    )
    return {
        "get_quote": get_quote,
        "list_payment_methods": ListPaymentMethodsUseCase(backend=backend),
        "create_booking": create_booking,
        "checkout": CheckoutUseCase(get_quote=get_quote, create_booking=create_booking),
        "reconcile_payment": reconcile,
        "payment_return": HandlePaymentReturnUseCase(
            reconcile=reconcile,
            clock=clock,
            default_return_location=settings.default_return_location,
            redirect_delay_seconds=settings.success_redirect_delay_seconds,
        ),
    }


def get_use_cases(
    settings: Settings = Depends(get_settings),
    session: AsyncSession | None = Depends(get_session),
):
    if settings.use_in_memory:
        bundle = _in_memory_bundle()
        return _build_use_cases(
            settings,
            backend=bundle["backend"],
            idempotency_repo=bundle["idempotency_repo"],
            tx_manager=bundle["tx_manager"],
        )

    if not session:
        raise RuntimeError("DB session not available")

    backend = _http_backend(
        settings.backend_base_url,
        settings.payments_api_base_url,
        settings.backend_api_token,
        settings.backend_timeout_seconds,
    )
    return _build_use_cases(
        settings,
        backend=backend,
        idempotency_repo=IdempotencyRepoSQL(session),
        tx_manager=SQLAlchemyTransactionManager(session),
    )


def get_return_slot(
    request: Request,
    settings: Settings = Depends(get_settings),
) -> CookieReturnLocationSlot:
    return CookieReturnLocationSlot.from_request(request, settings.return_location_cookie)
