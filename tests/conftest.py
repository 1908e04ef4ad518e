"""
Pytest configuration and shared fixtures.

Este módulo provee fixtures reutilizables para:
- Cliente HTTP de prueba (FastAPI TestClient) sobre el stack en memoria
- Motor SQLite in-memory para el registro de reconciliaciones
- Datos de prueba (propiedad, presupuesto, parámetros de retorno)
- Reseteo del circuit breaker y de los singletons en memoria
"""

from collections.abc import AsyncGenerator, Generator
from datetime import date, datetime, timezone
from decimal import Decimal

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from rentals_checkout.api.dependencies import _in_memory_bundle, _single_flight
from rentals_checkout.application.interfaces.clock import FakeClock
from rentals_checkout.domain.entities.property import Property
from rentals_checkout.domain.value_objects.fee_schedule import FeeSchedule
from rentals_checkout.infrastructure.db.tables import metadata
from rentals_checkout.main import app

TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


# ============================================================================
# FIXTURES DE BASE DE DATOS
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(test_engine) -> AsyncGenerator[AsyncSession, None]:
    session_maker = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_maker() as session:
        yield session


# ============================================================================
# FIXTURES DE CLIENTE HTTP
# ============================================================================

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """TestClient sobre el stack en memoria (USE_IN_MEMORY=true por defecto)."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def stub_backend():
    """El backend en memoria que usan los endpoints durante el test."""
    return _in_memory_bundle()["backend"]


# ============================================================================
# FIXTURES DE DATOS DE PRUEBA
# ============================================================================

@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def fake_clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def fees() -> FeeSchedule:
    return FeeSchedule(
        cleaning_fee=Decimal("50"),
        service_fee_rate=Decimal("0.10"),
        tax_rate=Decimal("0.18"),
        currency_code="PEN",
    )


@pytest.fixture
def sample_property() -> Property:
    return Property(
        id="prop-001",
        nightly_rate=Decimal("100.00"),
        title="Departamento en Miraflores",
        address="Av. Larco 123, Miraflores, Lima",
        max_guests=4,
    )


@pytest.fixture
def week_stay() -> tuple[date, date]:
    return date(2026, 3, 1), date(2026, 3, 8)


@pytest.fixture
def sample_checkout_payload():
    return {
        "property_id": "prop-001",
        "check_in": "2026-03-01",
        "check_out": "2026-03-08",
        "guest_count": 2,
        "payment_method": "yape",
        "guest_id": "user-42",
        "guest_notes": "Llegamos de noche",
    }


@pytest.fixture
def succeeded_return_params():
    return {"orderId": "BK-00001", "amount": "967.60", "status": "SUCCEEDED"}


# ============================================================================
# MARKERS DE PYTEST
# ============================================================================

def pytest_configure(config):
    config.addinivalue_line(
        "markers",
        "integration: Tests que levantan la app o una base SQLite"
    )
    config.addinivalue_line(
        "markers",
        "circuit_breaker: Tests del circuit breaker del backend"
    )


# ============================================================================
# HOOKS DE PYTEST
# ============================================================================

@pytest.fixture(autouse=True)
def reset_circuit_breakers():
    """
    Reset circuit breakers antes de cada test.
    Evita que tests fallen por breakers abiertos de tests anteriores.
    """
    from rentals_checkout.infrastructure.circuit_breaker import backend_breaker

    backend_breaker.close()
    yield
    backend_breaker.close()


@pytest.fixture(autouse=True)
def reset_in_memory_bundle():
    """Cada test arranca con backend, registro y single-flight nuevos."""
    _in_memory_bundle.cache_clear()
    _single_flight.cache_clear()
    yield
    _in_memory_bundle.cache_clear()
    _single_flight.cache_clear()
