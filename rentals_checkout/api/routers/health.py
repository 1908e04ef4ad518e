"""
Health check endpoints for monitoring and orchestration (K8s, Docker, etc.)

Provides multiple health check endpoints:
- /health: Basic liveness check (always returns 200)
- /health/db: Reconciliation ledger database check
- /health/ready: Readiness check (ledger database and backend circuit)
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentals_checkout.api.deps import get_db_session
from rentals_checkout.infrastructure.circuit_breaker import backend_breaker

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "rentals-checkout"


@router.get("/health")
async def health_check():
    """
    Basic liveness probe.

    Returns 200 OK if the application is running.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/health/db")
async def health_check_db(session: AsyncSession = Depends(get_db_session)):
    """
    Ledger database connectivity check.

    Returns 503 Service Unavailable if the database is down.
    """
    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        return {"status": "healthy", "component": "database"}
    except SQLAlchemyError as e:
        logger.error("Database health check failed", exc_info=e)
        return JSONResponse(
            status_code=503,
            content={
                "status": "unhealthy",
                "component": "database",
                "error": "Database connection failed"
            }
        )


@router.get("/health/ready")
async def health_check_ready(session: AsyncSession = Depends(get_db_session)):
    """
    Readiness probe.

    Not ready when the ledger database is unreachable. An open backend circuit
    is reported but does not take the service out of rotation: checkout and
    payment returns degrade to their failure messages on their own.
    """
    health_status = {
        "status": "ready",
        "checks": {
            "backend_circuit": backend_breaker.current_state,
        }
    }

    try:
        result = await session.execute(text("SELECT 1"))
        result.scalar()
        health_status["checks"]["database"] = "healthy"
    except SQLAlchemyError as e:
        logger.error("Readiness check: Database unhealthy", exc_info=e)
        health_status["status"] = "not_ready"
        health_status["checks"]["database"] = "unhealthy"
        return JSONResponse(status_code=503, content=health_status)

    return health_status


@router.get("/health/live")
async def health_check_live():
    """Alias for /health for Kubernetes liveness probe."""
    return {"status": "ok", "service": SERVICE_NAME}
