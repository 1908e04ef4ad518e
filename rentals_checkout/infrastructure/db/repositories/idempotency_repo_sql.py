import logging

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentals_checkout.application.interfaces.idempotency_repo import (
    IdempotencyRecord,
    IdempotencyRepo,
    LedgerUnavailableError,
)
from rentals_checkout.infrastructure.db.tables import payment_reconciliations

logger = logging.getLogger(__name__)


class IdempotencyRepoSQL(IdempotencyRepo):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get(self, scope: str, idem_key: str) -> IdempotencyRecord | None:
        stmt = (
            select(payment_reconciliations)
            .where(
                payment_reconciliations.c.scope == scope,
                payment_reconciliations.c.idem_key == idem_key,
            )
            .limit(1)
        )
        try:
            result = await self._session.execute(stmt)
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError(f"Ledger read failed: {exc}") from exc
        row = result.mappings().first()
        if not row:
            return None
        return IdempotencyRecord(
            scope=row["scope"],
            idem_key=row["idem_key"],
            request_hash=row["request_hash"],
            outcome=row["outcome"],
        )

    async def save(self, record: IdempotencyRecord) -> None:
        stmt = insert(payment_reconciliations).values(
            scope=record.scope,
            idem_key=record.idem_key,
            request_hash=record.request_hash,
            outcome=record.outcome,
        )
        try:
            async with self._session.begin_nested():
                await self._session.execute(stmt)
        except IntegrityError:
            # Otro worker registró la misma clave primero: el primer registro gana.
            logger.info(
                "Idempotency record already present",
                extra={"scope": record.scope, "idem_key": record.idem_key},
            )
        except SQLAlchemyError as exc:
            raise LedgerUnavailableError(f"Ledger write failed: {exc}") from exc
