from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from rentals_checkout.application.interfaces.idempotency_repo import LedgerUnavailableError
from rentals_checkout.application.interfaces.transaction_manager import TransactionManager


class SQLAlchemyTransactionManager(TransactionManager):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @asynccontextmanager
    async def start(self) -> AsyncIterator[None]:
        if self._session.in_transaction():
            yield
            return
        try:
            async with self._session.begin():
                yield
        except SQLAlchemyError as exc:
            # Fallos al abrir o confirmar la transacción del registro.
            raise LedgerUnavailableError(f"Ledger transaction failed: {exc}") from exc
