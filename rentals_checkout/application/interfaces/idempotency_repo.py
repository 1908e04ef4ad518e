from dataclasses import dataclass


class LedgerUnavailableError(Exception):
    """El registro de reconciliaciones no se pudo leer o escribir."""


@dataclass
class IdempotencyRecord:
    scope: str
    idem_key: str
    request_hash: str
    outcome: str


class IdempotencyRepo:
    async def get(self, scope: str, idem_key: str) -> IdempotencyRecord | None:
        raise NotImplementedError

    async def save(self, record: IdempotencyRecord) -> None:
        raise NotImplementedError
