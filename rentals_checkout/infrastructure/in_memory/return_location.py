import logging

from rentals_checkout.application.interfaces.return_location import ReturnLocationSlot

logger = logging.getLogger(__name__)


class InMemoryReturnLocationSlot(ReturnLocationSlot):
    """Ranura en memoria: una por flujo de pago."""

    def __init__(self, location: str | None = None) -> None:
        self._location = location

    async def store(self, location: str) -> None:
        if self._location is not None and self._location != location:
            logger.info(
                "Replacing stale return location",
                extra={"previous": self._location, "location": location},
            )
        self._location = location

    async def consume(self, default: str) -> str:
        location, self._location = self._location, None
        return location or default

    async def peek(self) -> str | None:
        return self._location
