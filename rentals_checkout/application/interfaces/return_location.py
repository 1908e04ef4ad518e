"""Interface ReturnLocationSlot - ubicación de retorno de un solo uso."""


class ReturnLocationSlot:
    """
    Ranura única para la ubicación a la que volver tras el pago.

    Se escribe al entrar al flujo de pago, se lee una sola vez al terminar y
    se borra al leerla. Una escritura nueva reemplaza a la anterior.
    """

    async def store(self, location: str) -> None:
        raise NotImplementedError

    async def consume(self, default: str) -> str:
        """Devuelve la ubicación guardada (o default) y vacía la ranura."""
        raise NotImplementedError

    async def peek(self) -> str | None:
        raise NotImplementedError
