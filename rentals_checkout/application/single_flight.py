import asyncio
from collections.abc import Awaitable, Callable
from typing import Any


class SingleFlight:
    """
    Coalesces concurrent calls that share a key into one execution.

    Callers arriving while a call for the same key is running await that call's
    result instead of starting a new one. The key is released once it finishes.
    """

    def __init__(self) -> None:
        self._inflight: dict[str, asyncio.Task] = {}

    def in_flight(self, key: str) -> bool:
        return key in self._inflight

    async def do(self, key: str, fn: Callable[[], Awaitable[Any]]) -> Any:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.ensure_future(fn())
            self._inflight[key] = task
            task.add_done_callback(lambda _: self._inflight.pop(key, None))
        return await asyncio.shield(task)
