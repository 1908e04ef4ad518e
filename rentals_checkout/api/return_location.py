"""Return-to location carried by the browser as a single cookie."""

import logging

from fastapi import Request, Response

from rentals_checkout.application.interfaces.return_location import ReturnLocationSlot

logger = logging.getLogger(__name__)

_UNSET = object()


def is_safe_return_location(location: str | None) -> bool:
    """Only same-site relative paths are accepted (no scheme, host or '//')."""
    if not location or not location.startswith("/"):
        return False
    if location.startswith("//") or "\\" in location:
        return False
    return "://" not in location and not any(ch in location for ch in "\r\n")


class CookieReturnLocationSlot(ReturnLocationSlot):
    """
    Slot backed by one cookie.

    Reads come from the incoming request; writes and the clear-on-read are
    queued and applied to the outgoing response with ``apply``.
    """

    def __init__(self, cookie_name: str, current: str | None = None) -> None:
        self._cookie_name = cookie_name
        self._current = current if is_safe_return_location(current) else None
        self._pending = _UNSET

    @classmethod
    def from_request(cls, request: Request, cookie_name: str) -> "CookieReturnLocationSlot":
        raw = request.cookies.get(cookie_name)
        current = raw or None
        if raw and not is_safe_return_location(current):
            logger.warning("Ignoring unsafe return location cookie", extra={"cookie": cookie_name})
        return cls(cookie_name=cookie_name, current=current)

    async def store(self, location: str) -> None:
        if not is_safe_return_location(location):
            raise ValueError(f"Unsafe return location: {location!r}")
        if self._current is not None and self._current != location:
            logger.info(
                "Replacing stale return location",
                extra={"previous": self._current, "location": location},
            )
        self._current = location
        self._pending = location

    async def consume(self, default: str) -> str:
        location, self._current = self._current, None
        self._pending = None
        return location or default

    async def peek(self) -> str | None:
        return self._current

    def apply(self, response: Response) -> None:
        if self._pending is _UNSET:
            return
        if self._pending is None:
            response.delete_cookie(self._cookie_name, path="/")
        else:
            response.set_cookie(
                self._cookie_name,
                self._pending,
                path="/",
                httponly=True,
                samesite="lax",
            )
