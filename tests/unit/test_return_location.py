import pytest
from fastapi import Response

from rentals_checkout.api.return_location import CookieReturnLocationSlot, is_safe_return_location
from rentals_checkout.infrastructure.in_memory import InMemoryReturnLocationSlot

COOKIE = "checkout_return_to"


@pytest.mark.parametrize(
    "location, expected",
    [
        ("/bookings", True),
        ("/bookings/BK-1?tab=pagos", True),
        ("", False),
        (None, False),
        ("bookings", False),
        ("//evil.example", False),
        ("https://evil.example", False),
        ("/redirect?to=https://evil.example", False),
        ("/\\evil.example", False),
        ("/bookings\r\nSet-Cookie: x=1", False),
    ],
)
def test_only_relative_paths_are_safe(location, expected):
    assert is_safe_return_location(location) is expected


@pytest.mark.asyncio
async def test_in_memory_slot_is_read_once():
    slot = InMemoryReturnLocationSlot()
    await slot.store("/bookings/BK-1")

    assert await slot.consume("/bookings") == "/bookings/BK-1"
    assert await slot.consume("/bookings") == "/bookings"


@pytest.mark.asyncio
async def test_in_memory_slot_newer_flow_replaces_stale_location():
    slot = InMemoryReturnLocationSlot("/bookings/BK-1")
    await slot.store("/bookings/BK-2")

    assert await slot.consume("/bookings") == "/bookings/BK-2"


@pytest.mark.asyncio
async def test_cookie_slot_store_sets_cookie():
    slot = CookieReturnLocationSlot(COOKIE)
    response = Response()

    await slot.store("/bookings/BK-1")
    slot.apply(response)

    header = response.headers["set-cookie"]
    assert header.startswith(f"{COOKIE}=")
    assert "/bookings/BK-1" in header
    assert "HttpOnly" in header
    assert "SameSite=lax" in header


@pytest.mark.asyncio
async def test_cookie_slot_consume_clears_cookie():
    slot = CookieReturnLocationSlot(COOKIE, current="/bookings/BK-1")
    response = Response()

    assert await slot.consume("/bookings") == "/bookings/BK-1"
    slot.apply(response)

    assert "Max-Age=0" in response.headers["set-cookie"]
    assert await slot.peek() is None


@pytest.mark.asyncio
async def test_cookie_slot_without_changes_leaves_response_alone():
    slot = CookieReturnLocationSlot(COOKIE, current="/bookings/BK-1")
    response = Response()

    assert await slot.peek() == "/bookings/BK-1"
    slot.apply(response)

    assert "set-cookie" not in response.headers


@pytest.mark.asyncio
async def test_cookie_slot_ignores_unsafe_cookie_and_rejects_unsafe_store():
    slot = CookieReturnLocationSlot(COOKIE, current="https://evil.example")

    assert await slot.consume("/bookings") == "/bookings"
    with pytest.raises(ValueError):
        await slot.store("//evil.example")
