"""Test doubles and polling helpers."""

from __future__ import annotations

import asyncio
from typing import Any


class FakeChannel:
    """In-memory Channel that records what the hub sends."""

    def __init__(self, fail_sends: bool = False) -> None:
        self.sent: list[dict[str, Any]] = []
        self.closed_with: tuple[int, str] | None = None
        self.fail_sends = fail_sends
        self._open = True

    @property
    def is_open(self) -> bool:
        return self._open

    async def send_json(self, data: dict[str, Any]) -> None:
        if self.fail_sends:
            raise ConnectionResetError("peer went away")
        self.sent.append(data)

    def drop(self) -> None:
        """Simulate the peer vanishing without a close handshake."""
        self._open = False

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self._open = False
        self.closed_with = (code, reason)

    def types(self) -> list[str]:
        return [message["type"] for message in self.sent]

    def of_type(self, event_type: str) -> list[dict[str, Any]]:
        return [message for message in self.sent if message["type"] == event_type]


async def wait_for(predicate, timeout: float = 2.0, interval: float = 0.005) -> None:
    """Poll ``predicate`` on the event loop until it holds or ``timeout`` passes."""
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    while not predicate():
        if loop.time() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(interval)


