"""Broadcast hub: fan-out of events to connected front-ends."""

from __future__ import annotations

import asyncio
import logging
import secrets
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol

from fastapi import WebSocket
from fastapi.encoders import jsonable_encoder
from starlette.websockets import WebSocketState

from switchdesk.realtime.events import ALL_EVENTS, EventType, make_event
from switchdesk.registry import utcnow

logger = logging.getLogger(__name__)


class Channel(Protocol):
    """A persistent bidirectional connection to one client."""

    @property
    def is_open(self) -> bool: ...

    async def send_json(self, data: dict[str, Any]) -> None: ...

    async def close(self, code: int = 1000, reason: str = "") -> None: ...


class WebSocketChannel:
    """Adapts a FastAPI WebSocket to the Channel protocol."""

    def __init__(self, websocket: WebSocket) -> None:
        self.websocket = websocket

    @property
    def is_open(self) -> bool:
        return (
            self.websocket.client_state == WebSocketState.CONNECTED
            and self.websocket.application_state == WebSocketState.CONNECTED
        )

    async def send_json(self, data: dict[str, Any]) -> None:
        await self.websocket.send_json(data)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self.websocket.application_state == WebSocketState.DISCONNECTED:
            return
        try:
            await self.websocket.close(code=code, reason=reason)
        except RuntimeError:
            # Already closed by the peer
            pass


@dataclass
class ClientConnection:
    client_id: str
    channel: Channel
    subscriptions: set[str] = field(default_factory=set)
    send_failed: bool = False
    connected_at: datetime = field(default_factory=utcnow)

    def accepts(self, event_type: str | None) -> bool:
        """Empty subscription set means everything."""
        if not self.subscriptions or event_type is None:
            return True
        return event_type in self.subscriptions or ALL_EVENTS in self.subscriptions


def generate_client_id() -> str:
    return f"client_{int(time.time() * 1000)}_{secrets.token_hex(5)[:9]}"


class BroadcastHub:
    """Owns the Client store and delivers events to open channels."""

    def __init__(self) -> None:
        self._clients: dict[str, ClientConnection] = {}

    def __len__(self) -> int:
        return len(self._clients)

    def __contains__(self, client_id: object) -> bool:
        return client_id in self._clients

    def get(self, client_id: str) -> ClientConnection | None:
        return self._clients.get(client_id)

    @property
    def clients(self) -> list[ClientConnection]:
        return list(self._clients.values())

    # --- membership ---

    async def connect(
        self,
        channel: Channel,
        greeting: Callable[[ClientConnection], Awaitable[None]] | None = None,
    ) -> ClientConnection:
        """Register a newly opened channel and announce it.

        ``greeting`` runs after registration and before the announcement, so
        the new client sees its own welcome first.
        """
        client_id = generate_client_id()
        while client_id in self._clients:
            client_id = generate_client_id()
        client = ClientConnection(client_id=client_id, channel=channel)
        self._clients[client_id] = client
        logger.info(f"Client connected: {client_id} ({len(self._clients)} total)")
        if greeting is not None:
            await greeting(client)
        await self.broadcast(make_event(EventType.CLIENT_CONNECTED, client_id=client_id))
        return client

    async def disconnect(self, client_id: str) -> bool:
        """Remove a client and announce it. Returns False if it was already gone."""
        client = self._clients.pop(client_id, None)
        if client is None:
            return False
        logger.info(f"Client disconnected: {client_id} ({len(self._clients)} remaining)")
        await self.broadcast(make_event(EventType.CLIENT_DISCONNECTED, client_id=client_id))
        return True

    # --- subscriptions ---

    def subscribe(self, client_id: str, events: list[str]) -> list[str]:
        client = self._clients.get(client_id)
        if client is None:
            return []
        client.subscriptions.update(events)
        logger.info(f"Client {client_id} subscribed to: {', '.join(events)}")
        return sorted(client.subscriptions)

    def unsubscribe(self, client_id: str, events: list[str]) -> list[str]:
        client = self._clients.get(client_id)
        if client is None:
            return []
        client.subscriptions.difference_update(events)
        logger.info(f"Client {client_id} unsubscribed from: {', '.join(events)}")
        return list(events)

    # --- delivery ---

    async def broadcast(self, event: dict[str, Any]) -> int:
        """Send ``event`` to every open, subscribed client. Returns the delivery count."""
        payload = jsonable_encoder(event)
        event_type = payload.get("type")
        delivered = 0
        for client in list(self._clients.values()):
            if not client.accepts(event_type):
                continue
            if await self._deliver(client, payload):
                delivered += 1
        return delivered

    async def send_to_one(self, client: ClientConnection, event: dict[str, Any]) -> bool:
        return await self._deliver(client, jsonable_encoder(event))

    async def _deliver(self, client: ClientConnection, payload: dict[str, Any]) -> bool:
        if not client.channel.is_open:
            return False
        try:
            await client.channel.send_json(payload)
        except Exception as e:
            # Pruned on the next sweep
            logger.warning(f"Send to {client.client_id} failed: {type(e).__name__}: {e}")
            client.send_failed = True
            return False
        return True

    # --- liveness ---

    async def sweep(self) -> list[str]:
        """Drop clients whose channel closed or whose last send failed.

        Peer liveness itself is checked by the server's websocket ping/pong;
        a peer that misses it surfaces here as a closed channel.
        """
        terminated: list[str] = []
        for client in list(self._clients.values()):
            if client.channel.is_open and not client.send_failed:
                continue
            logger.warning(f"Terminating dead connection: {client.client_id}")
            await client.channel.close(code=1001, reason="Liveness check failed")
            await self.disconnect(client.client_id)
            terminated.append(client.client_id)
        return terminated

    async def run_liveness(self, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            await self.sweep()

    async def close_all(self, code: int = 1001, reason: str = "") -> None:
        clients = list(self._clients.values())
        self._clients.clear()
        for client in clients:
            try:
                await client.channel.close(code=code, reason=reason)
            except Exception as e:
                logger.warning(f"Error closing {client.client_id}: {type(e).__name__}: {e}")
