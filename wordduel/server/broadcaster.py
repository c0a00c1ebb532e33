"""Outbound delivery of session snapshots and private notifications."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any

from fastapi import WebSocket

logger = logging.getLogger(__name__)


def envelope(event: str, data: Any) -> dict[str, Any]:
    return {"event": event, "data": data}


class Broadcaster(ABC):
    """Abstract base class for message delivery to participants."""

    @abstractmethod
    async def send(self, identity: str, event: str, data: Any) -> bool:
        """Deliver a message to one identity. Returns False if it could not be delivered."""
        pass

    @abstractmethod
    async def broadcast(self, event: str, data: Any) -> None:
        """Deliver a message to every connected identity."""
        pass


class ConnectionManager(Broadcaster):
    """WebSocket connections keyed by identity."""

    def __init__(self) -> None:
        self._by_identity: dict[str, WebSocket] = {}

    def is_connected(self, identity: str) -> bool:
        return identity in self._by_identity

    def connect(self, identity: str, ws: WebSocket) -> None:
        self._by_identity[identity] = ws

    def disconnect(self, identity: str) -> None:
        self._by_identity.pop(identity, None)

    async def send(self, identity: str, event: str, data: Any) -> bool:
        ws = self._by_identity.get(identity)
        if ws is None:
            return False
        try:
            await ws.send_json(envelope(event, data))
            return True
        except Exception as e:
            logger.warning("send to %s failed: %s", identity, e)
            return False

    async def broadcast(self, event: str, data: Any) -> None:
        dead = []
        for identity, ws in list(self._by_identity.items()):
            try:
                await ws.send_json(envelope(event, data))
            except Exception:
                dead.append(identity)
        for identity in dead:
            self.disconnect(identity)


class RecordingBroadcaster(Broadcaster):
    """In-memory broadcaster that records every message."""

    def __init__(self) -> None:
        # (recipient or None for broadcast, envelope)
        self.messages: list[tuple[str | None, dict[str, Any]]] = []

    async def send(self, identity: str, event: str, data: Any) -> bool:
        self.messages.append((identity, envelope(event, data)))
        return True

    async def broadcast(self, event: str, data: Any) -> None:
        self.messages.append((None, envelope(event, data)))

    def events(self, recipient: str | None = None) -> list[str]:
        """Event names sent privately to `recipient`, or broadcast when None."""
        return [msg["event"] for to, msg in self.messages if to == recipient]

    def last(self, event: str) -> dict[str, Any] | None:
        for _, msg in reversed(self.messages):
            if msg["event"] == event:
                return msg
        return None

    def clear(self) -> None:
        self.messages.clear()
