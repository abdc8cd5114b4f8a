from __future__ import annotations

import asyncio
import logging
from collections import defaultdict

from fastapi import WebSocket

from impostor.api.models import LobbySummary

logger = logging.getLogger(__name__)


class LobbyUpdatesHub:
    """Pushes the public lobby view to every socket watching that lobby.

    One hub per application, built in `create_app`. Subscribers receive
    `{"type": "lobby_updated", "lobby": <Summary>}` after each join and start;
    the summary is the same secret-free view `/api/lobby/state` returns.
    """

    def __init__(self) -> None:
        self._watchers: dict[str, set[WebSocket]] = defaultdict(set)
        self._lock = asyncio.Lock()

    async def subscribe(self, summary: LobbySummary, websocket: WebSocket) -> None:
        """Accept the socket and send the current view straight away."""

        await websocket.accept()
        async with self._lock:
            self._watchers[summary.code].add(websocket)
        await websocket.send_json(lobby_updated(summary))

    async def unsubscribe(self, code: str, websocket: WebSocket) -> None:
        async with self._lock:
            watchers = self._watchers.get(code)
            if watchers is None:
                return
            watchers.discard(websocket)
            if not watchers:
                del self._watchers[code]

    def watcher_count(self, code: str) -> int:
        return len(self._watchers.get(code, ()))

    async def publish(self, summary: LobbySummary) -> int:
        """Send `summary` to the lobby's watchers; returns how many got it."""

        async with self._lock:
            targets = list(self._watchers.get(summary.code, ()))
        if not targets:
            return 0

        message = lobby_updated(summary)
        delivered = 0
        for ws in targets:
            try:
                await ws.send_json(message)
                delivered += 1
            except Exception:
                logger.debug("Dropping closed watcher of lobby %s", summary.code)
                await self.unsubscribe(summary.code, ws)
        return delivered


def lobby_updated(summary: LobbySummary) -> dict[str, object]:
    return {"type": "lobby_updated", "lobby": summary.model_dump(by_alias=True, mode="json")}
