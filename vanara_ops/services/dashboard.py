"""DashboardManager — pushes every outbound event to connected frontends.

Architecture:
    tick callback  →  EventEmitter.emit()  →  DashboardSink.deliver()
                                                    ↓
    FE  ←  /ws/dashboard  ←  DashboardManager.broadcast() (background task)

The sink is synchronous; it schedules the broadcast on the running event
loop and returns immediately.  Dead sockets are pruned on send failure.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from fastapi import WebSocket

from vanara_ops.domain.events import OutboundEvent
from vanara_ops.sinks.base import EventSink

logger = logging.getLogger(__name__)


class DashboardManager:
    """Tracks connected frontend WebSocket clients and broadcasts events."""

    def __init__(self) -> None:
        self._clients: set[WebSocket] = set()
        self._lock = asyncio.Lock()

    # ── Client management ────────────────────────────────────────────

    async def connect(self, ws: WebSocket) -> None:
        await ws.accept()
        async with self._lock:
            self._clients.add(ws)
        logger.info("Dashboard client connected (%d total)", len(self._clients))

    async def disconnect(self, ws: WebSocket) -> None:
        async with self._lock:
            self._clients.discard(ws)
        logger.info("Dashboard client disconnected (%d remaining)", len(self._clients))

    @property
    def client_count(self) -> int:
        return len(self._clients)

    # ── Broadcast ────────────────────────────────────────────────────

    async def broadcast(self, payload: dict[str, Any]) -> None:
        """Send payload to all connected dashboard clients."""
        message = json.dumps(payload, default=str)
        dead: set[WebSocket] = set()

        async with self._lock:
            clients = set(self._clients)

        for ws in clients:
            try:
                await ws.send_text(message)
            except Exception:
                dead.add(ws)

        if dead:
            async with self._lock:
                self._clients -= dead
            logger.info("Removed %d dead dashboard client(s)", len(dead))


class DashboardSink(EventSink):
    """Bridges the synchronous emitter to the async dashboard broadcast."""

    def __init__(self, manager: DashboardManager) -> None:
        self._manager = manager
        self._pending: set[asyncio.Task] = set()

    @property
    def sink_name(self) -> str:
        return "dashboard"

    def deliver(self, event: OutboundEvent) -> None:
        if not self._manager.client_count:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # Called outside the event loop (e.g. from a sync test); nobody to push to.
            return
        task = loop.create_task(self._manager.broadcast(event.to_wire()))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
