"""Dashboard WebSocket — streams every outbound event to connected frontends.

Path: /ws/dashboard

The frontend only listens.  A text "ping" is answered with "pong" so
clients can keep the connection alive through proxies.
"""

from __future__ import annotations

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from vanara_ops.services.dashboard import DashboardManager


def create_dashboard_router(manager: DashboardManager) -> APIRouter:
    """Factory that creates the dashboard WebSocket endpoint."""

    router = APIRouter()

    @router.websocket("/ws/dashboard")
    async def dashboard_ws(websocket: WebSocket) -> None:
        await manager.connect(websocket)
        try:
            while True:
                data = await websocket.receive_text()
                if data.strip().lower() == "ping":
                    await websocket.send_text("pong")
        except WebSocketDisconnect:
            await manager.disconnect(websocket)

    return router
