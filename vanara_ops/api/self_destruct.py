"""REST endpoints for the self-destruct protocol.

Paths:
    GET  /api/self-destruct          — phase, countdown, capture flag
    POST /api/self-destruct/capture  — set / clear the capture precondition
    POST /api/self-destruct/arm      — 409 with a notice when rejected
    POST /api/self-destruct/disarm   — cancel a running countdown
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from vanara_ops.runtime.engine import SimulationEngine


class CaptureUpdate(BaseModel):
    captured: bool


def create_self_destruct_router(engine: SimulationEngine) -> APIRouter:
    router = APIRouter(prefix="/api/self-destruct", tags=["self-destruct"])

    @router.get("")
    async def status() -> dict[str, Any]:
        return engine.self_destruct.status()

    @router.post("/capture")
    async def capture(body: CaptureUpdate) -> dict[str, Any]:
        engine.set_captured(body.captured)
        return engine.self_destruct.status()

    @router.post("/arm")
    async def arm() -> Any:
        result = engine.arm_self_destruct()
        body = {
            "accepted": result.accepted,
            "notice": result.notice,
            "countdown": result.countdown,
        }
        if not result.accepted:
            return JSONResponse(status_code=409, content=body)
        return body

    @router.post("/disarm")
    async def disarm() -> dict[str, Any]:
        return {"disarmed": engine.disarm_self_destruct(), **engine.self_destruct.status()}

    return router
