"""Live watch: connect to /ws/dashboard and print simulation events as they stream in."""

import asyncio
import json
import os

import requests
import websockets


HOST = os.environ.get("VANARA_HOST", "127.0.0.1:8000")
DASHBOARD_URI = f"ws://{HOST}/ws/dashboard"
API = f"http://{HOST}/api"


def _line(event: dict) -> str:
    name = event.get("event")
    p = event.get("payload", {})
    ts = event.get("timestamp", "")
    if name == "bot_move":
        flags = " CHARGING" if p.get("charging") else (f" -> {p['routingTo']}" if p.get("routingTo") else "")
        return f"{ts}  {p['botId']}  {p['lat']:.4f},{p['lon']:.4f}  {p['battery']:3d}%{flags}"
    if name == "detection":
        return f"{ts}  DETECTION  {p.get('type')} ({p.get('confidence', 0):.2f}) via {p.get('source')}"
    return f"{ts}  {str(name).upper()}  {json.dumps(p)[:120]}"


async def dashboard_listener(ready_event: asyncio.Event, show_moves: bool):
    """Connect to /ws/dashboard and print whatever the engine pushes."""
    async with websockets.connect(DASHBOARD_URI) as ws:
        print("[DASHBOARD] Connected — waiting for events...\n")
        ready_event.set()

        while True:
            raw = await ws.recv()
            if raw == "pong":
                continue
            data = json.loads(raw)
            if data.get("event") == "bot_move" and not show_moves:
                continue
            print(_line(data))


async def main():
    show_moves = os.environ.get("VANARA_SHOW_MOVES", "1") != "0"
    ready = asyncio.Event()
    listener_task = asyncio.create_task(dashboard_listener(ready, show_moves))
    await ready.wait()

    # Re-arm the scripted anomaly so something interesting happens within 10s
    resp = requests.post(f"{API}/feed/replay", timeout=5)
    print(f"[FEED] replay -> {resp.status_code} {resp.json()}\n")

    await asyncio.sleep(60)

    listener_task.cancel()
    try:
        await listener_task
    except asyncio.CancelledError:
        pass
    print("\nDone!")


if __name__ == "__main__":
    asyncio.run(main())
