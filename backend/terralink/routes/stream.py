# terralink/routes/stream.py
# ------------------------------------------------------------
# Live farm simulation: snapshot endpoint + Server-Sent Events
#
# The background loop in main.py advances the simulation.
# The stream endpoint polls its latest value and pushes each
# new reading to connected clients:
# - event: live_reading
# - data: <json>
# ------------------------------------------------------------

from fastapi import APIRouter
from fastapi.responses import StreamingResponse
import asyncio
import json
import time
from typing import AsyncGenerator

from ..store import get_live_simulation
from ._common import dump

router = APIRouter(tags=["stream"])


def sse(event: str, data_obj) -> str:
    """
    Build an SSE message.

    Format:
        event: name
        data: json
    """
    return f"event: {event}\ndata: {json.dumps(data_obj)}\n\n"


@router.get("/api/live")
def live_reading():
    return dump(get_live_simulation().latest)


@router.get("/api/stream")
def stream():
    """
    Live updates stream.

    Implementation notes:
    - Sends the current reading first, then each new one.
    - Sends a heartbeat periodically to keep connection alive.
    - Uses async sleep (does NOT block the server worker).
    """
    sim = get_live_simulation()

    async def gen() -> AsyncGenerator[str, None]:
        # client reconnect delay
        yield "retry: 2000\n\n"

        heartbeat_every = 10  # seconds
        poll_every = 0.5      # seconds

        last_sent = None
        last_heartbeat = time.time()

        while True:
            current = sim.latest
            if current is not last_sent:
                last_sent = current
                yield sse("live_reading", dump(current))

            now = time.time()
            if now - last_heartbeat >= heartbeat_every:
                yield sse("heartbeat", {"t": now})
                last_heartbeat = now

            await asyncio.sleep(poll_every)

    headers = {
        # SSE must not be cached
        "Cache-Control": "no-cache",
        "Connection": "keep-alive",
        # if behind nginx, prevents response buffering
        "X-Accel-Buffering": "no",
    }

    return StreamingResponse(gen(), media_type="text/event-stream", headers=headers)
