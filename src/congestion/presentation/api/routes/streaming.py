"""
Endpoints for live sample streaming.
"""
from fastapi import FastAPI, HTTPException
from sse_starlette.sse import EventSourceResponse
import json
from ....infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster

app = FastAPI()

# Singleton broadcaster
_broadcaster = RealtimeBroadcaster()

def init_broadcaster(broadcaster: RealtimeBroadcaster):
    global _broadcaster
    _broadcaster = broadcaster

def get_broadcaster() -> RealtimeBroadcaster:
    return _broadcaster

@app.get("/stream/{counter_name}")
async def stream_counter(counter_name: str):
    """
    Server-Sent Events endpoint for live samples. Use `all` for every counter.

    Frontend usage:
    ```javascript
    const eventSource = new EventSource('/stream/Tandoor');
    eventSource.addEventListener('sample', (event) => {
        const data = JSON.parse(event.data);
        console.log('Wait time:', data.waitTime);
    });
    ```
    """
    broadcaster = get_broadcaster()
    queue = await broadcaster.subscribe(counter_name)

    async def event_generator():
        try:
            while True:
                data = await queue.get()
                yield {
                    "event": "sample",
                    "data": json.dumps(data)
                }
        finally:
            await broadcaster.unsubscribe(counter_name, queue)

    return EventSourceResponse(event_generator())

@app.get("/streams")
async def list_streams():
    """Lists channels with active subscribers."""
    return {"channels": get_broadcaster().channels()}

@app.get("/snapshot/{counter_name}")
async def get_snapshot(counter_name: str):
    """Gets latest pushed sample of a counter (polling fallback)."""
    latest = get_broadcaster().latest(counter_name)
    if latest is None:
        raise HTTPException(404, "Counter not found")
    return latest
