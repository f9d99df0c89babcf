import asyncio
from typing import Dict, Set

from ....common.logging import setup_logger

logger = setup_logger(__name__)

# Channel that receives every sample regardless of counter
ALL_COUNTERS = "all"


class RealtimeBroadcaster:
    """
    Pub/sub system to push live counter samples to connected clients.
    Asynchronous; the subscriber map is guarded by a lock.
    """

    def __init__(self, queue_size: int = 50):
        self.queue_size = queue_size
        # Subscribers per channel
        self._subscribers: Dict[str, Set[asyncio.Queue]] = {}
        self._lock = asyncio.Lock()

        # Cache latest payload per channel (for new subscribers)
        self._latest_state: Dict[str, dict] = {}

    async def subscribe(self, channel: str, queue_size: int = None) -> asyncio.Queue:
        """
        Subscribes a client to updates from a channel.
        Returns an async queue that will receive the data.
        """
        queue = asyncio.Queue(maxsize=queue_size or self.queue_size)

        async with self._lock:
            if channel not in self._subscribers:
                self._subscribers[channel] = set()
            self._subscribers[channel].add(queue)

        # Send latest known state immediately
        if channel in self._latest_state:
            queue.put_nowait(self._latest_state[channel])

        return queue

    async def unsubscribe(self, channel: str, queue: asyncio.Queue):
        """Removes a subscriber."""
        async with self._lock:
            if channel in self._subscribers:
                self._subscribers[channel].discard(queue)
                if not self._subscribers[channel]:
                    del self._subscribers[channel]

    async def broadcast(self, channel: str, payload: dict):
        """
        Transmits a payload to all subscribers of a channel.
        Non-blocking: if a client is slow, it is skipped.
        """
        self._latest_state[channel] = payload

        async with self._lock:
            subscribers = self._subscribers.get(channel, set()).copy()

        for queue in subscribers:
            try:
                queue.put_nowait(payload)
            except asyncio.QueueFull:
                logger.warning(f"Skipping slow client for {channel}")

    async def publish_sample(self, payload: dict):
        """Publishes a sample on its counter channel and on the global one."""
        await self.broadcast(payload["counterName"], payload)
        await self.broadcast(ALL_COUNTERS, payload)

    def channels(self):
        return list(self._subscribers.keys())

    def latest(self, channel: str):
        return self._latest_state.get(channel)
