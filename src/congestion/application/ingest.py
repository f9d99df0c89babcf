from fastapi.concurrency import run_in_threadpool
from ...common.logging import setup_logger
from ...common.schemas.counter import CounterMessage, CounterRecord
from ..domain.repositories import CounterSampleRepository
from ..infrastructure.broadcast.realtime_broadcaster import RealtimeBroadcaster

logger = setup_logger(__name__)


class CounterIngestService:
    """
    Stores incoming counter messages as-is and pushes them to live clients.
    """
    def __init__(self, repository: CounterSampleRepository, broadcaster: RealtimeBroadcaster):
        self.repository = repository
        self.broadcaster = broadcaster

    async def process(self, message: CounterMessage) -> CounterRecord:
        logger.info(f"Processing message from device={message.device_id} counter={message.counter_name}")

        # Blocking database write runs in the threadpool
        saved = await run_in_threadpool(
            self.repository.save,
            device_id=message.device_id,
            counter_name=message.counter_name,
            occupancy=message.occupancy,
            in_count=message.in_count,
            wait_time=message.wait_time_minutes,
        )
        record = CounterRecord.model_validate(saved)

        await self.broadcaster.publish_sample(serialize_record(record))
        return record


def serialize_record(record: CounterRecord) -> dict:
    """
    Converts a CounterRecord to the JSON-serializable live payload.
    """
    return record.model_dump(mode="json", by_alias=True)
