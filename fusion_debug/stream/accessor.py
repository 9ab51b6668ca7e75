"""Read-only snapshot access to pending stream queues.

Snapshots copy the queue under its lock and release it immediately. A
snapshot never consumes a queue; only the runtime's drain path does. Query
before forcing execution: once a stream is drained its snapshot is ``None``.
"""

import logging

from fusion_debug.stream.queue import StreamId, StreamRegistry
from fusion_debug.stream.snapshot import StreamSnapshot

logger = logging.getLogger(__name__)


class StreamQueueAccessor:
    """Capture StreamSnapshots from a StreamRegistry.

    Attributes:
        registry: Registry of the runtime whose queues are inspected.
    """

    def __init__(self, registry: StreamRegistry) -> None:
        self.registry = registry

    def snapshot(self, stream_id: StreamId) -> StreamSnapshot | None:
        """Capture the pending operations of one stream.

        Args:
            stream_id: Stream to inspect.

        Returns:
            A non-empty snapshot, or ``None`` when the stream is unknown or
            has no pending operations.
        """
        queue = self.registry.queue(stream_id)
        if queue is None:
            logger.debug(f"Stream {stream_id} is unknown")
            return None
        operations = queue.snapshot()
        if not operations:
            logger.debug(f"Stream {stream_id} has no pending operations")
            return None
        logger.debug(f"Captured {len(operations)} operations from stream {stream_id}")
        return StreamSnapshot(stream_id=stream_id, operations=operations)

    def snapshot_all(self) -> dict[StreamId, StreamSnapshot]:
        """Capture every stream that has pending operations.

        Returns:
            Snapshots keyed by stream id in ascending order. Streams without
            pending operations are omitted.
        """
        snapshots: dict[StreamId, StreamSnapshot] = {}
        for stream_id in self.registry.stream_ids():
            snapshot = self.snapshot(stream_id)
            if snapshot is not None:
                snapshots[stream_id] = snapshot
        return snapshots
