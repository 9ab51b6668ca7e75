"""Stream queues, snapshots, and the read-only queue accessor."""

from fusion_debug.stream.accessor import StreamQueueAccessor
from fusion_debug.stream.queue import OperationQueue, StreamId, StreamRegistry, current_stream_id
from fusion_debug.stream.snapshot import StreamSnapshot

__all__ = [
    "OperationQueue",
    "StreamId",
    "StreamRegistry",
    "StreamQueueAccessor",
    "StreamSnapshot",
    "current_stream_id",
]
