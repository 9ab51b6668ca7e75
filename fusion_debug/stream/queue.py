"""Per-stream pending operation queues owned by the runtime."""

import itertools
import logging
import threading

from fusion_debug.ir import OperationRecord

logger = logging.getLogger(__name__)

StreamId = int

_stream_ids = itertools.count()
_local = threading.local()


def current_stream_id() -> StreamId:
    """Return the stream id of the calling thread, allocating one on first use."""
    stream_id = getattr(_local, "stream_id", None)
    if stream_id is None:
        stream_id = next(_stream_ids)
        _local.stream_id = stream_id
    return stream_id


class OperationQueue:
    """Append/drain queue of pending operations for one stream.

    All access goes through a lock held only for the list operation itself,
    so readers never observe a partially drained queue.
    """

    def __init__(self, stream_id: StreamId) -> None:
        self.stream_id = stream_id
        self._operations: list[OperationRecord] = []
        self._lock = threading.Lock()

    def push(self, operation: OperationRecord) -> int:
        """Append an operation and return its position in the queue."""
        with self._lock:
            self._operations.append(operation)
            return len(self._operations) - 1

    def drain(self) -> tuple[OperationRecord, ...]:
        """Remove and return every pending operation."""
        with self._lock:
            operations = tuple(self._operations)
            self._operations.clear()
        logger.debug(f"Drained {len(operations)} operations from stream {self.stream_id}")
        return operations

    def requeue(self, operations: tuple[OperationRecord, ...]) -> None:
        """Put drained operations back ahead of anything pushed since the drain."""
        with self._lock:
            self._operations[:0] = operations
        logger.debug(f"Requeued {len(operations)} operations on stream {self.stream_id}")

    def snapshot(self) -> tuple[OperationRecord, ...]:
        """Copy the pending operations without consuming them."""
        with self._lock:
            return tuple(self._operations)

    def __len__(self) -> int:
        with self._lock:
            return len(self._operations)

    def __repr__(self) -> str:
        return f"OperationQueue(stream={self.stream_id}, pending={len(self)})"


class StreamRegistry:
    """Mapping from stream id to its OperationQueue."""

    def __init__(self) -> None:
        self._queues: dict[StreamId, OperationQueue] = {}
        self._lock = threading.Lock()

    def get_or_create(self, stream_id: StreamId) -> OperationQueue:
        with self._lock:
            queue = self._queues.get(stream_id)
            if queue is None:
                queue = OperationQueue(stream_id)
                self._queues[stream_id] = queue
                logger.debug(f"Created queue for stream {stream_id}")
            return queue

    def queue(self, stream_id: StreamId) -> OperationQueue | None:
        """Return the queue of a known stream, or ``None``."""
        with self._lock:
            return self._queues.get(stream_id)

    def stream_ids(self) -> list[StreamId]:
        """Known stream ids in ascending order."""
        with self._lock:
            return sorted(self._queues)

    def __len__(self) -> int:
        with self._lock:
            return len(self._queues)
