"""Tests for stream queues, the stream registry, and the snapshot accessor."""

import threading

from conftest import chain_operations, unary_op

from fusion_debug.stream import OperationQueue, StreamQueueAccessor, StreamRegistry, StreamSnapshot, current_stream_id


def _registry_with(streams: dict[int, int]) -> StreamRegistry:
    """Build a registry where stream ``k`` holds ``streams[k]`` chain-style operations."""
    registry = StreamRegistry()
    for stream_id, num_ops in streams.items():
        queue = registry.get_or_create(stream_id)
        for i in range(num_ops):
            queue.push(unary_op("Exp", i, i + 1))
    return registry


class TestOperationQueue:
    """Tests for OperationQueue push/drain/snapshot."""

    def test_push_returns_position(self) -> None:
        """push() returns the enqueue position."""
        queue = OperationQueue(stream_id=0)
        assert [queue.push(op) for op in chain_operations()] == [0, 1, 2]
        assert len(queue) == 3

    def test_snapshot_does_not_consume(self) -> None:
        """snapshot() copies the queue and leaves it intact."""
        queue = OperationQueue(stream_id=0)
        for op in chain_operations():
            queue.push(op)
        assert queue.snapshot() == chain_operations()
        assert queue.snapshot() == chain_operations()
        assert len(queue) == 3

    def test_drain_clears(self) -> None:
        """drain() returns all operations and empties the queue."""
        queue = OperationQueue(stream_id=0)
        for op in chain_operations():
            queue.push(op)
        assert queue.drain() == chain_operations()
        assert len(queue) == 0
        assert queue.drain() == ()

    def test_requeue_goes_first(self) -> None:
        """Requeued operations precede operations pushed after the drain."""
        queue = OperationQueue(stream_id=0)
        for op in chain_operations()[:2]:
            queue.push(op)
        drained = queue.drain()
        queue.push(chain_operations()[2])
        queue.requeue(drained)
        assert queue.snapshot() == chain_operations()


class TestStreamRegistry:
    """Tests for StreamRegistry."""

    def test_unknown_stream(self) -> None:
        """queue() returns None for a stream never created."""
        assert StreamRegistry().queue(7) is None

    def test_get_or_create_is_idempotent(self) -> None:
        """The same queue is returned for repeated requests."""
        registry = StreamRegistry()
        assert registry.get_or_create(3) is registry.get_or_create(3)
        assert len(registry) == 1

    def test_stream_ids_sorted(self) -> None:
        """stream_ids() lists streams in ascending order."""
        registry = _registry_with({5: 1, 1: 0, 3: 2})
        assert registry.stream_ids() == [1, 3, 5]


class TestCurrentStreamId:
    """Tests for per-thread stream ids."""

    def test_stable_within_thread(self) -> None:
        """Repeated calls on one thread return the same id."""
        assert current_stream_id() == current_stream_id()

    def test_distinct_across_threads(self) -> None:
        """Another thread gets its own stream id."""
        seen: list[int] = []
        worker = threading.Thread(target=lambda: seen.append(current_stream_id()))
        worker.start()
        worker.join()
        assert seen and seen[0] != current_stream_id()


class TestStreamQueueAccessor:
    """Tests for snapshot() and snapshot_all()."""

    def test_unknown_stream_is_absent(self) -> None:
        """Unknown streams yield None, not an empty snapshot."""
        assert StreamQueueAccessor(StreamRegistry()).snapshot(0) is None

    def test_empty_stream_is_absent(self) -> None:
        """A known stream without pending operations yields None."""
        accessor = StreamQueueAccessor(_registry_with({0: 0}))
        assert accessor.snapshot(0) is None

    def test_drained_stream_is_absent(self) -> None:
        """Once drained, a stream's snapshot is None."""
        registry = _registry_with({0: 3})
        registry.queue(0).drain()
        assert StreamQueueAccessor(registry).snapshot(0) is None

    def test_snapshot_contents(self) -> None:
        """A snapshot carries the stream id and operations in enqueue order."""
        registry = StreamRegistry()
        for op in chain_operations():
            registry.get_or_create(2).push(op)
        snapshot = StreamQueueAccessor(registry).snapshot(2)
        assert snapshot == StreamSnapshot(stream_id=2, operations=chain_operations())
        assert len(snapshot) == 3
        assert snapshot[1] == chain_operations()[1]
        assert list(snapshot) == list(chain_operations())

    def test_snapshot_does_not_consume_queue(self) -> None:
        """Taking a snapshot leaves the queue untouched."""
        registry = _registry_with({0: 3})
        accessor = StreamQueueAccessor(registry)
        accessor.snapshot(0)
        assert len(registry.queue(0)) == 3
        assert len(accessor.snapshot(0)) == 3

    def test_snapshot_is_isolated_from_later_activity(self) -> None:
        """Later pushes and drains do not change an existing snapshot."""
        registry = _registry_with({0: 2})
        snapshot = StreamQueueAccessor(registry).snapshot(0)
        registry.queue(0).push(unary_op("Log", 9, 10))
        assert len(snapshot) == 2
        registry.queue(0).drain()
        assert len(snapshot) == 2

    def test_snapshot_all_omits_empty_streams(self) -> None:
        """snapshot_all() returns only non-empty streams, keyed in ascending order."""
        accessor = StreamQueueAccessor(_registry_with({4: 1, 0: 3, 2: 0}))
        snapshots = accessor.snapshot_all()
        assert list(snapshots) == [0, 4]
        assert len(snapshots[0]) == 3
        assert len(snapshots[4]) == 1

    def test_snapshot_all_empty_registry(self) -> None:
        """No streams yields an empty mapping."""
        assert StreamQueueAccessor(StreamRegistry()).snapshot_all() == {}

    def test_snapshot_unaffected_by_concurrent_enqueue_on_other_streams(self) -> None:
        """Enqueue activity on other streams never shows up in a stream's snapshot."""
        registry = _registry_with({0: 3})
        accessor = StreamQueueAccessor(registry)

        def enqueue(stream_id: int) -> None:
            queue = registry.get_or_create(stream_id)
            for i in range(200):
                queue.push(unary_op("Exp", i, i + 1))

        workers = [threading.Thread(target=enqueue, args=(stream_id,)) for stream_id in (1, 2, 3)]
        for worker in workers:
            worker.start()
        snapshots = [accessor.snapshot(0) for _ in range(50)]
        for worker in workers:
            worker.join()

        assert all(len(snapshot) == 3 for snapshot in snapshots)
        assert [len(s) for s in accessor.snapshot_all().values()] == [3, 200, 200, 200]
