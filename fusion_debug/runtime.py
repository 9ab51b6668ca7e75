"""Minimal deferred runtime: stream queues, an execution trigger, and a plan store.

Operations are only recorded, never computed. ``drain`` plays the role of
the execution trigger: it empties a stream's queue and hands the operations
to an optimizer that returns an ExecutionPlan.
"""

import logging
from collections.abc import Callable

from fusion_debug.ir import OperationRecord
from fusion_debug.plans import ExecutionPlan, ExecutionPlanStore, OnSync, Operations, Optimization
from fusion_debug.stream import StreamId, StreamRegistry, current_stream_id

logger = logging.getLogger(__name__)

Optimizer = Callable[[StreamId, tuple[OperationRecord, ...]], ExecutionPlan]


def default_optimizer(stream_id: StreamId, operations: tuple[OperationRecord, ...]) -> ExecutionPlan:
    """Fuse every drained operation into one plan, triggered on sync.

    Args:
        stream_id: Stream being drained.
        operations: Drained operations in enqueue order.

    Returns:
        A plan with an Optimization strategy when there is something to
        fuse, or an Operations strategy for a single operation.
    """
    ordering = tuple(range(len(operations)))
    if len(operations) > 1:
        strategy = Optimization(optimization=tuple(op.kind_name for op in operations), ordering=ordering)
    else:
        strategy = Operations(ordering=ordering)
    return ExecutionPlan(stream_id=stream_id, operations=operations, strategy=strategy, triggers=[OnSync()])


class DeferredRuntime:
    """Records operations per stream and turns drained streams into plans.

    Attributes:
        streams: Pending operation queues by stream id.
        plans: Every plan built so far.
        optimizer: Builds a plan from drained operations.
    """

    def __init__(self, optimizer: Optimizer = default_optimizer) -> None:
        self.streams = StreamRegistry()
        self.plans = ExecutionPlanStore()
        self.optimizer = optimizer

    def register(self, operation: OperationRecord, stream_id: StreamId | None = None) -> int:
        """Enqueue an operation.

        Args:
            operation: Operation to defer.
            stream_id: Target stream, defaults to the calling thread's stream.

        Returns:
            Position of the operation in its stream queue.
        """
        if stream_id is None:
            stream_id = current_stream_id()
        return self.streams.get_or_create(stream_id).push(operation)

    def drain(self, stream_id: StreamId | None = None) -> int | None:
        """Execute a stream: empty its queue and store the resulting plan.

        Args:
            stream_id: Stream to drain, defaults to the calling thread's stream.

        Returns:
            Id of the new plan, or ``None`` if nothing was pending.

        Raises:
            Exception: Whatever the optimizer or the plan store raises; the
                drained operations are put back at the front of the queue first.
        """
        if stream_id is None:
            stream_id = current_stream_id()
        queue = self.streams.queue(stream_id)
        if queue is None:
            return None
        operations = queue.drain()
        if not operations:
            return None
        try:
            plan_id = self.plans.add(self.optimizer(stream_id, operations))
        except Exception:
            queue.requeue(operations)
            raise
        logger.debug(f"Stream {stream_id} executed as plan {plan_id}")
        return plan_id

    def drain_all(self) -> list[int]:
        """Drain every stream, returning the ids of the plans created."""
        plan_ids = []
        for stream_id in self.streams.stream_ids():
            plan_id = self.drain(stream_id)
            if plan_id is not None:
                plan_ids.append(plan_id)
        return plan_ids
