"""Debug entry point bundling snapshot access, graph rendering and the fusion summary."""

from collections.abc import Iterable

from fusion_debug.graph import dependency_map
from fusion_debug.ir import OperationRecord
from fusion_debug.plans import ExecutionPlanSummaryWithOps
from fusion_debug.render import render_all_ascii, render_ascii, render_dot, render_plans_ascii, render_summary
from fusion_debug.render.dot import DEFAULT_TITLE
from fusion_debug.runtime import DeferredRuntime
from fusion_debug.stream import StreamId, StreamQueueAccessor, StreamSnapshot
from fusion_debug.summary import FusionDebugSummary, summarize


class FusionDebugger:
    """Read-only view of a DeferredRuntime's pending graphs and plans.

    Nothing here triggers execution. Capture the pre-optimized operations
    before forcing a stream to run: afterwards the queue is empty and
    ``pre_optimized`` returns ``None``.

    Attributes:
        runtime: Runtime under inspection.
        accessor: Snapshot accessor over the runtime's streams.
    """

    def __init__(self, runtime: DeferredRuntime) -> None:
        self.runtime = runtime
        self.accessor = StreamQueueAccessor(runtime.streams)

    def pre_optimized(self, stream_id: StreamId) -> StreamSnapshot | None:
        """Pending operations of one stream, or ``None`` if there are none."""
        return self.accessor.snapshot(stream_id)

    def all_pre_optimized(self) -> dict[StreamId, StreamSnapshot]:
        """Pending operations of every non-empty stream."""
        return self.accessor.snapshot_all()

    def ascii_graph(self, operations: Iterable[OperationRecord]) -> str:
        return render_ascii(operations)

    def all_pre_optimized_ascii_graph(self) -> str:
        return render_all_ascii(self.all_pre_optimized())

    def dot_graph(self, operations: Iterable[OperationRecord], title: str | None = None) -> str:
        if title is None:
            title = f"Stream {operations.stream_id}" if isinstance(operations, StreamSnapshot) else DEFAULT_TITLE
        return render_dot(operations, title=title)

    def dependency_map(self, operations: Iterable[OperationRecord]) -> dict[int, list[int]]:
        return dependency_map(operations)

    def fusion_summary(self) -> FusionDebugSummary:
        return summarize(self.runtime)

    def execution_plan_summaries_with_ops(self) -> list[ExecutionPlanSummaryWithOps]:
        return self.runtime.plans.summaries_with_operations()

    def post_optimized_ascii_graph(self) -> str:
        return render_plans_ascii(self.runtime.plans.plans())

    def optimization_summary(self, stream_id: StreamId) -> str:
        """Compare a stream's pending operations with every plan built so far."""
        snapshot = self.pre_optimized(stream_id)
        operations = snapshot.operations if snapshot is not None else ()
        return render_summary(operations, self.runtime.plans.summaries())
