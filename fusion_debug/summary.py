"""Aggregate statistics over every stream and the plans built from them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from fusion_debug.plans import ExecutionPlanSummary
from fusion_debug.stream import StreamQueueAccessor

if TYPE_CHECKING:
    from fusion_debug.runtime import DeferredRuntime


@dataclass(frozen=True)
class FusionDebugSummary:
    """Point-in-time fusion state.

    Attributes:
        stream_count: Streams with pending operations or at least one plan.
        total_operations: Pending operations summed over all streams.
        execution_plan_count: Plans in the plan store.
        execution_plan_summaries: Copied per-plan statistics, in id order.
    """

    stream_count: int
    total_operations: int
    execution_plan_count: int
    execution_plan_summaries: tuple[ExecutionPlanSummary, ...]


def summarize(runtime: DeferredRuntime) -> FusionDebugSummary:
    """Recompute the fusion summary from the runtime's current state.

    Args:
        runtime: Runtime whose streams and plan store are read.

    Returns:
        A fresh FusionDebugSummary; nothing is cached between calls.
    """
    snapshots = StreamQueueAccessor(runtime.streams).snapshot_all()
    summaries = tuple(runtime.plans.summaries())
    active_streams = set(snapshots) | {summary.stream_id for summary in summaries}
    return FusionDebugSummary(
        stream_count=len(active_streams),
        total_operations=sum(len(snapshot) for snapshot in snapshots.values()),
        execution_plan_count=len(summaries),
        execution_plan_summaries=summaries,
    )
