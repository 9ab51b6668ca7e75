"""Structured text reports for pending operations and execution plans.

All reports are deterministic: operations and dependencies are listed in
index order, and type statistics are sorted by name.
"""

from collections import Counter
from collections.abc import Iterable, Mapping, Sequence

from tabulate import tabulate

from fusion_debug.graph import build_dependency_graph
from fusion_debug.ir import OperationRecord
from fusion_debug.plans import ExecutionPlan, ExecutionPlanSummary, describe_strategy
from fusion_debug.stream import StreamSnapshot

__all__ = ["render_ascii", "render_all_ascii", "render_plans_ascii", "render_summary"]

GRAPH_HEADER = "Pre-optimized Operation Graph:"
FLOW_HEADER = "Dependency Flow:"
PLANS_HEADER = "Post-optimized Execution Plans:"
SUMMARY_HEADER = "Optimization Summary:"


def _heading(title: str) -> list[str]:
    return [title, "=" * len(title)]


def _finish(lines: list[str]) -> str:
    return "\n".join(lines) + "\n"


def render_ascii(operations: Iterable[OperationRecord]) -> str:
    """Render an operation sequence and its dependencies as a text report.

    Each operation block lists its kind, its inputs annotated with provenance
    (``T3(external)`` or ``T3(from Op[1])``) and its outputs. The dependency
    flow section lists only operations that depend on something.

    Args:
        operations: A StreamSnapshot or any sequence of OperationRecord.

    Returns:
        The report text.
    """
    graph = build_dependency_graph(operations)
    lines = _heading(GRAPH_HEADER) + [""]
    if not graph.operations:
        lines.append("No operations found.")
        return _finish(lines)

    for index, operation in enumerate(graph.operations):
        lines.append(f"Op[{index}]: {operation.describe()}")
        if operation.inputs:
            annotated = zip(operation.inputs, graph.provenance(index))
            lines.append("  Inputs:  " + " ".join(f"{ref}({provenance})" for ref, provenance in annotated))
        if operation.outputs:
            lines.append("  Outputs: " + " ".join(str(ref) for ref in operation.outputs))
        lines.append("")

    lines.extend(_heading(FLOW_HEADER))
    for index, dependencies in graph.dependency_map().items():
        if dependencies:
            lines.append(f"Op[{index}] depends on: {dependencies}")
    return _finish(lines)


def render_all_ascii(snapshots: Mapping[int, StreamSnapshot]) -> str:
    """Render one report per stream, in ascending stream order."""
    if not snapshots:
        return "No pending operations on any stream.\n"
    sections = [f"Stream {stream_id}:\n{render_ascii(snapshots[stream_id])}" for stream_id in sorted(snapshots)]
    return "\n".join(sections)


def render_plans_ascii(plans: Sequence[ExecutionPlan]) -> str:
    """Render execution plans with their operations, triggers and strategy.

    Args:
        plans: Plans in id order, e.g. ``ExecutionPlanStore.plans()``.

    Returns:
        The report text.
    """
    lines = _heading(PLANS_HEADER) + [""]
    if not plans:
        lines.append("No execution plans found.")
        return _finish(lines)

    for plan_id, plan in enumerate(plans):
        lines.append(f"Plan[{plan_id}]:")
        lines.append(f"  Stream: {plan.stream_id}")
        lines.append(f"  Operations: {len(plan.operations)} ops")
        lines.append(f"  Triggers: {len(plan.triggers)} triggers")
        lines.append("  Operation sequence:")
        for i, operation in enumerate(plan.operations):
            lines.append(f"    [{i}] {operation.describe()}")
        lines.append("  Strategy:")
        lines.append(describe_strategy(plan.strategy, indent="    "))
        lines.append("")
    return _finish(lines)


def render_summary(operations: Iterable[OperationRecord], summaries: Sequence[ExecutionPlanSummary]) -> str:
    """Compare pending operations against the execution plans built so far.

    Args:
        operations: Pending operations (pre-optimization).
        summaries: Plan summaries (post-optimization).

    Returns:
        The summary text with an operation-type table and, when plans
        exist, a per-plan table.
    """
    operations = tuple(operations)
    lines = _heading(SUMMARY_HEADER) + [""]
    lines.append(f"Pre-optimization:  {len(operations)} operations")
    lines.append(f"Post-optimization: {len(summaries)} execution plans")
    total_planned = sum(summary.operation_count for summary in summaries)
    lines.append(f"Total operations in plans: {total_planned}")
    if operations:
        reduction = (len(operations) - total_planned) / len(operations) * 100.0
        lines.append(f"Operation reduction: {reduction:.1f}%")
    lines.append("")

    type_counts = Counter(operation.kind_name for operation in operations)
    lines.append("Operation type distribution:")
    lines.append(tabulate(sorted(type_counts.items()), headers=["Operation type", "Count"], tablefmt="simple"))

    if summaries:
        lines.append("")
        lines.append("Execution plans:")
        rows = [[s.id, s.stream_id, s.operation_count, s.trigger_count] for s in summaries]
        lines.append(tabulate(rows, headers=["Plan", "Stream", "Operations", "Triggers"], tablefmt="simple"))
    return _finish(lines)
