"""Fusion Debug - Inspect deferred operation streams before they are fused and run.

Pipeline: pending stream queue -> snapshot -> dependency graph -> ASCII / DOT text

Subpackages:
    ir: Operation records, operation kinds, and tensor references
    stream: Per-stream queues and the read-only snapshot accessor
    graph: Dependency graph construction from tensor identifiers
    render: ASCII reports and GraphViz DOT output
    utils: Logging configuration
"""

from fusion_debug.debugger import FusionDebugger
from fusion_debug.graph import DependencyGraph, build_dependency_graph, dependency_map
from fusion_debug.ir import OperationKind, OperationRecord, Provenance, TensorRef, TensorStatus
from fusion_debug.plans import ExecutionPlan, ExecutionPlanStore, ExecutionPlanSummary
from fusion_debug.render import render_all_ascii, render_ascii, render_dot, render_plans_ascii, render_summary
from fusion_debug.runtime import DeferredRuntime
from fusion_debug.stream import StreamQueueAccessor, StreamSnapshot, current_stream_id
from fusion_debug.summary import FusionDebugSummary, summarize

__all__ = [
    "FusionDebugger",
    "DeferredRuntime",
    "DependencyGraph",
    "build_dependency_graph",
    "dependency_map",
    "OperationKind",
    "OperationRecord",
    "Provenance",
    "TensorRef",
    "TensorStatus",
    "ExecutionPlan",
    "ExecutionPlanStore",
    "ExecutionPlanSummary",
    "StreamQueueAccessor",
    "StreamSnapshot",
    "current_stream_id",
    "FusionDebugSummary",
    "summarize",
    "render_ascii",
    "render_all_ascii",
    "render_dot",
    "render_plans_ascii",
    "render_summary",
]
