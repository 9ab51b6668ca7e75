"""Execution plans produced when a stream is drained, and the store that keeps them.

Plans are built by the runtime's optimizer; this module only holds them and
hands out copied summaries so that debug views stay valid after later
optimizer activity.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, NamedTuple

from fusion_debug.ir import OperationRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionTrigger:
    """Criterion signalling when a plan should be executed."""

    def describe(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class OnOperations(ExecutionTrigger):
    """Execute once the given operations have been enqueued."""

    operations: tuple[OperationRecord, ...] = ()

    def describe(self) -> str:
        kinds = ", ".join(operation.kind_name for operation in self.operations)
        return f"OnOperations([{kinds}])"


@dataclass(frozen=True)
class OnSync(ExecutionTrigger):
    """Execute when the stream is synchronized (e.g., a tensor is read)."""


@dataclass(frozen=True)
class Always(ExecutionTrigger):
    """Execute unconditionally."""


@dataclass(frozen=True)
class ExecutionStrategy:
    """How the operations of a plan are executed."""


@dataclass(frozen=True)
class Optimization(ExecutionStrategy):
    """Run a fused optimization covering ``ordering``.

    Attributes:
        optimization: Optimizer-specific fused program (opaque here).
        ordering: Indices of the plan operations it covers, in execution order.
    """

    optimization: Any
    ordering: tuple[int, ...]


@dataclass(frozen=True)
class Operations(ExecutionStrategy):
    """Run the operations in ``ordering`` one by one, without fusion."""

    ordering: tuple[int, ...]


@dataclass(frozen=True)
class Composed(ExecutionStrategy):
    """Run several strategies in sequence."""

    strategies: tuple[ExecutionStrategy, ...]


def describe_strategy(strategy: ExecutionStrategy, indent: str = "") -> str:
    """Render a strategy, recursing into composed strategies.

    Args:
        strategy: Strategy to render.
        indent: Prefix for every produced line.

    Returns:
        Multi-line description.
    """
    if isinstance(strategy, Optimization):
        lines = [
            f"{indent}FUSED OPTIMIZATION ({len(strategy.ordering)} operations)",
            f"{indent}  Execution order: {list(strategy.ordering)}",
            f"{indent}  Optimization: {strategy.optimization!r}",
        ]
    elif isinstance(strategy, Operations):
        lines = [
            f"{indent}OPERATIONS ({len(strategy.ordering)} operations)",
            f"{indent}  Execution order: {list(strategy.ordering)}",
            f"{indent}  (No fusion optimization applied)",
        ]
    elif isinstance(strategy, Composed):
        lines = [f"{indent}COMPOSED ({len(strategy.strategies)} sub-strategies)"]
        for i, sub_strategy in enumerate(strategy.strategies):
            lines.append(f"{indent}  --- Sub-strategy {i} ---")
            lines.append(describe_strategy(sub_strategy, indent + "  "))
    else:
        raise TypeError(f"Unknown execution strategy: {strategy!r}")
    return "\n".join(lines)


@dataclass
class ExecutionPlan:
    """Outcome of optimizing the operations drained from one stream.

    Attributes:
        stream_id: Stream whose drain produced the plan.
        operations: Operations the plan covers.
        strategy: How the operations are executed.
        triggers: Criteria for executing the plan; one is enough.
    """

    stream_id: int
    operations: tuple[OperationRecord, ...]
    strategy: ExecutionStrategy
    triggers: list[ExecutionTrigger] = field(default_factory=list)


class ExecutionPlanSummary(NamedTuple):
    """Copied statistics of one execution plan."""

    id: int
    stream_id: int
    operation_count: int
    trigger_count: int


class ExecutionPlanSummaryWithOps(NamedTuple):
    """ExecutionPlanSummary plus the kind name of every operation."""

    id: int
    stream_id: int
    operation_count: int
    trigger_count: int
    operation_types: tuple[str, ...]


class ExecutionPlanDetails(NamedTuple):
    """Fully stringified view of one execution plan."""

    id: int
    stream_id: int
    operation_count: int
    operations: tuple[str, ...]
    trigger_count: int
    triggers: tuple[str, ...]
    strategy: str


class ExecutionPlanStore:
    """Registry of every execution plan built on a device.

    Plan ids are their insertion positions.
    """

    def __init__(self) -> None:
        self._plans: list[ExecutionPlan] = []
        self._lock = threading.Lock()

    def add(self, plan: ExecutionPlan) -> int:
        """Register a plan and return its id.

        Raises:
            ValueError: If the plan covers no operations.
        """
        if not plan.operations:
            raise ValueError("Can't add an execution plan without operations")
        with self._lock:
            plan_id = len(self._plans)
            self._plans.append(plan)
        logger.debug(f"Plan {plan_id}: {len(plan.operations)} operations from stream {plan.stream_id}")
        return plan_id

    def get(self, plan_id: int) -> ExecutionPlan:
        with self._lock:
            return self._plans[plan_id]

    def add_trigger(self, plan_id: int, trigger: ExecutionTrigger) -> None:
        """Add an execution criterion to a plan unless it is already present."""
        with self._lock:
            triggers = self._plans[plan_id].triggers
            if trigger not in triggers:
                triggers.append(trigger)

    def plans(self) -> tuple[ExecutionPlan, ...]:
        with self._lock:
            return tuple(self._plans)

    def stream_ids(self) -> set[int]:
        """Streams that produced at least one plan."""
        return {plan.stream_id for plan in self.plans()}

    def summaries(self) -> list[ExecutionPlanSummary]:
        return [
            ExecutionPlanSummary(plan_id, plan.stream_id, len(plan.operations), len(plan.triggers))
            for plan_id, plan in enumerate(self.plans())
        ]

    def summaries_with_operations(self) -> list[ExecutionPlanSummaryWithOps]:
        return [
            ExecutionPlanSummaryWithOps(
                plan_id,
                plan.stream_id,
                len(plan.operations),
                len(plan.triggers),
                tuple(operation.kind_name for operation in plan.operations),
            )
            for plan_id, plan in enumerate(self.plans())
        ]

    def details(self) -> list[ExecutionPlanDetails]:
        return [
            ExecutionPlanDetails(
                id=plan_id,
                stream_id=plan.stream_id,
                operation_count=len(plan.operations),
                operations=tuple(operation.describe() for operation in plan.operations),
                trigger_count=len(plan.triggers),
                triggers=tuple(trigger.describe() for trigger in plan.triggers),
                strategy=describe_strategy(plan.strategy),
            )
            for plan_id, plan in enumerate(self.plans())
        ]

    def __len__(self) -> int:
        with self._lock:
            return len(self._plans)
