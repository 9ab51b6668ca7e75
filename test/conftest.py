"""Shared test utilities and fixtures for pytest."""

import re

import numpy as np
import pytest

from fusion_debug import DeferredRuntime, FusionDebugger
from fusion_debug.ir import NumericFloat, OperationRecord, output, record, tensor
from fusion_debug.stream import StreamSnapshot

DOT_NODE_RE = re.compile(r"^\s+op(\d+) \[label=", re.MULTILINE)
DOT_EDGE_RE = re.compile(r'^\s+op(\d+) -> op(\d+) \[label="T(\d+)"\];$', re.MULTILINE)


def unary_op(name: str, src: int, dst: int) -> OperationRecord:
    """Build a single-input, single-output float operation ``T<dst> = name(T<src>)``."""
    return record(NumericFloat(name, dtype=np.float32), inputs=(tensor(src),), outputs=(output(dst),))


def binary_op(name: str, lhs: int, rhs: int, dst: int) -> OperationRecord:
    """Build a two-input float operation ``T<dst> = name(T<lhs>, T<rhs>)``."""
    return record(NumericFloat(name, dtype=np.float32), inputs=(tensor(lhs), tensor(rhs)), outputs=(output(dst),))


def chain_operations() -> tuple[OperationRecord, ...]:
    """Three-op chain: Op0 reads external T0, each later op reads its predecessor's output."""
    return (unary_op("Exp", 0, 1), unary_op("Log", 1, 2), unary_op("Tanh", 2, 3))


def random_operations(seed: int, num_ops: int) -> tuple[OperationRecord, ...]:
    """Generate a random operation sequence mixing produced and external inputs.

    Args:
        seed: RNG seed.
        num_ops: Number of operations.

    Returns:
        Operations whose inputs are drawn from earlier outputs or fresh external ids.
    """
    rng = np.random.default_rng(seed)
    next_id = 0
    known: list[int] = []
    operations = []
    for _ in range(num_ops):
        inputs = []
        for _ in range(int(rng.integers(0, 4))):
            if known and rng.random() < 0.7:
                inputs.append(tensor(int(rng.choice(known))))
            else:
                inputs.append(tensor(1000 + next_id))
                next_id += 1
        outputs = []
        for _ in range(int(rng.integers(1, 3))):
            outputs.append(output(next_id))
            known.append(next_id)
            next_id += 1
        operations.append(record(NumericFloat("Random", dtype=np.float32), inputs=inputs, outputs=outputs))
    return tuple(operations)


def parse_dot(dot: str) -> tuple[list[int], list[tuple[int, int, int]]]:
    """Extract node indices and ``(producer, consumer, tensor)`` edges from rendered DOT text."""
    nodes = [int(m.group(1)) for m in DOT_NODE_RE.finditer(dot)]
    edges = [(int(m.group(1)), int(m.group(2)), int(m.group(3))) for m in DOT_EDGE_RE.finditer(dot)]
    return nodes, edges


@pytest.fixture
def chain_snapshot() -> StreamSnapshot:
    """Snapshot of the three-op chain on stream 0."""
    return StreamSnapshot(stream_id=0, operations=chain_operations())


@pytest.fixture
def runtime() -> DeferredRuntime:
    """Fresh runtime with the default optimizer."""
    return DeferredRuntime()


@pytest.fixture
def debugger(runtime: DeferredRuntime) -> FusionDebugger:
    """Debugger attached to the ``runtime`` fixture."""
    return FusionDebugger(runtime)
