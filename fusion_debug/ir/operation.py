"""Immutable record of one deferred operation."""

from typing import NamedTuple

from fusion_debug.ir.kinds import OperationKind
from fusion_debug.ir.tensor import TensorId, TensorRef


class OperationRecord(NamedTuple):
    """One entry of a stream's pending queue: outputs = kind(inputs).

    Attributes:
        kind: What the operation does.
        inputs: Tensors read, in argument order.
        outputs: Tensors written, in result order.
    """

    kind: OperationKind
    inputs: tuple[TensorRef, ...]
    outputs: tuple[TensorRef, ...]

    @property
    def input_ids(self) -> tuple[TensorId, ...]:
        return tuple(ref.id for ref in self.inputs)

    @property
    def output_ids(self) -> tuple[TensorId, ...]:
        return tuple(ref.id for ref in self.outputs)

    @property
    def kind_name(self) -> str:
        return self.kind.kind_name

    def describe(self) -> str:
        return self.kind.describe()

    def __repr__(self) -> str:
        inputs = ", ".join(str(ref) for ref in self.inputs)
        outputs = ", ".join(str(ref) for ref in self.outputs)
        return f"OperationRecord({self.describe()}: [{inputs}] -> [{outputs}])"


def record(
    kind: OperationKind, inputs: tuple[TensorRef, ...] = (), outputs: tuple[TensorRef, ...] = ()
) -> OperationRecord:
    """Build an OperationRecord, freezing the input and output sequences into tuples.

    Args:
        kind: Operation kind descriptor.
        inputs: Tensors read.
        outputs: Tensors written.

    Returns:
        New OperationRecord.
    """
    return OperationRecord(kind, tuple(inputs), tuple(outputs))
