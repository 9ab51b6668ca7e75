"""Tensor references and derived provenance for operation records."""

from enum import Enum
from typing import Any, NamedTuple

import numpy as np

TensorId = int


class TensorStatus(Enum):
    """How an operation touches a tensor.

    ``NOT_INIT`` marks a tensor the operation writes for the first time,
    the other two mark tensors it reads.
    """

    NOT_INIT = "not_init"
    READ_ONLY = "read_only"
    READ_WRITE = "read_write"


class TensorRef(NamedTuple):
    """A reference to a tensor value by its process-unique identifier.

    Attributes:
        id: Tensor identifier.
        shape: Tensor shape.
        dtype: Numpy dtype name (e.g., ``"float32"``).
        status: How the owning operation uses the tensor.
    """

    id: TensorId
    shape: tuple[int, ...] = ()
    dtype: str = "float32"
    status: TensorStatus = TensorStatus.READ_ONLY

    def __str__(self) -> str:
        return tensor_label(self.id)


class Provenance(NamedTuple):
    """Where an input tensor comes from inside one snapshot.

    Attributes:
        producer: Index of the producing operation, or ``None`` for an
            external tensor.
    """

    producer: int | None = None

    @property
    def is_external(self) -> bool:
        return self.producer is None

    def __str__(self) -> str:
        return "external" if self.producer is None else f"from Op[{self.producer}]"


EXTERNAL = Provenance()


def tensor_label(tensor_id: TensorId) -> str:
    """Display label shared by every renderer, e.g. ``T3``."""
    return f"T{tensor_id}"


def dtype_name(dtype: Any) -> str:
    """Normalize a dtype-like value (``np.float32``, ``"f4"``, ...) to its numpy name.

    Args:
        dtype: Anything ``np.dtype`` accepts.

    Returns:
        Canonical dtype name such as ``"float32"``.
    """
    return np.dtype(dtype).name


def tensor(
    tensor_id: TensorId,
    shape: tuple[int, ...] = (),
    dtype: Any = np.float32,
    status: TensorStatus = TensorStatus.READ_ONLY,
) -> TensorRef:
    """Build a TensorRef with a normalized dtype.

    Args:
        tensor_id: Tensor identifier.
        shape: Tensor shape.
        dtype: Dtype-like value.
        status: Usage status for the owning operation.

    Returns:
        New TensorRef.
    """
    return TensorRef(tensor_id, tuple(shape), dtype_name(dtype), status)


def output(tensor_id: TensorId, shape: tuple[int, ...] = (), dtype: Any = np.float32) -> TensorRef:
    """Build a TensorRef for a tensor written by its operation."""
    return tensor(tensor_id, shape, dtype, TensorStatus.NOT_INIT)
