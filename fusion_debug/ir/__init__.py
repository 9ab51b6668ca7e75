"""Operation record model: tensor references, operation kinds, and records."""

from fusion_debug.ir.kinds import (
    BaseBool,
    BaseFloat,
    BaseInt,
    Bool,
    Custom,
    Drop,
    Float,
    Init,
    Int,
    Module,
    NumericFloat,
    NumericInt,
    OperationKind,
)
from fusion_debug.ir.operation import OperationRecord, record
from fusion_debug.ir.tensor import (
    EXTERNAL,
    Provenance,
    TensorId,
    TensorRef,
    TensorStatus,
    dtype_name,
    output,
    tensor,
    tensor_label,
)

__all__ = [
    "OperationKind",
    "BaseFloat",
    "BaseInt",
    "BaseBool",
    "NumericFloat",
    "NumericInt",
    "Bool",
    "Int",
    "Float",
    "Module",
    "Init",
    "Custom",
    "Drop",
    "OperationRecord",
    "record",
    "TensorId",
    "TensorRef",
    "TensorStatus",
    "Provenance",
    "EXTERNAL",
    "dtype_name",
    "tensor",
    "output",
    "tensor_label",
]
