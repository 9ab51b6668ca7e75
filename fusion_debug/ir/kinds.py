"""Operation-kind descriptors for deferred operations.

Every recorded operation carries one ``OperationKind``. Kinds form a closed
family: one subclass per category, auto-registered by ``category``. Renderers
only ever call ``kind_name`` and ``describe()``, so adding a category never
touches graph building or rendering.

To add a new category:
1. Subclass OperationKind
2. Set the ``category`` class attribute
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, ClassVar

from fusion_debug.ir.tensor import dtype_name


@dataclass(frozen=True)
class OperationKind:
    """Typed descriptor of what a deferred operation does.

    Attributes:
        op: Operation name within the category (e.g., ``"MulScalar"``).
        dtype: Element dtype name for typed categories, ``None`` otherwise.
        params: Operation parameters as sorted ``(name, value)`` pairs.
            A dict is accepted and normalized.
    """

    op: str
    dtype: str | None = None
    params: tuple[tuple[str, Any], ...] = ()

    category: ClassVar[str]
    _registry: ClassVar[dict[str, type[OperationKind]]] = {}

    def __init_subclass__(cls, **kwargs: object) -> None:
        """Auto-register concrete kinds by category."""
        super().__init_subclass__(**kwargs)
        if "category" in cls.__dict__:
            OperationKind._registry[cls.category] = cls

    def __post_init__(self) -> None:
        if not hasattr(type(self), "category"):
            raise TypeError(f"{type(self).__name__} has no category; instantiate a registered kind instead")
        if self.dtype is not None:
            object.__setattr__(self, "dtype", dtype_name(self.dtype))
        object.__setattr__(self, "params", tuple(sorted(dict(self.params).items())))

    @classmethod
    def get(cls, category: str) -> type[OperationKind]:
        """Look up a registered kind by category.

        Args:
            category: The category name to look up.

        Returns:
            The OperationKind subclass registered under that name.

        Raises:
            KeyError: If no kind is registered with the given category.
        """
        if category not in cls._registry:
            raise KeyError(f"Unknown operation category: {category}")
        return cls._registry[category]

    @classmethod
    def all_kinds(cls) -> dict[str, type[OperationKind]]:
        """Return a copy of the category registry."""
        return dict(cls._registry)

    @property
    def kind_name(self) -> str:
        """Short, stable name used for node labels and type statistics."""
        return self.category

    def describe(self) -> str:
        """Long human-readable form, e.g. ``NumericFloat(float32, MulScalar(rhs=2.0))``."""
        body = self.op
        if self.params:
            args = ", ".join(f"{name}={value!r}" for name, value in self.params)
            body = f"{self.op}({args})"
        if self.dtype is not None:
            body = f"{self.dtype}, {body}"
        return f"{self.category}({body})"


class BaseFloat(OperationKind):
    category = "BaseFloat"


class BaseInt(OperationKind):
    category = "BaseInt"


class BaseBool(OperationKind):
    category = "BaseBool"


class NumericFloat(OperationKind):
    category = "NumericFloat"


class NumericInt(OperationKind):
    category = "NumericInt"


class Bool(OperationKind):
    category = "Bool"


class Int(OperationKind):
    category = "Int"


class Float(OperationKind):
    category = "Float"


class Module(OperationKind):
    """Module-level operations (convolutions, pooling, embeddings, ...)."""

    category = "Module"


class Init(OperationKind):
    """Registration of an already materialized tensor into the stream."""

    category = "Init"


class Custom(OperationKind):
    """User-defined operation; ``op`` is the custom operation id."""

    category = "Custom"


class Drop(OperationKind):
    """Release of a tensor; ``op`` is the dropped tensor's label."""

    category = "Drop"
