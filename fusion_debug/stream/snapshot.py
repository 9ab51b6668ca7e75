"""Point-in-time, immutable copy of a stream's pending operations."""

from collections.abc import Iterator
from dataclasses import dataclass

from fusion_debug.ir import OperationRecord


@dataclass(frozen=True)
class StreamSnapshot:
    """Ordered operations captured from one stream at one instant.

    Indices into ``operations`` are the stable node identifiers used by the
    dependency graph and both renderers.

    Attributes:
        stream_id: Stream the operations were captured from.
        operations: Captured operations in enqueue order.
    """

    stream_id: int
    operations: tuple[OperationRecord, ...]

    def __len__(self) -> int:
        return len(self.operations)

    def __iter__(self) -> Iterator[OperationRecord]:
        return iter(self.operations)

    def __getitem__(self, index: int) -> OperationRecord:
        return self.operations[index]

    def __repr__(self) -> str:
        return f"StreamSnapshot(stream={self.stream_id}, operations={len(self.operations)})"
