import logging
from collections.abc import Iterable

import networkx as nx

from fusion_debug.ir import EXTERNAL, OperationRecord, Provenance, TensorId

logger = logging.getLogger(__name__)


class DependencyGraph(nx.MultiDiGraph):
    """Producer/consumer graph over the operations of one snapshot.

    Nodes are operation indices. Each edge ``producer -> consumer`` is keyed
    by the tensor id that carries the dependency, so an operation reading two
    different tensors of the same producer gets two edges, while reading the
    same tensor twice gets one.

    Inputs with no producer earlier in the sequence are classified external.
    This includes tensors produced on another stream or by an already
    executed batch of the same stream: provenance outside the snapshot is
    never guessed.
    """

    def __init__(self, operations: Iterable[OperationRecord] = ()) -> None:
        """
        Args:
            operations: Operations in enqueue order, e.g. a StreamSnapshot.
        """
        super().__init__()
        self.operations: tuple[OperationRecord, ...] = tuple(operations)
        self.tensor_producer: dict[TensorId, int] = {}
        self._provenance: list[tuple[Provenance, ...]] = []
        self._tensor_edges: list[tuple[int, int, TensorId]] = []
        for index, operation in enumerate(self.operations):
            if not isinstance(operation, OperationRecord):
                raise TypeError(f"Operation {index} is not an OperationRecord: {operation!r}")
            self.add_node(index, operation=operation)
        self._trace()

    def _trace(self) -> None:
        """Scan operations in order, resolving inputs against the latest producer of each tensor."""
        for index, operation in enumerate(self.operations):
            logger.debug(f"Op[{index}] {operation!r}")
            provenance: list[Provenance] = []
            for ref in operation.inputs:
                producer = self.tensor_producer.get(ref.id)
                if producer is None:
                    provenance.append(EXTERNAL)
                else:
                    provenance.append(Provenance(producer))
                    self._add_edge(producer, index, ref.id)
            self._provenance.append(tuple(provenance))

            for ref in operation.outputs:
                self.tensor_producer[ref.id] = index

    def _add_edge(self, producer: int, consumer: int, tensor_id: TensorId) -> None:
        """Add a dependency edge carried by one tensor, ignoring repeats of the same tensor."""
        self._check_node(producer)
        self._check_node(consumer)
        if producer >= consumer:
            raise ValueError(f"Op[{consumer}] cannot depend on later or equal Op[{producer}]")
        if self.has_edge(producer, consumer, key=tensor_id):
            return
        self.add_edge(producer, consumer, key=tensor_id, tensor=tensor_id)
        self._tensor_edges.append((producer, consumer, tensor_id))

    def _check_node(self, index: int) -> None:
        if index not in self:
            raise ValueError(f"Op[{index}] is not part of this graph ({len(self.operations)} operations)")

    def dependencies(self, index: int) -> list[int]:
        """Indices of the operations ``index`` depends on, ascending and deduplicated."""
        self._check_node(index)
        return sorted(set(self.predecessors(index)))

    def dependency_map(self) -> dict[int, list[int]]:
        """Map every operation index to its sorted dependency list (empty for entry points)."""
        return {index: self.dependencies(index) for index in range(len(self.operations))}

    def provenance(self, index: int) -> tuple[Provenance, ...]:
        """Provenance of each input of ``index``, in input order."""
        self._check_node(index)
        return self._provenance[index]

    def tensor_edges(self) -> list[tuple[int, int, TensorId]]:
        """``(producer, consumer, tensor_id)`` edges in consumer order, then input order."""
        return list(self._tensor_edges)

    def entry_points(self) -> list[int]:
        """Operations without dependencies inside the snapshot."""
        return [index for index in range(len(self.operations)) if self.in_degree(index) == 0]

    def sinks(self) -> list[int]:
        """Operations whose outputs no later operation in the snapshot reads."""
        return [index for index in range(len(self.operations)) if self.out_degree(index) == 0]


def build_dependency_graph(operations: Iterable[OperationRecord]) -> DependencyGraph:
    """Build the dependency graph of an operation sequence.

    Args:
        operations: A StreamSnapshot or any sequence of OperationRecord.

    Returns:
        DependencyGraph whose nodes are the operation indices.
    """
    graph = DependencyGraph(operations)
    logger.debug(
        f"Built dependency graph: {graph.number_of_nodes()} operations, {graph.number_of_edges()} tensor edges"
    )
    return graph


def dependency_map(operations: Iterable[OperationRecord]) -> dict[int, list[int]]:
    """Compute ``operation index -> sorted dependency indices`` for an operation sequence."""
    return build_dependency_graph(operations).dependency_map()
