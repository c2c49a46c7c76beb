"""Graph builder: node index, dependency resolution and degree statistics."""

import logging
from collections import Counter
from typing import Dict, Iterable, List, Union

import networkx as nx

from .graph_model import BinaryDescriptor, BinNode, DescriptorFailure, GraphEdge, GraphState

logger = logging.getLogger(__name__)


class GraphOrchestrator:
    """Owns the node index and all mutations of the graph state.

    Nodes are keyed by file name. When two files share a name, the later one
    takes over the index entry (last write wins); the earlier node stays in
    the node list but no edge can point at it.
    """

    def __init__(self) -> None:
        self.state = GraphState()
        self._name_index: Dict[str, int] = {}
        self.collisions: List[Dict[str, str]] = []
        self.unresolved: List[Dict[str, str]] = []
        self._resolved = False

    @classmethod
    def build(
        cls, descriptors: Iterable[Union[BinaryDescriptor, DescriptorFailure]]
    ) -> GraphState:
        orchestrator = cls()
        orchestrator.add_all(descriptors)
        orchestrator.resolve_dependencies()
        return orchestrator.state

    def add_all(
        self, items: Iterable[Union[BinaryDescriptor, DescriptorFailure]]
    ) -> List[DescriptorFailure]:
        """Add every descriptor; log and return the failures, which are skipped."""
        failures: List[DescriptorFailure] = []
        for item in items:
            if isinstance(item, DescriptorFailure):
                logger.warning("unable to create node at %s: %s", item.path, item.error)
                failures.append(item)
                continue
            self.add_descriptor(item)
        return failures

    def add_descriptor(self, descriptor: BinaryDescriptor) -> int:
        if self._resolved:
            raise RuntimeError("Graph is already resolved; nodes can no longer be added.")

        node = BinNode.from_descriptor(descriptor)
        node.out_degree = len(node.declared_dependencies)
        index = len(self.state.nodes)
        self.state.nodes.append(node)

        previous = self._name_index.get(node.name)
        if previous is not None:
            shadowed = self.state.nodes[previous]
            logger.warning(
                "node name %s at %s shadows %s",
                node.name,
                node.absolute_path,
                shadowed.absolute_path,
            )
            self.collisions.append(
                {
                    "name": node.name,
                    "winner": node.absolute_path,
                    "shadowed": shadowed.absolute_path,
                }
            )
        self._name_index[node.name] = index
        return index

    def resolve_dependencies(self) -> List[GraphEdge]:
        """Turn declared dependency names into edges among known nodes."""
        if self._resolved:
            return self.state.edges

        for source_index, node in enumerate(self.state.nodes):
            for dependency in node.declared_dependencies:
                target_index = self._name_index.get(dependency)
                if target_index is None:
                    logger.debug("unresolved dependency %s of %s", dependency, node.name)
                    self.unresolved.append({"source": node.name, "dependency": dependency})
                    continue
                self.state.edges.append(
                    GraphEdge(
                        source=node.name,
                        target=dependency,
                        source_index=source_index,
                        target_index=target_index,
                    )
                )
                self.state.nodes[target_index].in_degree += 1

        self._resolved = True
        self._refresh_aggregates()
        return self.state.edges

    def _refresh_aggregates(self) -> None:
        state = self.state
        state.num_nodes = len(state.nodes)
        state.num_edges = len(state.edges)
        # Nodes per edge, not edges per node. Undefined without edges.
        state.average_degree = state.num_nodes / state.num_edges if state.num_edges else None
        histogram = Counter(node.in_degree for node in state.nodes)
        state.degree_distribution = dict(sorted(histogram.items()))


def to_networkx(state: GraphState) -> nx.DiGraph:
    """Directed graph over node positions; parallel declarations collapse to one edge."""
    graph = nx.DiGraph()
    graph.add_nodes_from(range(len(state.nodes)))
    graph.add_edges_from((edge.source_index, edge.target_index) for edge in state.edges)
    return graph
