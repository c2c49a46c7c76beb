"""Report assembly: node records plus graph-level aggregates."""

from typing import Dict, List, Optional, Tuple

from typing_extensions import TypedDict

from .graph_model import BinNode, GraphState


class NodeReport(TypedDict):
    name: str
    absolute_path: str
    node_type: str
    in_degree: int
    out_degree: int
    betweenness_centrality: Optional[float]
    katz_centrality: Optional[float]
    eigen_centrality: Optional[float]
    closeness_centrality: Optional[float]


class GraphReport(TypedDict):
    nodes: List[NodeReport]
    edges: List[Tuple[str, str]]
    degree_distribution: Dict[str, int]
    average_degree: Optional[float]
    num_nodes: int
    num_edges: int


def node_report(node: BinNode) -> NodeReport:
    return {
        "name": node.name,
        "absolute_path": node.absolute_path,
        "node_type": node.node_type.value,
        "in_degree": node.in_degree,
        "out_degree": node.out_degree,
        "betweenness_centrality": node.betweenness_centrality,
        "katz_centrality": node.katz_centrality,
        "eigen_centrality": node.eigen_centrality,
        "closeness_centrality": node.closeness_centrality,
    }


def assemble_report(state: GraphState) -> GraphReport:
    return {
        "nodes": [node_report(node) for node in state.nodes],
        "edges": [(edge.source, edge.target) for edge in state.edges],
        "degree_distribution": {
            str(degree): count for degree, count in state.degree_distribution.items()
        },
        "average_degree": state.average_degree,
        "num_nodes": state.num_nodes,
        "num_edges": state.num_edges,
    }
