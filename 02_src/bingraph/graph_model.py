"""Data model primitives for the binary dependency graph."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional


class NodeType(Enum):
    ELF_BINARY = "elf_binary"
    ELF_LIBRARY = "elf_library"
    PORTABLE_EXECUTABLE = "pe"
    INTERPRETED_EXECUTABLE = "interp"


@dataclass(frozen=True)
class BinaryDescriptor:
    name: str
    absolute_path: str
    node_type: NodeType
    declared_dependencies: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class DescriptorFailure:
    path: str
    error: Exception


@dataclass
class BinNode:
    name: str
    absolute_path: str
    node_type: NodeType
    declared_dependencies: List[str] = field(default_factory=list)
    in_degree: int = 0
    out_degree: int = 0
    betweenness_centrality: Optional[float] = None
    katz_centrality: Optional[float] = None
    eigen_centrality: Optional[float] = None
    closeness_centrality: Optional[float] = None

    @classmethod
    def from_descriptor(cls, descriptor: BinaryDescriptor) -> "BinNode":
        return cls(
            name=descriptor.name,
            absolute_path=descriptor.absolute_path,
            node_type=descriptor.node_type,
            declared_dependencies=list(descriptor.declared_dependencies),
        )


@dataclass(frozen=True)
class GraphEdge:
    source: str
    target: str
    # Node positions; names alone are ambiguous when two files share a basename.
    source_index: int
    target_index: int


@dataclass
class GraphState:
    nodes: List[BinNode] = field(default_factory=list)
    edges: List[GraphEdge] = field(default_factory=list)
    degree_distribution: Dict[int, int] = field(default_factory=dict)
    num_nodes: int = 0
    num_edges: int = 0
    average_degree: Optional[float] = None
