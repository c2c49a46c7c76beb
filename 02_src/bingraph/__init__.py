"""Binary dependency graph construction and centrality analysis."""

from .centrality import CentralityEngine, CentralityMeasure
from .config import BingraphConfig
from .graph_model import BinaryDescriptor, BinNode, DescriptorFailure, GraphEdge, GraphState, NodeType
from .graph_orchestrator import GraphOrchestrator
from .pipeline import PipelinePhase, PipelineRunner
from .report import assemble_report

__all__ = [
    "BinaryDescriptor",
    "BinNode",
    "DescriptorFailure",
    "GraphEdge",
    "GraphState",
    "NodeType",
    "GraphOrchestrator",
    "CentralityEngine",
    "CentralityMeasure",
    "BingraphConfig",
    "PipelinePhase",
    "PipelineRunner",
    "assemble_report",
]
