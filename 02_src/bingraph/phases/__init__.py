"""Pipeline phases for binary dependency graph construction."""

from .centrality import CentralityPhase
from .dependency_resolver import DependencyResolverPhase
from .ingestion import DescriptorIngestionPhase
from .report import ReportAssemblerPhase

__all__ = [
    "DescriptorIngestionPhase",
    "DependencyResolverPhase",
    "CentralityPhase",
    "ReportAssemblerPhase",
]
