"""Dependency resolver phase: exact-name matching of declared dependencies."""

import logging
from typing import Any, Dict

from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class DependencyResolverPhase(PipelinePhase):
    phase_name = "dependency_resolver"
    requires = ("orchestrator",)

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        edges = orchestrator.resolve_dependencies()
        declared = sum(node.out_degree for node in orchestrator.state.nodes)

        resolver_output = {
            "declared_count": declared,
            "resolved_count": len(edges),
            "unresolved_count": len(orchestrator.unresolved),
        }
        logger.info(
            "resolved %d of %d declared dependencies",
            resolver_output["resolved_count"],
            declared,
        )
        return {"resolver_output": resolver_output}
