"""Report assembly phase with graph invariant checks."""

import logging
from typing import Any, Dict, List

from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase
from ..report import assemble_report

logger = logging.getLogger(__name__)


class ReportAssemblerPhase(PipelinePhase):
    phase_name = "report"
    requires = ("orchestrator", "resolver_output")

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        state = orchestrator.state
        warnings: List[str] = []

        in_degree_total = sum(node.in_degree for node in state.nodes)
        if in_degree_total != state.num_edges:
            warnings.append(f"in-degree total {in_degree_total} != edge count {state.num_edges}")
        distribution_total = sum(state.degree_distribution.values())
        if distribution_total != state.num_nodes:
            warnings.append(
                f"degree distribution total {distribution_total} != node count {state.num_nodes}"
            )
        for warning in warnings:
            logger.warning(warning)

        return {"report": assemble_report(state), "report_warnings": warnings}
