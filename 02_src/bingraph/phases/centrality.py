"""Centrality phase."""

from typing import Any, Dict

from ..centrality import CentralityEngine
from ..graph_orchestrator import GraphOrchestrator
from ..pipeline import PipelinePhase


class CentralityPhase(PipelinePhase):
    phase_name = "centrality"
    requires = ("orchestrator", "resolver_output")

    def __init__(self, engine: CentralityEngine | None = None) -> None:
        self._engine = engine or CentralityEngine()

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        self._engine.annotate(orchestrator.state)
        return {"centrality_output": dict(self._engine.outcomes)}
