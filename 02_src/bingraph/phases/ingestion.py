"""Descriptor ingestion phase: scan the search path and add nodes."""

import logging
from typing import Any, Dict, Iterator

from ..binary_format import DescriptorResult, iter_descriptors
from ..graph_orchestrator import GraphOrchestrator
from ..path_iter import PathIterator
from ..pipeline import PipelinePhase

logger = logging.getLogger(__name__)


class DescriptorIngestionPhase(PipelinePhase):
    phase_name = "ingestion"
    requires = ("orchestrator", "search_path")

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        orchestrator: GraphOrchestrator = context["orchestrator"]
        search_path = str(context["search_path"])
        jobs = int(context.get("jobs", 1))

        logger.info("searching through %s for things", search_path)
        scanned = 0

        def counted(items: Iterator[DescriptorResult]) -> Iterator[DescriptorResult]:
            nonlocal scanned
            for item in items:
                scanned += 1
                yield item

        failures = orchestrator.add_all(
            counted(iter_descriptors(PathIterator(search_path), jobs=jobs))
        )

        ingestion_output = {
            "scanned_count": scanned,
            "node_count": len(orchestrator.state.nodes),
            "failure_count": len(failures),
            "failures": [{"path": item.path, "reason": str(item.error)} for item in failures],
            "collisions": list(orchestrator.collisions),
        }
        logger.info(
            "scanned %d files: %d nodes, %d skipped",
            scanned,
            ingestion_output["node_count"],
            len(failures),
        )
        return {"ingestion_output": ingestion_output}
