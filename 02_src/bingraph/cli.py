"""CLI entrypoint: scan, build the graph, compute centralities, write reports."""

import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List

from .config import LOG_LEVELS, BingraphConfig
from .errors import BingraphError, ScanIOError
from .graph_orchestrator import GraphOrchestrator
from .phases import (
    CentralityPhase,
    DependencyResolverPhase,
    DescriptorIngestionPhase,
    ReportAssemblerPhase,
)
from .pipeline import PipelinePhase, PipelineRunner
from .report import GraphReport
from .serializers import to_graphviz, to_json

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(message)s"


def build_default_phases() -> List[PipelinePhase]:
    return [
        DescriptorIngestionPhase(),
        DependencyResolverPhase(),
        CentralityPhase(),
        ReportAssemblerPhase(),
    ]


def run_pipeline(config: BingraphConfig) -> Dict[str, Any]:
    initial_context: Dict[str, Any] = {
        "search_path": config.search_path,
        "jobs": config.jobs,
        "orchestrator": GraphOrchestrator(),
    }
    runner = PipelineRunner(phases=build_default_phases())
    return runner.run(initial_context)


def parse_args(argv: List[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Build a dependency graph of the binaries along a search path."
    )
    parser.add_argument("-o", "--output", help="Output location for the JSON graph report.")
    parser.add_argument(
        "--output-graphviz",
        help="Output location for a GraphViz rendering; empty disables it.",
    )
    parser.add_argument(
        "-b",
        "--bin-path",
        help="Colon-separated directories to search for executables (default: $PATH).",
    )
    parser.add_argument(
        "-l",
        "--lib-path",
        help="Colon-separated directories to search for shared libraries.",
    )
    parser.add_argument("-j", "--jobs", type=int, help="Worker processes for descriptor decoding.")
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        help="Logging verbosity.",
    )
    return parser.parse_args(argv)


def resolve_config(args: argparse.Namespace) -> BingraphConfig:
    return BingraphConfig.from_env().with_overrides(
        {
            "output": args.output,
            "output_graphviz": args.output_graphviz,
            "bin_path": args.bin_path,
            "lib_path": args.lib_path,
            "jobs": args.jobs,
            "log_level": args.log_level,
        }
    )


def write_output(path: str, content: str) -> Path:
    output_path = Path(path)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
    except OSError as error:
        raise ScanIOError(path, error.strerror or str(error)) from error
    return output_path


def main(argv: List[str] | None = None) -> int:
    args = parse_args(argv)
    try:
        config = resolve_config(args)
        logging.basicConfig(level=config.log_level, format=LOG_FORMAT)

        final_context = run_pipeline(config)
        report: GraphReport = final_context["report"]

        output_path = write_output(config.output, to_json(report))
        print(f"Graph report saved to: {output_path.resolve()}")
        if config.graphviz_enabled:
            graphviz_path = write_output(config.output_graphviz, to_graphviz(report))
            print(f"GraphViz rendering saved to: {graphviz_path.resolve()}")
    except BingraphError as error:
        logger.error("%s", error)
        return 1

    print(
        "Counts:",
        f"nodes={report['num_nodes']}",
        f"edges={report['num_edges']}",
        f"skipped={final_context['ingestion_output']['failure_count']}",
    )
    return 0
