"""Centrality engine.

Every measure is an independent unit of work: it either yields a score for
each node or ``None``. A measure that fails to converge, or hits a numeric
problem, is logged and omitted; the remaining measures still run.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import networkx as nx

from .graph_model import GraphState
from .graph_orchestrator import to_networkx
from .utils import profile_time

logger = logging.getLogger(__name__)

MAX_ITERATIONS = 100
TOLERANCE = 1e-6

Scores = Dict[int, float]


class CentralityMeasure(ABC):
    name: str
    # BinNode attribute the scores are written to.
    attribute: str
    soft_errors = (nx.NetworkXException, ArithmeticError)

    def compute(self, graph: nx.DiGraph) -> Optional[Scores]:
        logger.info("computing %s centrality for graph", self.name)
        try:
            scores = self._run(graph)
        except self.soft_errors as error:
            logger.warning("unable to compute %s centrality: %s", self.name, error)
            return None
        return {node: float(value) for node, value in scores.items()}

    @abstractmethod
    def _run(self, graph: nx.DiGraph) -> Dict[int, float]:
        raise NotImplementedError


class BetweennessCentrality(CentralityMeasure):
    name = "betweenness"
    attribute = "betweenness_centrality"

    @profile_time
    def _run(self, graph: nx.DiGraph) -> Dict[int, float]:
        return nx.betweenness_centrality(graph, normalized=True, endpoints=True)


class KatzCentrality(CentralityMeasure):
    name = "katz"
    attribute = "katz_centrality"

    def __init__(self, alpha: float = 0.1, beta: float = 1.0) -> None:
        self.alpha = alpha
        self.beta = beta

    @profile_time
    def _run(self, graph: nx.DiGraph) -> Dict[int, float]:
        return nx.katz_centrality(
            graph,
            alpha=self.alpha,
            beta=self.beta,
            max_iter=MAX_ITERATIONS,
            tol=TOLERANCE,
            normalized=True,
            weight=None,
        )


class EigenvectorCentrality(CentralityMeasure):
    name = "eigenvector"
    attribute = "eigen_centrality"

    @profile_time
    def _run(self, graph: nx.DiGraph) -> Dict[int, float]:
        return nx.eigenvector_centrality(
            graph, max_iter=MAX_ITERATIONS, tol=TOLERANCE, weight=None
        )


class ClosenessCentrality(CentralityMeasure):
    name = "closeness"
    attribute = "closeness_centrality"

    @profile_time
    def _run(self, graph: nx.DiGraph) -> Dict[int, float]:
        return nx.closeness_centrality(graph, wf_improved=True)


def default_measures() -> List[CentralityMeasure]:
    return [
        BetweennessCentrality(),
        KatzCentrality(),
        EigenvectorCentrality(),
        ClosenessCentrality(),
    ]


class CentralityEngine:
    def __init__(self, measures: Iterable[CentralityMeasure] | None = None) -> None:
        self.measures: List[CentralityMeasure] = (
            list(measures) if measures is not None else default_measures()
        )
        self.outcomes: Dict[str, bool] = {}

    def annotate(self, state: GraphState) -> GraphState:
        """Write every successful measure onto the nodes and return the same graph.

        Which measures succeeded is kept in ``outcomes``, keyed by measure name.
        """
        graph = to_networkx(state)
        outcomes: Dict[str, bool] = {}
        for measure in self.measures:
            scores = measure.compute(graph)
            outcomes[measure.name] = scores is not None
            if scores is None:
                continue
            for index, node in enumerate(state.nodes):
                if index in scores:
                    setattr(node, measure.attribute, scores[index])
        self.outcomes = outcomes
        return state
