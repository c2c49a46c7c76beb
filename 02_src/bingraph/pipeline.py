"""Pipeline abstractions and sequential runner."""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Tuple

from .errors import GeneralError

logger = logging.getLogger(__name__)


class PipelinePhase(ABC):
    phase_name: str
    # Context keys that must be present before the phase runs.
    requires: Tuple[str, ...] = ()

    @abstractmethod
    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        raise NotImplementedError


class PipelineRunner:
    """Run phases in order over a shared context.

    Each phase sees the context built so far and returns the keys it adds.
    Wall-clock seconds per phase are collected under ``phase_timings``.
    """

    def __init__(self, phases: Iterable[PipelinePhase]) -> None:
        self.phases: List[PipelinePhase] = list(phases)

    def run(self, context: Dict[str, Any]) -> Dict[str, Any]:
        current = dict(context)
        timings: Dict[str, float] = {}
        for phase in self.phases:
            missing = [key for key in phase.requires if key not in current]
            if missing:
                raise GeneralError(
                    f"Phase '{phase.phase_name}' is missing context keys: {', '.join(missing)}."
                )

            logger.info("running phase %s", phase.phase_name)
            started = time.perf_counter()
            phase_result = phase.run(current)
            if not isinstance(phase_result, dict):
                raise GeneralError(f"Phase '{phase.phase_name}' must return dict context.")
            timings[phase.phase_name] = time.perf_counter() - started
            logger.debug("phase %s took %.3fs", phase.phase_name, timings[phase.phase_name])
            current.update(phase_result)

        current["phase_timings"] = timings
        return current
