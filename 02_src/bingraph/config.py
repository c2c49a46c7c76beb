"""Run configuration resolved once from environment/.env and CLI flags."""

import os
from dataclasses import dataclass, replace
from typing import Any, Dict

from dotenv import load_dotenv

from .errors import GeneralError

DEFAULT_LIB_PATH = (
    "/usr/x86_64-pc-linux-gnu/lib64:/usr/lib:/usr/local/lib:/usr/x86_64-pc-linux-gnu/lib"
)
DEFAULT_OUTPUT = "graph.json"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class BingraphConfig:
    bin_path: str
    lib_path: str = DEFAULT_LIB_PATH
    output: str = DEFAULT_OUTPUT
    output_graphviz: str = ""
    jobs: int = 1
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        if self.jobs < 1:
            raise GeneralError(f"jobs must be at least 1, got {self.jobs}")
        if self.log_level not in LOG_LEVELS:
            choices = ", ".join(LOG_LEVELS)
            raise GeneralError(f"log level must be one of {choices}, got {self.log_level!r}")

    @property
    def search_path(self) -> str:
        return f"{self.bin_path}:{self.lib_path}"

    @property
    def graphviz_enabled(self) -> bool:
        return bool(self.output_graphviz)

    @classmethod
    def from_env(cls) -> "BingraphConfig":
        load_dotenv()
        raw_jobs = os.getenv("BINGRAPH_JOBS", "1")
        try:
            jobs = int(raw_jobs)
        except ValueError as error:
            raise GeneralError(f"BINGRAPH_JOBS is not an integer: {raw_jobs!r}") from error

        return cls(
            bin_path=os.getenv("PATH", ""),
            lib_path=os.getenv("BINGRAPH_LIB_PATH", DEFAULT_LIB_PATH),
            output=os.getenv("BINGRAPH_OUTPUT", DEFAULT_OUTPUT),
            output_graphviz=os.getenv("BINGRAPH_OUTPUT_GRAPHVIZ", ""),
            jobs=jobs,
            log_level=os.getenv("BINGRAPH_LOG_LEVEL", "INFO").upper(),
        )

    def with_overrides(self, overrides: Dict[str, Any]) -> "BingraphConfig":
        """Return a copy with every non-None override applied."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **changes)
