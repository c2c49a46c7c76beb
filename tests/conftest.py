from pathlib import Path
from typing import Callable, List

import pytest

from bingraph.graph_model import BinaryDescriptor, NodeType


def descriptor(
    name: str,
    dependencies: List[str] | None = None,
    node_type: NodeType = NodeType.ELF_BINARY,
    directory: str = "/usr/bin",
) -> BinaryDescriptor:
    return BinaryDescriptor(
        name=name,
        absolute_path=f"{directory}/{name}",
        node_type=node_type,
        declared_dependencies=list(dependencies or []),
    )


@pytest.fixture
def make_descriptor() -> Callable[..., BinaryDescriptor]:
    return descriptor


@pytest.fixture
def write_file(tmp_path: Path) -> Callable[[str, bytes], Path]:
    """Write a file relative to tmp_path, creating parent directories."""

    def _write(relative: str, content: bytes) -> Path:
        path = tmp_path / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)
        return path

    return _write
