"""JSON and GraphViz renderings of an assembled report."""

import json
from typing import List, Optional

from .report import GraphReport, NodeReport

NODE_COLORS = {
    "elf_binary": "blue",
    "elf_library": "green",
    "pe": "pink",
    "interp": "red",
}


def to_json(report: GraphReport) -> str:
    return json.dumps(report, ensure_ascii=False, indent=2)


def to_graphviz(report: GraphReport) -> str:
    lines: List[str] = ["digraph bingraph {", ""]
    for node in report["nodes"]:
        lines.append(format_graphviz_node(node))
    lines.extend(["", ""])
    for source, target in report["edges"]:
        lines.append(f"  {_quote(source)} -> {_quote(target)}")
    lines.extend(["", "}"])
    return "\n".join(lines)


def format_graphviz_node(node: NodeReport) -> str:
    tooltip = "\\n".join(
        _escape(part)
        for part in [
            f"path: {node['absolute_path']}",
            f"out_degree: {node['out_degree']}",
            f"in_degree: {node['in_degree']}",
            f"betweenness_centrality: {_score(node['betweenness_centrality'])}",
            f"katz_centrality: {_score(node['katz_centrality'])}",
            f"eigen_centrality: {_score(node['eigen_centrality'])}",
            f"closeness_centrality: {_score(node['closeness_centrality'])}",
        ]
    )
    color = NODE_COLORS[node["node_type"]]
    return (
        f"  {_quote(node['name'])} "
        f"[style=filled, fillcolor={color}, tooltip=\"{tooltip}\"]"
    )


def _score(value: Optional[float]) -> str:
    # Unset scores render as zero, not null. repr keeps full float precision.
    return repr(float(value or 0.0))


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')


def _quote(text: str) -> str:
    return f'"{_escape(text)}"'
