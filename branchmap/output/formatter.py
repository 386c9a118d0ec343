"""Output formatting for laid-out graphs."""

import json
from typing import Literal

from ..graph.commit_graph import CommitGraph, Node
from ..graph.node_types import NodeKind
from ..layout.engine import LayoutResult


def format_graph(
    graph: CommitGraph,
    result: LayoutResult | None = None,
    format: Literal["text", "json"] = "text",
    generation: int | None = None,
) -> str:
    """Format a graph and its layout outcome for output.

    Args:
        graph: The graph to format.
        result: The layout result, or None if layout was not run.
        format: Output format ("text" or "json").
        generation: Graph version to report, if known.

    Returns:
        Formatted string representation.
    """
    if format == "json":
        return _format_json(graph, result, generation)
    return _format_text(graph, result)


def _format_position(node: Node) -> str:
    if node.position is None:
        return "(unplaced)"
    x, y = node.position
    return f"({x:.1f}, {y:.1f})"


def _format_text(graph: CommitGraph, result: LayoutResult | None) -> str:
    """Format the graph as human-readable text."""
    lines: list[str] = []
    symbols = {NodeKind.BRANCH: "⎇", NodeKind.COMMIT: "●", NodeKind.FILE: "▫"}

    lines.append("NODES:")
    nodes = graph.nodes
    if nodes:
        for node in nodes:
            pinned = " [fixed]" if node.fixed else ""
            lines.append(
                f"  {symbols[node.kind]} {node.id} {node.label!r} "
                f"{_format_position(node)}{pinned}"
            )
    else:
        lines.append("  (none)")

    lines.append("")

    lines.append("EDGES:")
    edges = graph.edges
    if edges:
        for edge in edges:
            lines.append(f"  {edge.source} -> {edge.target} ({edge.kind.value})")
    else:
        lines.append("  (none)")

    # Summary
    lines.append("")
    summary = f"{len(nodes)} node(s), {len(edges)} edge(s)"
    if result is None:
        lines.append(f"{summary}, layout not run")
    elif result.failed:
        lines.append(f"{summary}, layout failed: {result.error}")
    else:
        lines.append(f"{summary}, layout settled after {result.iterations} tick(s)")

    return "\n".join(lines)


def _format_json(
    graph: CommitGraph, result: LayoutResult | None, generation: int | None
) -> str:
    """Format the graph as JSON."""
    nodes = graph.nodes
    edges = graph.edges
    data = {
        "generation": generation,
        "settled": result.settled if result is not None else False,
        "error": result.error if result is not None else None,
        "node_count": len(nodes),
        "edge_count": len(edges),
        "nodes": [
            {
                "id": node.id,
                "kind": node.kind.value,
                "label": node.label,
                "radius": node.radius,
                "color": node.color,
                "x": node.position[0] if node.position else None,
                "y": node.position[1] if node.position else None,
                "fixed": node.fixed,
                "url": graph.node_url(node.id),
            }
            for node in nodes
        ],
        "edges": [
            {
                "source": edge.source,
                "target": edge.target,
                "kind": edge.kind.value,
                "color": edge.color,
            }
            for edge in edges
        ],
    }
    return json.dumps(data, indent=2)
