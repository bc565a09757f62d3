"""MCP resources for the visualizer — reference material for reading the graph."""

from __future__ import annotations

from .._helpers import _load_resource
from .github import mcp


def _load(filename: str) -> str:
    return _load_resource("guides", filename)


@mcp.resource(
    "resource://guides/graph-legend",
    name="Repository Graph Legend",
    description=(
        "Node groups, node ids, sizes, colors and edge meaning "
        "for the branch and commit graph"
    ),
    mime_type="text/markdown",
    tags={"guide", "github", "graph"},
)
def graph_legend_guide() -> str:
    """How to read the repository branch/commit graph."""
    return _load("graph-legend.md")
