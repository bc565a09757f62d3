"""Graph models consumed by the layout renderer."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import Field

from .base import GitHubModel


class NodeGroup(str, Enum):
    MAIN = "main"
    BRANCH = "branch"
    COMMIT = "commit"


class GraphNode(GitHubModel):
    id: str
    display_label: str | None = Field(default=None, alias="displayLabel")
    author_name: str | None = Field(default=None, alias="authorName")
    group: NodeGroup
    size: int


class GraphEdge(GitHubModel):
    source: str
    target: str


class Graph(GitHubModel):
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []

    def node(self, node_id: str) -> GraphNode | None:
        return next((n for n in self.nodes if n.id == node_id), None)

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the ``{nodes, edges}`` shape the renderer reads."""
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }
