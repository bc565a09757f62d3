"""Shape fetched branches and commits into a node/edge graph."""

from __future__ import annotations

from collections.abc import Sequence

from .models.graph import Graph, GraphEdge, GraphNode, NodeGroup
from .models.repositories import BranchCommits

MAIN_NODE_ID = "main"

MAIN_NODE_SIZE = 20
BRANCH_NODE_SIZE = 12
COMMIT_NODE_SIZE = 6

LABEL_LIMIT = 20
ELLIPSIS = "..."


def truncate_label(message: str, limit: int = LABEL_LIMIT) -> str:
    """Cut *message* to *limit* characters, the last three being an ellipsis."""
    if len(message) > limit:
        return message[: limit - len(ELLIPSIS)] + ELLIPSIS
    return message


def commit_node_id(branch_name: str, index: int) -> str:
    return f"{branch_name}-commit-{index}"


def _branch_node_id(branch_name: str, default_branch: str) -> str:
    if branch_name == default_branch:
        return MAIN_NODE_ID
    if branch_name == MAIN_NODE_ID:
        # A non-default "main" must not collide with the hub node.
        return f"refs/heads/{branch_name}"
    return branch_name


def build_graph(branches: Sequence[BranchCommits], default_branch: str = "main") -> Graph:
    """Build the branch/commit graph.

    The default branch becomes the ``"main"`` hub, every other branch hangs off
    it, and each branch owns its commit nodes. The hub is emitted even when the
    default branch is missing from *branches*.
    """
    nodes = [
        GraphNode(
            id=MAIN_NODE_ID,
            display_label=default_branch,
            group=NodeGroup.MAIN,
            size=MAIN_NODE_SIZE,
        )
    ]
    edges: list[GraphEdge] = []

    for entry in branches:
        name = entry.branch.name
        branch_id = _branch_node_id(name, default_branch)
        if branch_id != MAIN_NODE_ID:
            nodes.append(
                GraphNode(
                    id=branch_id,
                    display_label=name,
                    group=NodeGroup.BRANCH,
                    size=BRANCH_NODE_SIZE,
                )
            )
            edges.append(GraphEdge(source=MAIN_NODE_ID, target=branch_id))

        for index, commit in enumerate(entry.commits):
            node_id = commit_node_id(name, index)
            nodes.append(
                GraphNode(
                    id=node_id,
                    display_label=truncate_label(commit.message),
                    author_name=commit.author_name or None,
                    group=NodeGroup.COMMIT,
                    size=COMMIT_NODE_SIZE,
                )
            )
            edges.append(GraphEdge(source=branch_id, target=node_id))

    return Graph(nodes=nodes, edges=edges)
