"""MCP prompts — multi-tool workflow templates for repository visualization."""

from __future__ import annotations

from fastmcp.prompts.prompt import Message

from .._helpers import _render
from ..urls import parse_repository_url
from .github import mcp


@mcp.prompt(tags={"github", "visualize"})
def visualize_repository(repo_url: str) -> list[Message]:
    """Visualize a GitHub repository's branches and recent commits, then summarize
    how the branches relate to the default branch.

    Accepts a full repository URL (e.g. https://github.com/octocat/Hello-World).
    """
    reference = parse_repository_url(repo_url)
    owner, repo = (reference.owner, reference.name) if reference else ("", "")
    text = _render("prompts", "visualize-repository.md", repo_url=repo_url, owner=owner, repo=repo)
    return [
        Message(role="user", content=text),
        Message(
            role="assistant",
            content=(
                f"I'll visualize {repo_url}. "
                "Let me start by building the branch and commit graph."
            ),
        ),
    ]
