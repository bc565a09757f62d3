"""GitHub visualizer MCP server — all tool registrations."""

from __future__ import annotations

import json
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Annotated, Any

from fastmcp import Context, FastMCP
from pydantic import Field

from ..client import COMMITS_PER_BRANCH, GitHubClient
from ..config import GitHubConfig
from ..fetcher import fetch_repository
from ..pages import render_page
from ..renderer import D3ForceRenderer, Dimensions
from ..shaper import build_graph
from ..urls import parse_repository_url
from ..view import INVALID_URL_MESSAGE, RepositoryVisualizer, state_to_dict


@asynccontextmanager
async def lifespan(server: FastMCP) -> AsyncIterator[dict[str, Any]]:
    config = GitHubConfig.from_env()
    config.validate()
    client = GitHubClient(config)
    try:
        yield {"client": client, "config": config, "visualizer": RepositoryVisualizer(client)}
    finally:
        await client.close()


mcp = FastMCP(
    name="GitHub Repository Visualizer",
    instructions=(
        "Visualizes a public GitHub repository's branches and their recent commits"
        " as a force-directed node-link diagram."
    ),
    lifespan=lifespan,
)


def _get_client(ctx: Context) -> GitHubClient:
    return ctx.request_context.lifespan_context["client"]


def _get_config(ctx: Context) -> GitHubConfig:
    return ctx.request_context.lifespan_context["config"]


def _get_visualizer(ctx: Context) -> RepositoryVisualizer:
    return ctx.request_context.lifespan_context["visualizer"]


def _ok(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _paginated(items: list | None) -> str:
    """Wrap a list response with its item count; an empty body counts as no items."""
    items = items or []
    return json.dumps({"items": items, "count": len(items)}, indent=2, ensure_ascii=False)


def _err(error: Exception) -> str:
    detail: dict[str, Any] = {"error": str(error)}
    from ..exceptions import (
        GitHubApiError,
        GitHubAuthError,
        GitHubNotFoundError,
        RepositoryFetchError,
    )

    if isinstance(error, RepositoryFetchError) and error.__cause__ is not None:
        error = error.__cause__
        detail["cause"] = str(error)

    if isinstance(error, GitHubNotFoundError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = "Verify the owner and repository name. Private repositories need a token."
    elif isinstance(error, GitHubAuthError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        detail["hint"] = (
            "Check GITHUB_TOKEN. Unauthenticated requests are rate limited to 60 per hour."
        )
    elif isinstance(error, GitHubApiError):
        detail["status_code"] = error.status_code
        detail["body"] = error.body
        if error.status_code == 422:
            detail["hint"] = "Validation failed — check the branch name or SHA."
        elif error.status_code == 429:
            detail["hint"] = "Rate limited. Wait before retrying."
    return json.dumps(detail, indent=2, ensure_ascii=False)


def _invalid_url(url: str) -> str:
    return json.dumps(
        {
            "error": INVALID_URL_MESSAGE,
            "url": url,
            "hint": "Expected https://github.com/<owner>/<repo>.",
        },
        indent=2,
        ensure_ascii=False,
    )


# ════════════════════════════════════════════════════════════════════
# Repository URLs
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"github", "repository", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": False},
)
async def github_parse_repository_url(
    repo_url: Annotated[
        str,
        Field(description="Repository web address, e.g. https://github.com/octocat/Hello-World"),
    ],
) -> str:
    """Extract the owner and repository name from a GitHub repository URL."""
    reference = parse_repository_url(repo_url)
    if reference is None:
        return _invalid_url(repo_url)
    return _ok(reference.to_dict())


# ════════════════════════════════════════════════════════════════════
# Branches & commits
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"github", "branches", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def github_list_branches(
    ctx: Context,
    owner: Annotated[str, Field(description="Repository owner", min_length=1)],
    repo: Annotated[str, Field(description="Repository name", min_length=1)],
) -> str:
    """List repository branches (first page only)."""
    try:
        data = await _get_client(ctx).list_branches(owner, repo)
        return _paginated(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"github", "commits", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def github_list_commits(
    ctx: Context,
    owner: Annotated[str, Field(description="Repository owner", min_length=1)],
    repo: Annotated[str, Field(description="Repository name", min_length=1)],
    sha: Annotated[str, Field(description="Branch name or commit SHA to start from", min_length=1)],
    per_page: Annotated[
        int, Field(description="Number of commits to return (1-100)", ge=1, le=100)
    ] = COMMITS_PER_BRANCH,
) -> str:
    """List the most recent commits reachable from a branch."""
    try:
        data = await _get_client(ctx).list_commits(owner, repo, sha, per_page=per_page)
        return _paginated(data)
    except Exception as e:
        return _err(e)


# ════════════════════════════════════════════════════════════════════
# Graphs
# ════════════════════════════════════════════════════════════════════


@mcp.tool(
    tags={"github", "graph", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": True},
)
async def github_build_repository_graph(
    ctx: Context,
    repo_url: Annotated[str, Field(description="GitHub repository URL")],
) -> str:
    """Fetch branches and recent commits and return the node/edge graph.

    Does not touch the session's visualization state.
    """
    reference = parse_repository_url(repo_url)
    if reference is None:
        return _invalid_url(repo_url)
    try:
        snapshot = await fetch_repository(_get_client(ctx), reference)
        graph = build_graph(snapshot.branches, default_branch=snapshot.default_branch)
        return _ok(graph.to_payload())
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"github", "graph", "visualize"},
    annotations={"readOnlyHint": False, "openWorldHint": True},
)
async def github_visualize_repository(
    ctx: Context,
    repo_url: Annotated[str, Field(description="GitHub repository URL")],
    output_path: Annotated[
        str | None,
        Field(description="Write the rendered HTML page to this file"),
    ] = None,
) -> str:
    """Submit a repository to the session visualizer and return the resulting state.

    A newer submission supersedes any still in flight; only its result is kept.
    """
    try:
        visualizer = _get_visualizer(ctx)
        state = await visualizer.submit(repo_url)
        data = state_to_dict(state)
        if output_path:
            config = _get_config(ctx)
            html = render_page(
                state, D3ForceRenderer(), Dimensions(width=config.width, height=config.height)
            )
            path = Path(output_path).expanduser()
            path.write_text(html, encoding="utf-8")
            data["output_path"] = str(path)
        return _ok(data)
    except Exception as e:
        return _err(e)


@mcp.tool(
    tags={"github", "graph", "read"},
    annotations={"readOnlyHint": True, "idempotentHint": True, "openWorldHint": False},
)
async def github_get_visualization(ctx: Context) -> str:
    """Return the session's current visualization state."""
    visualizer = _get_visualizer(ctx)
    data = state_to_dict(visualizer.state)
    data["generation"] = visualizer.generation
    return _ok(data)
