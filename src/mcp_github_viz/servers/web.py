"""Browser routes served alongside the MCP endpoint on the HTTP transports."""

from __future__ import annotations

from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, RedirectResponse, Response

from ..client import GitHubClient
from ..config import GitHubConfig
from ..pages import render_page
from ..renderer import D3ForceRenderer, Dimensions
from ..view import Rendered, RepositoryVisualizer
from .github import mcp

# Browser sessions share one visualizer per process.
_visualizer: RepositoryVisualizer | None = None


def get_web_visualizer() -> RepositoryVisualizer:
    global _visualizer
    if _visualizer is None:
        config = GitHubConfig.from_env()
        _visualizer = RepositoryVisualizer(GitHubClient(config))
    return _visualizer


def set_web_visualizer(visualizer: RepositoryVisualizer | None) -> None:
    global _visualizer
    _visualizer = visualizer


async def close_web_visualizer() -> None:
    """Close the shared client; called when the server shuts down."""
    global _visualizer
    if _visualizer is not None:
        await _visualizer.client.close()
        _visualizer = None


def _dimensions(visualizer: RepositoryVisualizer) -> Dimensions:
    config = visualizer.client.config
    return Dimensions(width=config.width, height=config.height)


@mcp.custom_route("/", methods=["GET"])
async def visualizer_page(request: Request) -> Response:
    """Form before the first submission, the current result afterwards."""
    visualizer = get_web_visualizer()
    html = render_page(visualizer.state, D3ForceRenderer(), _dimensions(visualizer))
    return HTMLResponse(html)


@mcp.custom_route("/", methods=["POST"])
async def submit_repository(request: Request) -> Response:
    form = await request.form()
    repo_url = str(form.get("repo_url", "")).strip()
    await get_web_visualizer().submit(repo_url)
    return RedirectResponse(url="/", status_code=303)


@mcp.custom_route("/api/graph", methods=["GET"])
async def current_graph(request: Request) -> Response:
    state = get_web_visualizer().state
    if not isinstance(state, Rendered):
        return JSONResponse(
            {"error": "No repository has been rendered", "state": state.kind}, status_code=404
        )
    return JSONResponse(state.graph.to_payload())
