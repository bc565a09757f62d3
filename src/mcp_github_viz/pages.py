"""HTML pages for each visualizer state."""

from __future__ import annotations

from html import escape

from ._helpers import _render
from .renderer import Dimensions, LayoutRenderer
from .view import Errored, Idle, Loading, Rendered, ViewState

LOADING_MESSAGE = "Loading branches and commits..."
LOADING_REFRESH_SECONDS = 2


def _page(body: str, *, refresh: bool = False) -> str:
    meta = f'<meta http-equiv="refresh" content="{LOADING_REFRESH_SECONDS}">' if refresh else ""
    return _render("templates", "page.html", body=body, refresh=meta)


def render_form(state: Idle, action: str = "/") -> str:
    error = f'<p class="error">{escape(state.error)}</p>' if state.error else ""
    return _render(
        "templates",
        "form.html",
        action=escape(action),
        url=escape(state.url),
        error=error,
    )


def render_page(
    state: ViewState,
    renderer: LayoutRenderer,
    dimensions: Dimensions,
    *,
    action: str = "/",
) -> str:
    """Render a complete HTML document for *state*."""
    if isinstance(state, Idle):
        return _page(render_form(state, action))

    if not isinstance(state, (Loading, Errored, Rendered)):
        msg = f"Unknown view state: {state!r}"
        raise TypeError(msg)

    heading = f"<h2>Repository: {escape(state.url)}</h2>"
    if isinstance(state, Loading):
        return _page(f"{heading}\n<p>{LOADING_MESSAGE}</p>", refresh=True)
    if isinstance(state, Errored):
        return _page(f'{heading}\n<p class="error">{escape(state.message)}</p>')
    return _page(f"{heading}\n{renderer.render(state.graph, dimensions)}")
