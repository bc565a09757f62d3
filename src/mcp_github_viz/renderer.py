"""Layout/rendering backends for the branch graph.

Layout physics (force simulation, collision, drag, zoom) is delegated to the
renderer; this package only hands it a graph and the drawing surface size.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Protocol

from ._helpers import _render
from .models.graph import Graph

D3_URL = "https://cdn.jsdelivr.net/npm/d3@7"


@dataclass(frozen=True)
class Dimensions:
    width: int = 960
    height: int = 600


class LayoutRenderer(Protocol):
    def render(self, graph: Graph, dimensions: Dimensions) -> str:
        """Return an HTML fragment that draws *graph*."""
        ...


def _script_json(data: object) -> str:
    """JSON safe to embed inside a <script> element."""
    return json.dumps(data, ensure_ascii=False).replace("</", "<\\/")


class D3ForceRenderer:
    """Renders the graph with d3-force in the browser.

    The emitted script runs the simulation, updates node and edge positions on
    every tick, pins nodes while dragged, zooms on wheel/pinch and recomputes the
    surface width when the window is resized.
    """

    def __init__(self, d3_url: str = D3_URL, element_id: str = "repo-graph") -> None:
        self.d3_url = d3_url
        self.element_id = element_id

    def render(self, graph: Graph, dimensions: Dimensions) -> str:
        return _render(
            "templates",
            "graph.html",
            d3_url=self.d3_url,
            element_id=self.element_id,
            width=str(dimensions.width),
            height=str(dimensions.height),
            graph_json=_script_json(graph.to_payload()),
        )
