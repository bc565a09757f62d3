"""Visualizer view state and the submit workflow."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from .client import GitHubClient
from .exceptions import GitHubError
from .fetcher import fetch_repository
from .models.graph import Graph
from .models.repositories import RepositoryReference
from .shaper import build_graph
from .urls import parse_repository_url

logger = logging.getLogger(__name__)

INVALID_URL_MESSAGE = "Invalid GitHub repository URL."
FALLBACK_ERROR_MESSAGE = "Failed to fetch repository data. Please check the URL."


@dataclass(frozen=True)
class Idle:
    """Form is shown; *error* holds a rejected submission's message."""

    url: str = ""
    error: str | None = None

    kind = "idle"


@dataclass(frozen=True)
class Loading:
    url: str
    reference: RepositoryReference

    kind = "loading"


@dataclass(frozen=True)
class Errored:
    url: str
    message: str

    kind = "error"


@dataclass(frozen=True)
class Rendered:
    url: str
    reference: RepositoryReference
    graph: Graph

    kind = "rendered"


ViewState = Idle | Loading | Errored | Rendered


def state_to_dict(state: ViewState) -> dict[str, Any]:
    data: dict[str, Any] = {"state": state.kind, "url": state.url}
    if isinstance(state, Idle) and state.error:
        data["error"] = state.error
    elif isinstance(state, Errored):
        data["error"] = state.message
    elif isinstance(state, (Loading, Rendered)):
        data["repository"] = state.reference.to_dict()
    if isinstance(state, Rendered):
        data["graph"] = state.graph.to_payload()
    return data


class RepositoryVisualizer:
    """Drives one visualization session from URL submission to a rendered graph.

    Every accepted submission takes a new generation number. A fetch whose
    generation is no longer current when it completes leaves the state alone,
    so a slow earlier request can never overwrite a newer submission.
    """

    def __init__(self, client: GitHubClient) -> None:
        self.client = client
        self.state: ViewState = Idle()
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def submitted(self) -> bool:
        return not isinstance(self.state, Idle)

    async def submit(self, url: str) -> ViewState:
        """Validate *url*, fetch the repository and return the resulting state."""
        self._generation += 1
        generation = self._generation

        reference = parse_repository_url(url)
        if reference is None:
            logger.info("Rejected repository URL %r", url)
            if self.submitted:
                self.state = Errored(url=url, message=INVALID_URL_MESSAGE)
            else:
                self.state = Idle(url=url, error=INVALID_URL_MESSAGE)
            return self.state

        self.state = Loading(url=url, reference=reference)
        result: ViewState
        try:
            snapshot = await fetch_repository(self.client, reference)
            graph = build_graph(snapshot.branches, default_branch=snapshot.default_branch)
            result = Rendered(url=url, reference=reference, graph=graph)
        except GitHubError as e:
            logger.warning("Visualization of %s failed: %s", reference.full_name, e)
            result = Errored(url=url, message=str(e) or FALLBACK_ERROR_MESSAGE)
        except BaseException:
            # Cancelled or crashed: never leave the current submission in Loading.
            if generation == self._generation and isinstance(self.state, Loading):
                self.state = Errored(url=url, message=FALLBACK_ERROR_MESSAGE)
            raise

        if generation != self._generation:
            logger.info(
                "Discarding result for %s (generation %d superseded by %d)",
                reference.full_name,
                generation,
                self._generation,
            )
            return self.state

        self.state = result
        return result
