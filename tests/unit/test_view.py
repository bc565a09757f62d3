"""Tests for the visualizer state machine."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from mcp_github_viz.models.repositories import BranchCommits, RepositorySnapshot
from mcp_github_viz.view import (
    FALLBACK_ERROR_MESSAGE,
    INVALID_URL_MESSAGE,
    Errored,
    Idle,
    Loading,
    Rendered,
    RepositoryVisualizer,
    state_to_dict,
)

URL = "https://github.com/octocat/Hello-World"


async def test_starts_idle(client):
    visualizer = RepositoryVisualizer(client)
    assert visualizer.state == Idle()
    assert not visualizer.submitted


async def test_invalid_url_stays_on_form_without_requests(client, mock_api):
    visualizer = RepositoryVisualizer(client)
    state = await visualizer.submit("https://example.com/not/github")
    assert state == Idle(url="https://example.com/not/github", error=INVALID_URL_MESSAGE)
    assert not visualizer.submitted
    assert mock_api.calls.call_count == 0


async def test_valid_url_renders(client, mock_repo):
    mock_repo({"main": ["Fix bug", "Initial commit"], "dev": ["Work in progress"]})
    visualizer = RepositoryVisualizer(client)
    state = await visualizer.submit(URL)

    assert isinstance(state, Rendered)
    assert visualizer.state is state
    assert visualizer.submitted
    assert state.reference.full_name == "octocat/Hello-World"
    assert len(state.graph.nodes) == 2 + 3
    assert len(state.graph.edges) == 1 + 3


async def test_branch_404_errors_without_commit_requests(client, mock_api):
    mock_api.get("/repos/octocat/Hello-World/branches").mock(
        return_value=httpx.Response(404, json={"message": "Not Found"})
    )
    commits_route = mock_api.get("/repos/octocat/Hello-World/commits").mock(
        return_value=httpx.Response(200, json=[])
    )
    visualizer = RepositoryVisualizer(client)
    state = await visualizer.submit(URL)

    assert isinstance(state, Errored)
    assert state.message == "Failed to fetch branches"
    assert not commits_route.called


async def test_empty_error_message_uses_fallback(client, monkeypatch):
    from mcp_github_viz import view
    from mcp_github_viz.exceptions import RepositoryFetchError

    async def _fail(*args, **kwargs):
        raise RepositoryFetchError()

    monkeypatch.setattr(view, "fetch_repository", _fail)
    state = await RepositoryVisualizer(client).submit(URL)
    assert state == Errored(url=URL, message=FALLBACK_ERROR_MESSAGE)


async def test_repeated_submission_replaces_graph(client, mock_api):
    mock_api.get("/repos/octocat/Hello-World/branches").mock(
        side_effect=[
            httpx.Response(200, json=[{"name": "main"}, {"name": "old-feature"}]),
            httpx.Response(200, json=[{"name": "main"}]),
        ]
    )
    mock_api.get("/repos/octocat/Hello-World/commits").mock(
        return_value=httpx.Response(200, json=[{"commit": {"message": "Fix bug"}}])
    )
    visualizer = RepositoryVisualizer(client)
    first = await visualizer.submit(URL)
    second = await visualizer.submit(URL)

    assert first.graph.node("old-feature") is not None
    assert second.graph.node("old-feature") is None
    assert [n.id for n in second.graph.nodes] == ["main", "main-commit-0"]
    assert visualizer.state is second


async def test_invalid_url_after_submission_is_an_error(client, mock_repo):
    mock_repo({"main": []})
    visualizer = RepositoryVisualizer(client)
    await visualizer.submit(URL)
    state = await visualizer.submit("nonsense")
    assert state == Errored(url="nonsense", message=INVALID_URL_MESSAGE)


async def test_stale_result_is_discarded(client, monkeypatch):
    from mcp_github_viz import view

    slow_started = asyncio.Event()
    release_slow = asyncio.Event()

    async def _fetch(client, reference):
        if reference.name == "slow":
            slow_started.set()
            await release_slow.wait()
        return RepositorySnapshot(
            reference=reference,
            branches=[BranchCommits.model_validate({"branch": {"name": reference.name}})],
        )

    monkeypatch.setattr(view, "fetch_repository", _fetch)
    visualizer = RepositoryVisualizer(client)

    slow = asyncio.ensure_future(visualizer.submit("https://github.com/octocat/slow"))
    await slow_started.wait()
    assert isinstance(visualizer.state, Loading)

    fast_state = await visualizer.submit("https://github.com/octocat/fast")
    release_slow.set()
    slow_state = await slow

    assert isinstance(fast_state, Rendered)
    assert visualizer.state is fast_state
    assert slow_state is fast_state
    assert visualizer.state.graph.node("fast") is not None
    assert visualizer.generation == 2


def test_state_to_dict():
    assert state_to_dict(Idle()) == {"state": "idle", "url": ""}
    idle = state_to_dict(Idle(url="x", error="bad"))
    assert idle == {"state": "idle", "url": "x", "error": "bad"}
    assert state_to_dict(Errored(url="x", message="boom")) == {
        "state": "error",
        "url": "x",
        "error": "boom",
    }


async def test_cancelled_submission_does_not_stay_loading(client, monkeypatch):
    from mcp_github_viz import view

    started = asyncio.Event()

    async def _fetch(client, reference):
        started.set()
        await asyncio.sleep(60)

    monkeypatch.setattr(view, "fetch_repository", _fetch)
    visualizer = RepositoryVisualizer(client)

    task = asyncio.ensure_future(visualizer.submit(URL))
    await started.wait()
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert visualizer.state == Errored(url=URL, message=FALLBACK_ERROR_MESSAGE)


async def test_cancelled_stale_submission_keeps_newer_state(client, monkeypatch):
    from mcp_github_viz import view

    slow_started = asyncio.Event()

    async def _fetch(client, reference):
        if reference.name == "slow":
            slow_started.set()
            await asyncio.sleep(60)
        return RepositorySnapshot(reference=reference)

    monkeypatch.setattr(view, "fetch_repository", _fetch)
    visualizer = RepositoryVisualizer(client)

    slow = asyncio.ensure_future(visualizer.submit("https://github.com/octocat/slow"))
    await slow_started.wait()
    fast_state = await visualizer.submit("https://github.com/octocat/fast")
    slow.cancel()
    with pytest.raises(asyncio.CancelledError):
        await slow

    assert visualizer.state is fast_state
