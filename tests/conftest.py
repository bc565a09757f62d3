"""Shared test fixtures for mcp-github-viz."""

from __future__ import annotations

import httpx
import pytest
import respx

from mcp_github_viz.client import GitHubClient
from mcp_github_viz.config import GitHubConfig

TEST_API_URL = "https://api.github.com"
TEST_TOKEN = "test-token"


def commit_payload(message: str, author: str = "Mona Lisa", sha: str = "abc123") -> dict:
    return {"sha": sha, "commit": {"message": message, "author": {"name": author}}}


def mock_repository(
    router: respx.MockRouter,
    branches: dict[str, list[str]],
    *,
    owner: str = "octocat",
    repo: str = "Hello-World",
) -> respx.Route:
    """Mock the branch list and per-branch commit endpoints.

    *branches* maps a branch name to its commit messages, newest first.
    Returns the commits route so tests can inspect its calls.
    """
    router.get(f"/repos/{owner}/{repo}/branches").mock(
        return_value=httpx.Response(200, json=[{"name": name} for name in branches])
    )

    def _commits(request: httpx.Request) -> httpx.Response:
        sha = request.url.params["sha"]
        per_page = int(request.url.params["per_page"])
        messages = branches[sha][:per_page]
        return httpx.Response(
            200, json=[commit_payload(m, sha=f"{sha}-{i}") for i, m in enumerate(messages)]
        )

    return router.get(f"/repos/{owner}/{repo}/commits").mock(side_effect=_commits)


@pytest.fixture
def config() -> GitHubConfig:
    return GitHubConfig(api_url=TEST_API_URL, token=TEST_TOKEN)


@pytest.fixture
async def client(config: GitHubConfig):
    client = GitHubClient(config)
    yield client
    await client.close()


@pytest.fixture
def mock_api() -> respx.MockRouter:
    with respx.mock(base_url=TEST_API_URL, assert_all_called=False) as router:
        yield router


@pytest.fixture
def mock_repo(mock_api: respx.MockRouter):
    """Factory fixture: ``mock_repo({"main": [...], "dev": [...]})``."""

    def _mock(branches: dict[str, list[str]], **kwargs: str) -> respx.Route:
        return mock_repository(mock_api, branches, **kwargs)

    return _mock
