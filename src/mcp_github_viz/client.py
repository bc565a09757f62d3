"""GitHub API client using httpx."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import quote

import httpx

from .config import GitHubConfig
from .exceptions import GitHubApiError, GitHubAuthError, GitHubNotFoundError

COMMITS_PER_BRANCH = 5


class GitHubClient:
    """Async read-only HTTP client for the GitHub REST API."""

    def __init__(self, config: GitHubConfig | None = None) -> None:
        self.config = config or GitHubConfig.from_env()
        self.config.validate()
        headers = {"Accept": "application/vnd.github+json"}
        if self.config.token:
            headers["Authorization"] = f"token {self.config.token}"
        self._client = httpx.AsyncClient(
            base_url=self.config.api_url,
            headers=headers,
            timeout=self.config.request_timeout,
            verify=self.config.ssl_verify,
        )

    async def close(self) -> None:
        await self._client.aclose()

    # ── HTTP helpers ──────────────────────────────────────────────

    @staticmethod
    def _repo_path(owner: str, repo: str) -> str:
        return f"/repos/{quote(owner, safe='')}/{quote(repo, safe='')}"

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an API request and return parsed JSON."""
        resp = await self._client.request(method, path, params=params)

        if resp.status_code in (401, 403):
            raise GitHubAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitHubNotFoundError(resp.text)
        if not resp.is_success:
            raise GitHubApiError(resp.status_code, resp.reason_phrase or "", resp.text)

        if resp.status_code == 204 or not resp.content:
            return None

        content_type = resp.headers.get("content-type", "")
        if "text/html" in content_type:
            msg = "Unexpected HTML response — check GITHUB_API_URL"
            raise GitHubApiError(resp.status_code, msg, resp.text[:500])

        try:
            return resp.json()
        except json.JSONDecodeError as e:
            raise GitHubApiError(
                resp.status_code,
                f"JSON parse error: {e}",
                resp.text[:500],
            ) from e

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self._request("GET", path, params=params)

    # ── Repositories ──────────────────────────────────────────────

    async def get_repository(self, owner: str, repo: str) -> dict:
        return await self.get(self._repo_path(owner, repo))

    # ── Branches ──────────────────────────────────────────────────

    async def list_branches(self, owner: str, repo: str) -> list[dict]:
        return await self.get(f"{self._repo_path(owner, repo)}/branches")

    # ── Commits ───────────────────────────────────────────────────

    async def list_commits(
        self, owner: str, repo: str, sha: str, per_page: int = COMMITS_PER_BRANCH
    ) -> list[dict]:
        return await self.get(
            f"{self._repo_path(owner, repo)}/commits",
            params={"sha": sha, "per_page": per_page},
        )
