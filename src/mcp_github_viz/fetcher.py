"""Fetch branches and their recent commits for one repository."""

from __future__ import annotations

import asyncio
import logging

import httpx
from pydantic import ValidationError

from .client import COMMITS_PER_BRANCH, GitHubClient
from .exceptions import GitHubError, RepositoryFetchError
from .models.repositories import (
    Branch,
    BranchCommits,
    Commit,
    Repository,
    RepositoryReference,
    RepositorySnapshot,
)

logger = logging.getLogger(__name__)

# Anything the client or the payload validation can raise for a single request.
_REQUEST_ERRORS = (GitHubError, httpx.HTTPError, ValidationError, TypeError)


async def _resolve_default_branch(client: GitHubClient, reference: RepositoryReference) -> str:
    try:
        data = await client.get_repository(reference.owner, reference.name)
        return Repository.model_validate(data).default_branch
    except _REQUEST_ERRORS as e:
        msg = "Failed to fetch repository"
        raise RepositoryFetchError(msg) from e


async def _fetch_branches(client: GitHubClient, reference: RepositoryReference) -> list[Branch]:
    try:
        data = await client.list_branches(reference.owner, reference.name)
        return [Branch.model_validate(b) for b in data or []]
    except _REQUEST_ERRORS as e:
        msg = "Failed to fetch branches"
        raise RepositoryFetchError(msg) from e


async def _fetch_commits(
    client: GitHubClient,
    reference: RepositoryReference,
    branch: Branch,
    semaphore: asyncio.Semaphore,
) -> BranchCommits:
    async with semaphore:
        try:
            data = await client.list_commits(
                reference.owner, reference.name, branch.name, per_page=COMMITS_PER_BRANCH
            )
            commits = [Commit.model_validate(c) for c in data or []]
        except _REQUEST_ERRORS as e:
            msg = f"Failed to fetch commits for branch '{branch.name}'"
            raise RepositoryFetchError(msg) from e
    return BranchCommits(branch=branch, commits=commits[:COMMITS_PER_BRANCH])


async def fetch_repository(
    client: GitHubClient,
    reference: RepositoryReference,
    *,
    max_concurrency: int | None = None,
    default_branch: str | None = None,
    resolve_default_branch: bool | None = None,
) -> RepositorySnapshot:
    """Fetch the branch list, then up to five commits per branch.

    Commit requests run concurrently, at most *max_concurrency* at a time. The
    first failure cancels the requests still outstanding and is re-raised as
    :class:`RepositoryFetchError`; partial results are never returned.
    """
    config = client.config
    if max_concurrency is None:
        max_concurrency = config.max_concurrency
    if default_branch is None:
        default_branch = config.default_branch
    if resolve_default_branch is None:
        resolve_default_branch = config.resolve_default_branch

    logger.info("Fetching branches for %s", reference.full_name)
    if resolve_default_branch:
        default_branch = await _resolve_default_branch(client, reference)
    branches = await _fetch_branches(client, reference)

    semaphore = asyncio.Semaphore(max_concurrency)
    tasks = [
        asyncio.ensure_future(_fetch_commits(client, reference, branch, semaphore))
        for branch in branches
    ]
    try:
        results = await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        logger.warning("Aborted fetch for %s", reference.full_name)
        raise

    logger.info(
        "Fetched %d branches and %d commits for %s",
        len(results),
        sum(len(r.commits) for r in results),
        reference.full_name,
    )
    return RepositorySnapshot(
        reference=reference, default_branch=default_branch, branches=list(results)
    )
