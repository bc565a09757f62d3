"""Repository models: references, branches, commits."""

from __future__ import annotations

from .base import GitHubModel


class RepositoryReference(GitHubModel):
    model_config = {"frozen": True}

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


class Repository(GitHubModel):
    name: str = ""
    full_name: str = ""
    default_branch: str = "main"
    html_url: str = ""


class CommitAuthor(GitHubModel):
    name: str = ""
    email: str = ""
    date: str = ""


class CommitDetail(GitHubModel):
    message: str = ""
    author: CommitAuthor | None = None


class Commit(GitHubModel):
    sha: str = ""
    html_url: str = ""
    commit: CommitDetail = CommitDetail()

    @property
    def message(self) -> str:
        return self.commit.message

    @property
    def author_name(self) -> str:
        return self.commit.author.name if self.commit.author else ""


class BranchHead(GitHubModel):
    sha: str = ""


class Branch(GitHubModel):
    name: str
    protected: bool = False
    commit: BranchHead | None = None


class BranchCommits(GitHubModel):
    """A branch together with its most recent commits, newest first."""

    branch: Branch
    commits: list[Commit] = []


class RepositorySnapshot(GitHubModel):
    """Everything one fetch cycle retrieved for a repository."""

    reference: RepositoryReference
    default_branch: str = "main"
    branches: list[BranchCommits] = []
