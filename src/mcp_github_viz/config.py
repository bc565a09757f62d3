"""GitHub visualizer configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass

DEFAULT_API_URL = "https://api.github.com"


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


@dataclass
class GitHubConfig:
    """Configuration for the GitHub visualizer, loaded from environment variables."""

    api_url: str = DEFAULT_API_URL
    token: str = ""
    timeout: int = 30
    ssl_verify: bool = True
    max_concurrency: int = 8
    default_branch: str = "main"
    resolve_default_branch: bool = False
    width: int = 960
    height: int = 600

    @classmethod
    def from_env(cls) -> GitHubConfig:
        api_url = (os.getenv("GITHUB_API_URL") or DEFAULT_API_URL).rstrip("/")
        token = os.getenv("GITHUB_TOKEN") or os.getenv("GH_TOKEN") or os.getenv("GITHUB_PAT", "")
        timeout = int(os.getenv("GITHUB_TIMEOUT", "30"))
        ssl_verify = os.getenv("GITHUB_SSL_VERIFY", "true").lower() not in (
            "false",
            "0",
            "no",
        )

        return cls(
            api_url=api_url,
            token=token,
            timeout=timeout,
            ssl_verify=ssl_verify,
            max_concurrency=int(os.getenv("GITHUB_VIZ_MAX_CONCURRENCY", "8")),
            default_branch=os.getenv("GITHUB_VIZ_DEFAULT_BRANCH", "main"),
            resolve_default_branch=_env_flag("GITHUB_VIZ_RESOLVE_DEFAULT_BRANCH", "false"),
            width=int(os.getenv("GITHUB_VIZ_WIDTH", "960")),
            height=int(os.getenv("GITHUB_VIZ_HEIGHT", "600")),
        )

    @property
    def request_timeout(self) -> float | None:
        """Per-request timeout in seconds; ``None`` when disabled with 0."""
        return float(self.timeout) if self.timeout > 0 else None

    def validate(self) -> None:
        if not self.api_url:
            msg = "GITHUB_API_URL must not be empty"
            raise ValueError(msg)
        if self.max_concurrency < 1:
            msg = "GITHUB_VIZ_MAX_CONCURRENCY must be at least 1"
            raise ValueError(msg)
        if self.width < 1 or self.height < 1:
            msg = "GITHUB_VIZ_WIDTH and GITHUB_VIZ_HEIGHT must be positive"
            raise ValueError(msg)
