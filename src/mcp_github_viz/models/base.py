"""Base model for GitHub API responses and graph payloads."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel


class GitHubModel(BaseModel):
    """Base model with common behavior for all visualizer models."""

    model_config = {"extra": "ignore", "populate_by_name": True}

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
