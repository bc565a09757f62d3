"""GitHub repository URL parsing."""

from __future__ import annotations

import re

from .models.repositories import RepositoryReference

# Matches:  https://github.com/<owner>/<repo>
_REPOSITORY_RE = re.compile(r"https://github\.com/([\w-]+)/([\w-]+)", re.ASCII)


def parse_repository_url(url: str) -> RepositoryReference | None:
    """Extract the owner and repository name from a GitHub repository URL.

    Returns ``None`` when *url* does not contain a ``https://github.com/<owner>/<repo>``
    address. Trailing slashes, query strings and other hosts are not normalized.
    """
    m = _REPOSITORY_RE.search(url)
    if m:
        return RepositoryReference(owner=m.group(1), name=m.group(2))
    return None
