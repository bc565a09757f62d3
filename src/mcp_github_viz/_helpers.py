"""Shared helpers for loading packaged templates."""

from __future__ import annotations

import functools
from pathlib import Path
from string import Template

_RESOURCES_DIR = Path(__file__).resolve().parent / "resources"


@functools.cache
def _load_file(base_dir: str, filename: str) -> str:
    """Load a file from the given directory with path traversal protection.

    Results are cached — packaged files do not change at runtime.
    """
    if "/" in filename or "\\" in filename or ".." in filename:
        msg = f"Invalid filename: {filename}"
        raise ValueError(msg)
    base = Path(base_dir)
    path = base / filename
    if not path.resolve().is_relative_to(base.resolve()):
        msg = f"Invalid filename: {filename}"
        raise ValueError(msg)
    return path.read_text(encoding="utf-8")


def _load_resource(kind: str, filename: str) -> str:
    """Load ``resources/<kind>/<filename>``."""
    return _load_file(str(_RESOURCES_DIR / kind), filename)


def _render(kind: str, filename: str, **kwargs: str) -> str:
    """Load a template and substitute variables safely.

    Uses string.Template ($var) instead of str.format({var}) so that braces in
    embedded JavaScript and CSS need no escaping.
    """
    return Template(_load_resource(kind, filename)).safe_substitute(kwargs)
