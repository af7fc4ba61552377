"""Resolve the installed regroup version."""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

_DIST_NAME = "regroup"
_FALLBACK = "0.0.0"


def _version_from_source_tree() -> str:
    # Running from a checkout without `pip install -e .`
    pyproject = Path(__file__).resolve().parent.parent / "pyproject.toml"
    if not pyproject.is_file():
        return _FALLBACK
    project = tomllib.loads(pyproject.read_text(encoding="utf-8")).get("project", {})
    return str(project.get("version", _FALLBACK))


try:
    __version__ = metadata.version(_DIST_NAME)
except metadata.PackageNotFoundError:  # pragma: no cover - source checkout only
    __version__ = _version_from_source_tree()

__all__ = ["__version__"]
