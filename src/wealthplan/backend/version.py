"""Utilities for exposing the project version consistently."""

from __future__ import annotations

import tomllib
from functools import lru_cache
from importlib import metadata
from pathlib import Path
from typing import Final

PACKAGE_NAME: Final = "wealthplan"
PYPROJECT_PATH: Final = Path(__file__).resolve().parents[3] / "pyproject.toml"


@lru_cache(maxsize=1)
def get_project_version() -> str:
    """Return the installed version, falling back to ``pyproject.toml``.

    Source checkouts run without package metadata (tests, ``scripts/``), in
    which case the project table is the canonical source.
    """

    try:
        return metadata.version(PACKAGE_NAME)
    except metadata.PackageNotFoundError:
        return read_pyproject_version(PYPROJECT_PATH)


def read_pyproject_version(path: Path) -> str:
    if not path.exists():  # pragma: no cover - repository invariant
        raise RuntimeError(f"Unable to locate project metadata at {path}")

    with path.open("rb") as handle:
        project = tomllib.load(handle).get("project", {})

    version = project.get("version")
    if not isinstance(version, str) or not version:
        raise RuntimeError("Unable to determine project version from pyproject.toml")
    return version


__all__ = ["PACKAGE_NAME", "PYPROJECT_PATH", "get_project_version", "read_pyproject_version"]
