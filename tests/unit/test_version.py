"""Unit coverage for the project version helper."""

from __future__ import annotations

from importlib import metadata
from pathlib import Path

import pytest

from wealthplan.backend.version import (
    PYPROJECT_PATH,
    get_project_version,
    read_pyproject_version,
)


def test_pyproject_path_points_at_repository_root() -> None:
    assert PYPROJECT_PATH == Path(__file__).resolve().parents[2] / "pyproject.toml"


def test_get_project_version_prefers_installed_metadata(monkeypatch) -> None:
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    monkeypatch.setattr(metadata, "version", lambda package: "9.9.9")

    assert get_project_version() == "9.9.9"
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_get_project_version_falls_back_to_pyproject(monkeypatch) -> None:
    get_project_version.cache_clear()  # type: ignore[attr-defined]
    expected = read_pyproject_version(PYPROJECT_PATH)

    def raise_package_not_found(_: str) -> str:
        raise metadata.PackageNotFoundError

    monkeypatch.setattr(metadata, "version", raise_package_not_found)

    assert get_project_version() == expected
    get_project_version.cache_clear()  # type: ignore[attr-defined]


def test_read_pyproject_version_requires_version(tmp_path: Path) -> None:
    pyproject = tmp_path / "pyproject.toml"
    pyproject.write_text('[project]\nname = "demo"\n', encoding="utf-8")

    with pytest.raises(RuntimeError, match="project version"):
        read_pyproject_version(pyproject)

    pyproject.write_text('[project]\nname = "demo"\nversion = "1.2.3"\n', encoding="utf-8")
    assert read_pyproject_version(pyproject) == "1.2.3"
