"""Loader reading the per-country YAML tax documents shipped with the package."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Sequence

import yaml
from pydantic import ValidationError

from .catalog import TaxCatalog, load_catalog
from .schema import (
    ConfigValidationError,
    TaxDataManifest,
    TaxDataManifestEntry,
    format_validation_error,
)

DATA_DIR_ENV = "WEALTHPLAN_TAX_DATA_DIR"
CONFIG_DIRECTORY = Path(__file__).resolve().parent / "data"
MANIFEST_FILENAME = "manifest.yaml"


def data_directory() -> Path:
    """Return the directory holding the manifest and country documents."""

    override = os.getenv(DATA_DIR_ENV)
    if override and override.strip():
        return Path(override).expanduser()
    return CONFIG_DIRECTORY


def _load_yaml(path: Path, *, country_code: str | None = None) -> dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as error:
            raise ConfigValidationError(
                f"{path.name} is not valid YAML: {error}", country_code=country_code
            ) from error
    if not isinstance(data, dict):
        raise ConfigValidationError(
            f"{path.name} must define a mapping at the top level",
            country_code=country_code,
        )
    return data


@lru_cache(maxsize=4)
def load_manifest(directory: Path | None = None) -> TaxDataManifest:
    """Load and cache the tax data manifest."""

    manifest_file = (directory or data_directory()) / MANIFEST_FILENAME
    if not manifest_file.exists():
        raise FileNotFoundError(f"Tax data manifest not found: {manifest_file}")

    raw_manifest = _load_yaml(manifest_file)
    try:
        return TaxDataManifest.model_validate(raw_manifest)
    except ValidationError as error:
        raise ConfigValidationError(
            f"Manifest validation failed: {format_validation_error(error)}"
        ) from error


def manifest_entries(directory: Path | None = None) -> Sequence[TaxDataManifestEntry]:
    """Expose the active manifest entries."""

    return load_manifest(directory).active_entries


def read_country_document(
    entry: TaxDataManifestEntry, directory: Path | None = None
) -> dict[str, Any]:
    """Parse the YAML document declared by ``entry``."""

    path = (directory or data_directory()) / entry.resolved_filename
    if not path.exists():
        raise FileNotFoundError(
            f"Tax document for {entry.country} missing: {path.name}"
        )
    return _load_yaml(path, country_code=entry.country)


def read_country_documents(directory: Path | None = None) -> dict[str, dict[str, Any]]:
    """Return the raw documents for every active country keyed by code."""

    return {
        entry.country: read_country_document(entry, directory)
        for entry in manifest_entries(directory)
    }


@lru_cache(maxsize=4)
def load_default_catalog(directory: Path | None = None) -> TaxCatalog:
    """Build and cache the catalog from the shipped documents."""

    return load_catalog(read_country_documents(directory))


def clear_caches() -> None:
    """Forget cached manifests and catalogs, e.g. after the data changed."""

    load_manifest.cache_clear()
    load_default_catalog.cache_clear()


__all__ = [
    "CONFIG_DIRECTORY",
    "DATA_DIR_ENV",
    "MANIFEST_FILENAME",
    "clear_caches",
    "data_directory",
    "load_default_catalog",
    "load_manifest",
    "manifest_entries",
    "read_country_document",
    "read_country_documents",
]
