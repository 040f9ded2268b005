"""Unit coverage for loading the shipped YAML tax documents."""

from __future__ import annotations

from pathlib import Path
from shutil import copy2

import pytest
import yaml

from wealthplan.backend.config import tax_data
from wealthplan.backend.config.schema import ConfigValidationError


@pytest.fixture()
def isolated_data_directory(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Return a temporary copy of the data directory selected via the environment."""

    for path in tax_data.CONFIG_DIRECTORY.glob("*.yaml"):
        copy2(path, tmp_path / path.name)
    monkeypatch.setenv(tax_data.DATA_DIR_ENV, str(tmp_path))
    return tmp_path


def _write_manifest(directory: Path, entries: list[dict[str, str]]) -> None:
    (directory / tax_data.MANIFEST_FILENAME).write_text(
        yaml.safe_dump({"countries": entries}, sort_keys=False)
    )


def test_shipped_documents_build_a_catalog() -> None:
    catalog = tax_data.load_default_catalog()

    assert sorted(catalog) == ["BE", "DE", "FR", "GB", "NL", "US"]
    assert catalog["GB"].wealth_taxes == ()
    assert catalog["NL"].income_taxes[0].id == "nl-box1"


def test_catalog_order_follows_manifest() -> None:
    catalog = tax_data.load_default_catalog()
    manifest_order = [entry.country for entry in tax_data.manifest_entries()]

    assert list(catalog) == manifest_order


def test_environment_override_selects_directory(isolated_data_directory: Path) -> None:
    _write_manifest(isolated_data_directory, [{"country": "NL"}, {"country": "GB"}])

    assert tax_data.data_directory() == isolated_data_directory
    assert list(tax_data.load_default_catalog()) == ["NL", "GB"]


def test_draft_entries_are_skipped(isolated_data_directory: Path) -> None:
    _write_manifest(
        isolated_data_directory,
        [{"country": "NL"}, {"country": "DE", "status": "draft"}],
    )

    assert list(tax_data.read_country_documents()) == ["NL"]


def test_custom_filenames_are_resolved(isolated_data_directory: Path) -> None:
    (isolated_data_directory / "tax.NL.yaml").rename(isolated_data_directory / "netherlands.yaml")
    _write_manifest(isolated_data_directory, [{"country": "NL", "filename": "netherlands.yaml"}])

    documents = tax_data.read_country_documents()

    assert documents["NL"]["countryName"] == "Netherlands"


def test_missing_document_raises(isolated_data_directory: Path) -> None:
    _write_manifest(isolated_data_directory, [{"country": "LU"}])

    with pytest.raises(FileNotFoundError, match="LU"):
        tax_data.load_default_catalog()


def test_missing_manifest_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        tax_data.load_manifest(tmp_path)


def test_duplicate_manifest_entries_are_rejected(isolated_data_directory: Path) -> None:
    _write_manifest(isolated_data_directory, [{"country": "NL"}, {"country": "NL"}])

    with pytest.raises(ConfigValidationError, match="Duplicate country NL"):
        tax_data.load_manifest()


def test_non_mapping_documents_are_rejected(isolated_data_directory: Path) -> None:
    (isolated_data_directory / "tax.NL.yaml").write_text("- just\n- a list\n")
    _write_manifest(isolated_data_directory, [{"country": "NL"}])

    with pytest.raises(ConfigValidationError, match="mapping") as excinfo:
        tax_data.read_country_documents()

    assert excinfo.value.country_code == "NL"


def test_malformed_yaml_is_reported(isolated_data_directory: Path) -> None:
    (isolated_data_directory / "tax.NL.yaml").write_text("countryCode: [unclosed\n")
    _write_manifest(isolated_data_directory, [{"country": "NL"}])

    with pytest.raises(ConfigValidationError, match="not valid YAML") as excinfo:
        tax_data.read_country_documents()

    assert excinfo.value.country_code == "NL"


def test_non_finite_yaml_numbers_are_rejected(isolated_data_directory: Path) -> None:
    document = isolated_data_directory / "tax.NL.yaml"
    document.write_text(
        document.read_text().replace("exemptionThreshold: 57000", "exemptionThreshold: .nan")
    )
    _write_manifest(isolated_data_directory, [{"country": "NL"}])

    with pytest.raises(ConfigValidationError) as excinfo:
        tax_data.load_default_catalog()

    assert excinfo.value.country_code == "NL"
    assert excinfo.value.option_id == "nl-box3"
