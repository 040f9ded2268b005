"""Unit coverage for tax option lookups and selection resolution."""

from __future__ import annotations

import logging

import pytest

from wealthplan.backend.config.catalog import CatalogHandle, TaxCatalog, load_catalog
from wealthplan.backend.services.tax_query import TaxQueryService


@pytest.fixture()
def service(synthetic_catalog: TaxCatalog) -> TaxQueryService:
    return TaxQueryService(synthetic_catalog)


def test_supported_countries_are_sorted_and_unique(service: TaxQueryService) -> None:
    countries = service.list_supported_countries()

    assert countries == ("GB", "NL")
    assert len(set(countries)) == len(countries)
    assert set(countries) == set(service.catalog)


def test_get_config_returns_none_for_unknown_country(service: TaxQueryService) -> None:
    assert service.get_config("NL").country_code == "NL"
    assert service.get_config("ZZ") is None


def test_get_options_by_type(service: TaxQueryService) -> None:
    assert [option.id for option in service.get_options("NL", "income")] == ["nl-box1", "nl-box2"]
    assert [option.id for option in service.get_options("NL", "wealth")] == ["nl-box3"]
    assert service.get_options("GB", "wealth") == ()


@pytest.mark.parametrize(
    ("country", "tax_type"),
    [("ZZ", "income"), ("NL", "inheritance"), ("NL", "")],
)
def test_get_options_is_empty_for_unknown_inputs(
    service: TaxQueryService, country: str, tax_type: str
) -> None:
    assert service.get_options(country, tax_type) == ()


def test_default_option_is_the_one_marked_default(service: TaxQueryService) -> None:
    default = service.get_default_option("NL", "income")

    assert default is not None
    assert default.id == "nl-box1"
    assert [o for o in service.get_options("NL", "income") if o.is_default] == [default]


def test_missing_default_is_reported_as_none(service: TaxQueryService) -> None:
    assert service.get_default_option("GB", "income") is None
    assert service.get_default_option("GB", "wealth") is None
    assert service.get_default_option("ZZ", "income") is None


@pytest.mark.parametrize("option_id", ["nl-box1", "nl-box3", "nl-gains", "gb-cgt"])
def test_global_and_scoped_search_agree(service: TaxQueryService, option_id: str) -> None:
    owner = next(
        code
        for code, config in service.catalog.items()
        if any(option.id == option_id for option in config.all_options())
    )

    scoped = service.find_option(option_id, owner)

    assert scoped is not None
    assert service.find_option(option_id) == scoped


def test_find_option_respects_country_scope(service: TaxQueryService) -> None:
    assert service.find_option("gb-cgt", "NL") is None
    assert service.find_option("gb-cgt", "ZZ") is None
    assert service.find_option("does-not-exist") is None


def test_service_reads_through_catalog_handle(
    synthetic_catalog: TaxCatalog, raw_documents
) -> None:
    handle = CatalogHandle(synthetic_catalog)
    service = TaxQueryService(handle)
    del raw_documents["NL"]

    handle.replace(raw_documents)

    assert service.list_supported_countries() == ("GB",)
    assert service.find_option("nl-box1") is None


@pytest.mark.parametrize("selection", [None, "", "none", "after-tax"])
def test_untaxed_selections_resolve_to_none(service: TaxQueryService, selection) -> None:
    assert service.resolve_option(selection, "NL", "income") is None
    assert service.compute(1000, "NL", "income", selection) is None


def test_default_selection_uses_country_default(service: TaxQueryService) -> None:
    assert service.resolve_option("default", "NL", "wealth").id == "nl-box3"
    assert service.compute(1500, "NL", "income") == pytest.approx(200.0)


def test_default_selection_without_country_logs_warning(
    service: TaxQueryService, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert service.resolve_option("default", None, "income") is None

    assert "without a country" in caplog.text


def test_default_selection_without_configured_default(
    service: TaxQueryService, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level(logging.WARNING):
        assert service.resolve_option("default", "GB", "income") is None

    assert "No default income tax option configured for GB" in caplog.text


def test_explicit_selection_must_match_tax_type(
    service: TaxQueryService, caplog: pytest.LogCaptureFixture
) -> None:
    assert service.resolve_option("nl-box2", "NL", "income").id == "nl-box2"

    with caplog.at_level(logging.WARNING):
        assert service.resolve_option("nl-box2", "NL", "wealth") is None
        assert service.resolve_option("missing", None, "income") is None

    assert "expected wealth" in caplog.text
    assert "missing not found for country any" in caplog.text


def test_compute_applies_exemption_and_floor(raw_documents) -> None:
    raw_documents["GB"]["capitalGainsTaxes"][0]["rate"] = -20
    service = TaxQueryService(load_catalog(raw_documents))

    assert service.compute(5000, "GB", "capital_gains") == pytest.approx(-400.0)
    assert service.compute(5000, "GB", "capital_gains", floor_at_zero=True) == 0.0
    assert service.compute(2000, "GB", "capital_gains") == 0.0
