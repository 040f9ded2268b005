"""Module-level query surface over the shipped tax data and item types.

Every function accepts an explicit ``service`` or ``catalog`` so callers and
tests can substitute synthetic catalogs; without one the package defaults
are used.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Sequence

from wealthplan.backend.config.schema import CountryTaxConfig, TaxOption
from wealthplan.backend.config.tax_data import load_default_catalog
from wealthplan.backend.items.catalog import (
    ItemTypeCatalog,
    ItemTypeDefinition,
    default_item_catalog,
)

from .tax_query import TaxQueryService


@lru_cache(maxsize=1)
def default_tax_service() -> TaxQueryService:
    """Return a service bound to the catalog built from the shipped documents."""

    return TaxQueryService(load_default_catalog())


def _tax(service: TaxQueryService | None) -> TaxQueryService:
    return service if service is not None else default_tax_service()


def _items(catalog: ItemTypeCatalog | None) -> ItemTypeCatalog:
    return catalog if catalog is not None else default_item_catalog()


def list_supported_countries(*, service: TaxQueryService | None = None) -> Sequence[str]:
    return _tax(service).list_supported_countries()


def get_tax_config(
    country_code: str, *, service: TaxQueryService | None = None
) -> CountryTaxConfig | None:
    return _tax(service).get_config(country_code)


def get_tax_options(
    country_code: str, tax_type: str, *, service: TaxQueryService | None = None
) -> Sequence[TaxOption]:
    return _tax(service).get_options(country_code, tax_type)


def get_default_tax_option(
    country_code: str, tax_type: str, *, service: TaxQueryService | None = None
) -> TaxOption | None:
    return _tax(service).get_default_option(country_code, tax_type)


def find_tax_option(
    option_id: str,
    country_code: str | None = None,
    *,
    service: TaxQueryService | None = None,
) -> TaxOption | None:
    return _tax(service).find_option(option_id, country_code)


def list_item_types(*, catalog: ItemTypeCatalog | None = None) -> Sequence[ItemTypeDefinition]:
    return _items(catalog).list_all()


def get_item_type_by_id(
    item_type_id: str, *, catalog: ItemTypeCatalog | None = None
) -> ItemTypeDefinition | None:
    return _items(catalog).get_by_id(item_type_id)


def get_asset_types(*, catalog: ItemTypeCatalog | None = None) -> Sequence[ItemTypeDefinition]:
    return _items(catalog).get_asset_types()


def get_cash_flow_types(
    *, catalog: ItemTypeCatalog | None = None
) -> Sequence[ItemTypeDefinition]:
    return _items(catalog).get_cash_flow_types()


def get_debt_types(*, catalog: ItemTypeCatalog | None = None) -> Sequence[ItemTypeDefinition]:
    return _items(catalog).get_debt_types()


def get_item_type_button_label(definition: ItemTypeDefinition) -> str:
    return ItemTypeCatalog.get_button_label(definition)


__all__ = [
    "default_tax_service",
    "find_tax_option",
    "get_asset_types",
    "get_cash_flow_types",
    "get_debt_types",
    "get_default_tax_option",
    "get_item_type_button_label",
    "get_item_type_by_id",
    "get_tax_config",
    "get_tax_options",
    "list_item_types",
    "list_supported_countries",
]
