"""Service-layer helpers for the WealthPlan backend."""

from .calculators import compute_liability
from .queries import (
    default_tax_service,
    find_tax_option,
    get_asset_types,
    get_cash_flow_types,
    get_debt_types,
    get_default_tax_option,
    get_item_type_button_label,
    get_item_type_by_id,
    get_tax_config,
    get_tax_options,
    list_item_types,
    list_supported_countries,
)
from .tax_query import TaxQueryService

__all__ = [
    "TaxQueryService",
    "compute_liability",
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
