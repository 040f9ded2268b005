"""Financial item variants and the catalog of item type templates."""

from .catalog import ItemTypeCatalog, ItemTypeDefinition, build_item_types, default_item_catalog
from .models import (
    AnnualizedDebt,
    CashFlow,
    FinancialItem,
    FixedAsset,
    InterestOnlyDebt,
    LinearDebt,
    LiquidAsset,
    parse_item,
)

__all__ = [
    "AnnualizedDebt",
    "CashFlow",
    "FinancialItem",
    "FixedAsset",
    "InterestOnlyDebt",
    "ItemTypeCatalog",
    "ItemTypeDefinition",
    "LinearDebt",
    "LiquidAsset",
    "build_item_types",
    "default_item_catalog",
    "parse_item",
]
