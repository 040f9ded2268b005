"""Catalog of item type templates offered when creating financial items."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from functools import lru_cache

from pydantic import Field, model_validator

from wealthplan.backend.config.schema import ImmutableModel

from .models import (
    AnnualizedDebt,
    CashFlow,
    FinancialItem,
    FixedAsset,
    ItemCategory,
    LiquidAsset,
    category_of,
)
from .month import Month, add_months, current_month

# Thirty years of monthly repayments.
_DEFAULT_DEBT_TERM_MONTHS = 360


class ItemTypeDefinition(ImmutableModel):
    """A template item together with its presentation metadata."""

    id: str = Field(min_length=1)
    category: ItemCategory
    color: str
    icon: str | None = None
    template: FinancialItem

    @model_validator(mode="after")
    def _validate_category(self) -> ItemTypeDefinition:
        expected = category_of(self.template)
        if expected != self.category:
            raise ValueError(
                f"Item type '{self.id}' is a {self.category} but its template is a {expected}"
            )
        return self

    @property
    def button_label(self) -> str:
        return self.template.name


def build_item_types(reference_month: Month) -> tuple[ItemTypeDefinition, ...]:
    """Return the built-in item types with dates anchored at ``reference_month``."""

    return (
        ItemTypeDefinition(
            id="liquid",
            category="asset",
            color="#3b82f6",
            # A buffer of three to six months of expenses.
            template=LiquidAsset(id="template-liquid", name="Savings", amount=25_000),
        ),
        ItemTypeDefinition(
            id="house",
            category="asset",
            color="#8b5cf6",
            template=FixedAsset(
                id="template-house", name="House", amount=350_000, annual_interest_rate=3.5
            ),
        ),
        ItemTypeDefinition(
            id="car",
            category="asset",
            color="#8b5cf6",
            template=FixedAsset(
                id="template-car", name="Car", amount=35_000, annual_interest_rate=-3.5
            ),
        ),
        ItemTypeDefinition(
            id="income",
            category="cashflow",
            color="#22c55e",
            template=CashFlow(
                id="template-income", name="Income", monthly_amount=3_500, direction="income"
            ),
        ),
        ItemTypeDefinition(
            id="expense",
            category="cashflow",
            color="#ef4444",
            template=CashFlow(
                id="template-expense",
                name="Expense",
                monthly_amount=2_500,
                direction="expense",
            ),
        ),
        ItemTypeDefinition(
            id="windfall",
            category="cashflow",
            color="#22c55e",
            # Bonus, inheritance or tax refund received once.
            template=CashFlow(
                id="template-windfall",
                name="Windfall",
                monthly_amount=10_000,
                direction="income",
                start_date=reference_month,
                is_one_time=True,
            ),
        ),
        ItemTypeDefinition(
            id="mortgage",
            category="debt",
            color="#f97316",
            template=AnnualizedDebt(
                id="template-mortgage",
                name="Mortgage",
                amount=300_000,
                annual_interest_rate=3.5,
                monthly_payment=1_500,
                start_date=reference_month,
                end_date=add_months(reference_month, _DEFAULT_DEBT_TERM_MONTHS),
            ),
        ),
        ItemTypeDefinition(
            id="loan",
            category="debt",
            color="#f97316",
            template=AnnualizedDebt(
                id="template-loan",
                name="Debt",
                amount=30_000,
                annual_interest_rate=4.5,
                monthly_payment=600,
                start_date=reference_month,
                end_date=add_months(reference_month, _DEFAULT_DEBT_TERM_MONTHS),
            ),
        ),
    )


class ItemTypeCatalog:
    """Ordered, read-only collection of :class:`ItemTypeDefinition` entries."""

    def __init__(self, definitions: Iterable[ItemTypeDefinition]) -> None:
        ordered = tuple(definitions)
        index: dict[str, ItemTypeDefinition] = {}
        for definition in ordered:
            if definition.id in index:
                raise ValueError(f"Duplicate item type identifier '{definition.id}'")
            index[definition.id] = definition
        self._definitions = ordered
        self._index = index

    def __len__(self) -> int:
        return len(self._definitions)

    def list_all(self) -> tuple[ItemTypeDefinition, ...]:
        return self._definitions

    def get_by_id(self, item_type_id: str) -> ItemTypeDefinition | None:
        return self._index.get(item_type_id)

    def list_by_category(self, category: str) -> tuple[ItemTypeDefinition, ...]:
        return tuple(
            definition for definition in self._definitions if definition.category == category
        )

    def get_asset_types(self) -> Sequence[ItemTypeDefinition]:
        return self.list_by_category("asset")

    def get_cash_flow_types(self) -> Sequence[ItemTypeDefinition]:
        return self.list_by_category("cashflow")

    def get_debt_types(self) -> Sequence[ItemTypeDefinition]:
        return self.list_by_category("debt")

    @staticmethod
    def get_button_label(definition: ItemTypeDefinition) -> str:
        return definition.button_label


@lru_cache(maxsize=1)
def default_item_catalog() -> ItemTypeCatalog:
    """Return the built-in catalog anchored at the month it was first requested."""

    return ItemTypeCatalog(build_item_types(current_month()))


__all__ = [
    "ItemTypeCatalog",
    "ItemTypeDefinition",
    "build_item_types",
    "default_item_catalog",
]
