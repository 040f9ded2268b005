"""Financial item variants used as templates and user-editable items.

Each variant is a frozen model tagged by ``kind``; :data:`FinancialItem` is
the closed discriminated union over them. Behaviour lives in
:mod:`wealthplan.backend.items.projection` rather than on the models.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter, field_validator, model_validator

from wealthplan.backend.config.schema import ImmutableModel

from .month import Month

ItemCategory = Literal["asset", "cashflow", "debt"]
CashFlowDirection = Literal["income", "expense"]


class _ItemBase(ImmutableModel):
    id: str = Field(min_length=1)
    name: str

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("Item names cannot be empty")
        return stripped


class LiquidAsset(_ItemBase):
    """Cash-like holdings such as savings or checking accounts."""

    kind: Literal["liquid_asset"] = "liquid_asset"
    amount: float = Field(ge=0)


class FixedAsset(_ItemBase):
    """Property or vehicles that appreciate (positive rate) or depreciate."""

    kind: Literal["fixed_asset"] = "fixed_asset"
    amount: float = Field(ge=0)
    annual_interest_rate: float
    liquidation_date: Month | None = Field(default=None, ge=0)


class CashFlow(_ItemBase):
    """Recurring monthly income or expense, or a one-time transaction."""

    kind: Literal["cash_flow"] = "cash_flow"
    monthly_amount: float = Field(ge=0)
    direction: CashFlowDirection
    start_date: Month | None = Field(default=None, ge=0)
    end_date: Month | None = Field(default=None, ge=0)
    is_one_time: bool = False

    @model_validator(mode="after")
    def _validate_dates(self) -> CashFlow:
        if self.is_one_time and self.start_date is None:
            raise ValueError("One-time cash flows require a start date")
        if (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        ):
            raise ValueError("Cash flow end date cannot precede its start date")
        return self


class _DebtBase(_ItemBase):
    amount: float = Field(ge=0)
    annual_interest_rate: float
    start_date: Month | None = Field(default=None, ge=0)
    repayment_start_date: Month | None = Field(default=None, ge=0)
    end_date: Month | None = Field(default=None, ge=0)


class LinearDebt(_DebtBase):
    """Debt repaid with a fixed principal amount every month."""

    kind: Literal["linear_debt"] = "linear_debt"
    monthly_principal_payment: float


class AnnualizedDebt(_DebtBase):
    """Debt repaid with a fixed total (annuity) payment every month."""

    kind: Literal["annualized_debt"] = "annualized_debt"
    monthly_payment: float


class InterestOnlyDebt(_DebtBase):
    """Debt paying interest only, settled by a balloon payment at the end."""

    kind: Literal["interest_only_debt"] = "interest_only_debt"
    final_balance: float | None = None


Asset = Union[LiquidAsset, FixedAsset]
Debt = Union[LinearDebt, AnnualizedDebt, InterestOnlyDebt]

FinancialItem = Annotated[
    Union[LiquidAsset, FixedAsset, CashFlow, LinearDebt, AnnualizedDebt, InterestOnlyDebt],
    Field(discriminator="kind"),
]

ITEM_KIND_CATEGORIES: dict[str, ItemCategory] = {
    "liquid_asset": "asset",
    "fixed_asset": "asset",
    "cash_flow": "cashflow",
    "linear_debt": "debt",
    "annualized_debt": "debt",
    "interest_only_debt": "debt",
}

_ITEM_ADAPTER: TypeAdapter[Any] = TypeAdapter(FinancialItem)


def parse_item(data: Any) -> FinancialItem:
    """Validate a serialised item, dispatching on its ``kind`` tag."""

    return _ITEM_ADAPTER.validate_python(data)


def category_of(item: FinancialItem) -> ItemCategory:
    return ITEM_KIND_CATEGORIES[item.kind]


def clone_item(item: FinancialItem, **updates: Any) -> FinancialItem:
    """Return a revalidated copy of ``item`` with ``updates`` applied."""

    payload = item.model_dump()
    payload.update(updates)
    return parse_item(payload)


__all__ = [
    "AnnualizedDebt",
    "Asset",
    "CashFlow",
    "CashFlowDirection",
    "Debt",
    "FinancialItem",
    "FixedAsset",
    "ITEM_KIND_CATEGORIES",
    "InterestOnlyDebt",
    "ItemCategory",
    "LinearDebt",
    "LiquidAsset",
    "category_of",
    "clone_item",
    "parse_item",
]
