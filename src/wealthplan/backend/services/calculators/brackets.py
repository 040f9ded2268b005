"""Marginal tax computation for flat and progressive tax options."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from wealthplan.backend.config.schema import TaxBracket, TaxOption


@dataclass(frozen=True)
class InflationAdjustment:
    """Indexing applied to thresholds when projecting into future months.

    ``inflation_rate`` is an annual percentage; ``months_since_reference``
    counts months elapsed since the year the thresholds were published for.
    """

    inflation_rate: float
    months_since_reference: int

    def factor(self) -> float:
        if self.months_since_reference <= 0:
            return 1.0
        years = self.months_since_reference / 12
        return (1 + self.inflation_rate / 100) ** years

    def apply(self, amount: float) -> float:
        return amount * self.factor()


def _adjust(amount: float, inflation: InflationAdjustment | None) -> float:
    if inflation is None:
        return amount
    return inflation.apply(amount)


def calculate_progressive_tax(
    amount: float,
    brackets: Sequence[TaxBracket],
    inflation: InflationAdjustment | None = None,
) -> float:
    """Calculate marginal tax for ``amount`` across ascending ``brackets``.

    Each bracket taxes only the slice between its own threshold and the next
    bracket's threshold; the last bracket is open ended.
    """

    if amount <= 0 or not brackets:
        return 0.0

    thresholds = [_adjust(bracket.threshold, inflation) for bracket in brackets]
    total = 0.0

    for index, bracket in enumerate(brackets):
        lower = thresholds[index]
        if amount <= lower:
            break
        if index + 1 < len(brackets):
            upper = min(amount, thresholds[index + 1])
        else:
            upper = amount
        total += (upper - lower) * bracket.rate / 100

    return total


def compute_liability(
    amount: float,
    option: TaxOption,
    *,
    floor_at_zero: bool = False,
    inflation: InflationAdjustment | None = None,
) -> float:
    """Return the tax owed on ``amount`` under ``option``.

    The exemption threshold is subtracted first. Negative rates are passed
    through so rebate brackets can produce a negative liability unless
    ``floor_at_zero`` is set. No rounding is applied.
    """

    assert (option.rate is None) != (option.brackets is None), (
        f"tax option {option.id!r} must define exactly one of rate or brackets"
    )

    exemption = _adjust(option.exemption_threshold or 0.0, inflation)
    taxable = max(0.0, amount - exemption)

    if option.rate is not None:
        liability = taxable * option.rate / 100
    else:
        liability = calculate_progressive_tax(taxable, option.brackets or (), inflation)

    if floor_at_zero:
        return max(0.0, liability)
    return liability


def calculate_monthly_tax(
    annual_amount: float,
    option: TaxOption,
    *,
    floor_at_zero: bool = False,
    inflation: InflationAdjustment | None = None,
) -> float:
    """Spread the liability on an annual amount evenly over twelve months."""

    annual = compute_liability(
        annual_amount, option, floor_at_zero=floor_at_zero, inflation=inflation
    )
    return annual / 12


def calculate_monthly_income_tax(
    monthly_income: float,
    option: TaxOption,
    *,
    floor_at_zero: bool = False,
    inflation: InflationAdjustment | None = None,
) -> float:
    """Tax a monthly income by annualising it so brackets apply correctly."""

    return calculate_monthly_tax(
        monthly_income * 12, option, floor_at_zero=floor_at_zero, inflation=inflation
    )


def effective_rate(amount: float, liability: float) -> float:
    """Return ``liability`` as a percentage of ``amount`` (0 for no amount)."""

    if amount <= 0:
        return 0.0
    return liability / amount * 100


def format_percentage(value: float) -> str:
    """Return a human-readable label for a percentage ``value`` such as ``36.97``."""

    if float(int(value)) == value:
        return f"{int(value)}%"
    return f"{value:.2f}%"


def round_currency(value: float) -> float:
    """Round monetary amounts to two decimals."""

    return round(value, 2)


__all__ = [
    "InflationAdjustment",
    "calculate_monthly_income_tax",
    "calculate_monthly_tax",
    "calculate_progressive_tax",
    "compute_liability",
    "effective_rate",
    "format_percentage",
    "round_currency",
]
