"""Domain-specific calculation helpers."""

from .brackets import (
    InflationAdjustment,
    calculate_monthly_income_tax,
    calculate_monthly_tax,
    calculate_progressive_tax,
    compute_liability,
    effective_rate,
    format_percentage,
    round_currency,
)

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
