"""Month-level projection helpers dispatched on the item variant."""

from __future__ import annotations

from dataclasses import dataclass

from .models import (
    AnnualizedDebt,
    CashFlow,
    Debt,
    FixedAsset,
    InterestOnlyDebt,
    LinearDebt,
    LiquidAsset,
)
from .month import Month


@dataclass(frozen=True)
class DebtPayment:
    """Breakdown of a single monthly debt payment."""

    principal: float
    interest: float
    total: float


def monthly_interest(debt: Debt, balance: float) -> float:
    return balance * (debt.annual_interest_rate / 100 / 12)


def debt_payment(
    debt: Debt, balance: float, months_remaining: int | None = None
) -> DebtPayment:
    """Return the payment due this month on ``balance``.

    Interest-only debts repay nothing until the final month, when the balance
    above ``final_balance`` falls due as a balloon payment.
    """

    interest = monthly_interest(debt, balance)

    if isinstance(debt, LinearDebt):
        principal = min(debt.monthly_principal_payment, balance)
        return DebtPayment(principal=principal, interest=interest, total=principal + interest)

    if isinstance(debt, AnnualizedDebt):
        principal = min(debt.monthly_payment - interest, balance)
        principal = max(0.0, principal)
        return DebtPayment(principal=principal, interest=interest, total=debt.monthly_payment)

    if isinstance(debt, InterestOnlyDebt):
        if months_remaining is not None and months_remaining <= 1:
            balloon = max(0.0, balance - (debt.final_balance or 0.0))
            return DebtPayment(principal=balloon, interest=interest, total=balloon + interest)
        return DebtPayment(principal=0.0, interest=interest, total=interest)

    raise TypeError(f"Unsupported debt variant: {type(debt).__name__}")


def projected_debt_balance(debt: Debt, initial_balance: float, months: int) -> float:
    """Balance remaining after ``months`` of scheduled repayments."""

    if isinstance(debt, InterestOnlyDebt):
        return initial_balance

    balance = initial_balance
    for _ in range(months):
        balance -= debt_payment(debt, balance).principal
        if balance <= 0:
            return 0.0
    return balance


def debt_warnings(debt: Debt) -> list[str]:
    """Return human-readable problems with the debt's payment settings."""

    warnings: list[str] = []
    minimum_interest = monthly_interest(debt, debt.amount)

    if isinstance(debt, LinearDebt):
        if debt.monthly_principal_payment <= 0:
            warnings.append("Monthly principal payment must be greater than 0")
        if debt.monthly_principal_payment < minimum_interest * 0.1:
            warnings.append(
                "Monthly principal payment is very low. "
                f"Minimum interest is {minimum_interest:.2f}/month"
            )
    elif isinstance(debt, AnnualizedDebt):
        if debt.monthly_payment <= 0:
            warnings.append("Monthly payment must be greater than 0")
        if debt.monthly_payment <= minimum_interest:
            warnings.append(
                f"Monthly payment ({debt.monthly_payment:.2f}) must be greater than "
                f"minimum interest ({minimum_interest:.2f}) to pay off debt"
            )
    elif isinstance(debt, InterestOnlyDebt):
        final_balance = debt.final_balance
        if final_balance is not None and final_balance < 0:
            warnings.append("Final balance cannot be negative")
        if final_balance is not None and final_balance > debt.amount:
            warnings.append("Final balance cannot exceed initial debt amount")
        if debt.end_date is None and (final_balance or 0.0) < debt.amount:
            warnings.append(
                "Interest-only debt without end date will never be paid off"
            )
    else:
        raise TypeError(f"Unsupported debt variant: {type(debt).__name__}")

    return warnings


def is_active(item: Debt | CashFlow, month: Month) -> bool:
    """Whether ``month`` falls inside the item's start and end dates."""

    if item.start_date is not None and month < item.start_date:
        return False
    if item.end_date is not None and month > item.end_date:
        return False
    return True


def is_repayment_active(debt: Debt, month: Month) -> bool:
    if not is_active(debt, month):
        return False
    repayment_start = debt.repayment_start_date
    if repayment_start is None:
        repayment_start = debt.start_date
    return repayment_start is None or month >= repayment_start


def is_cash_flow_active(cash_flow: CashFlow, month: Month) -> bool:
    """One-time flows occur only in their start month."""

    if cash_flow.is_one_time:
        return month == cash_flow.start_date
    return is_active(cash_flow, month)


def annual_cash_flow(cash_flow: CashFlow) -> float:
    """Yearly amount; one-time flows count once."""

    if cash_flow.is_one_time:
        return cash_flow.monthly_amount
    return cash_flow.monthly_amount * 12


def projected_asset_value(asset: LiquidAsset | FixedAsset, months: int) -> float:
    """Value after ``months`` of compounded appreciation or depreciation."""

    if isinstance(asset, LiquidAsset):
        return asset.amount
    if isinstance(asset, FixedAsset):
        if months <= 0:
            return asset.amount
        return asset.amount * (1 + asset.annual_interest_rate / 100) ** (months / 12)
    raise TypeError(f"Unsupported asset variant: {type(asset).__name__}")


__all__ = [
    "DebtPayment",
    "annual_cash_flow",
    "debt_payment",
    "debt_warnings",
    "is_active",
    "is_cash_flow_active",
    "is_repayment_active",
    "monthly_interest",
    "projected_asset_value",
    "projected_debt_balance",
]
