"""Aggregate metrics and gap analysis over the two projected phases."""

from __future__ import annotations

from typing import Optional, Sequence

from retireplan.models import WithdrawalAssessment, YearlyRecord


def total_contributions(accumulation: Sequence[YearlyRecord]) -> float:
    return sum(row.cashFlow for row in accumulation)


def balance_at_retirement(accumulation: Sequence[YearlyRecord], start_balance: float) -> float:
    return accumulation[-1].endingBalance if accumulation else float(start_balance)


def total_investment_growth(
    accumulation: Sequence[YearlyRecord], start_balance: float
) -> float:
    return (
        balance_at_retirement(accumulation, start_balance)
        - start_balance
        - total_contributions(accumulation)
    )


def average_withdrawal_rate(decumulation: Sequence[YearlyRecord]) -> float:
    if not decumulation:
        return 0.0
    return sum(row.withdrawalRate for row in decumulation) / len(decumulation)


def needed_capital(annual_withdrawal: float, retirement_rate: float, target_years: int) -> float:
    """
    Present value of ``target_years`` level withdrawals at ``retirement_rate``.

    A zero rate has no discounting, so the annuity factor collapses to the
    number of years.
    """
    if retirement_rate == 0:
        return annual_withdrawal * target_years
    factor = (1 - (1 + retirement_rate) ** (-target_years)) / retirement_rate
    return annual_withdrawal * factor


def shortfall_capital(
    annual_withdrawal: float,
    balance: float,
    retirement_rate: float,
    target_years: int,
) -> float:
    return max(0.0, needed_capital(annual_withdrawal, retirement_rate, target_years) - balance)


def is_underfunded(decumulation: Sequence[YearlyRecord]) -> bool:
    """True when any retirement year paid out less than the plan needed."""
    return any(-row.cashFlow < row.withdrawalNeeded for row in decumulation)


def is_sustainable(
    depletion_age: Optional[int],
    retirement_age: int,
    target_years: int,
    underfunded: bool = False,
) -> bool:
    """
    Savings cover every year of the horizon in full.

    Ages are year-end ages, so running out in the final horizon year gives
    ``depletion_age == retirement_age + target_years``. That only counts as
    sustainable when the last withdrawal was not capped.
    """
    if underfunded:
        return False
    return depletion_age is None or depletion_age >= retirement_age + target_years


def assess_withdrawal_sustainability(average_rate: float) -> WithdrawalAssessment:
    # Reported as a spend-down plan, not a capital-preservation one.
    return WithdrawalAssessment(
        level="REALISTIC",
        description=f"Withdrawal rate: {average_rate * 100:.1f}%",
    )
