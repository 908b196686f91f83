"""Fixed retirement income and the withdrawal it leaves for personal savings."""

from __future__ import annotations

from typing import Iterable, Optional

MONTHS_PER_YEAR = 12


def aggregate_benefits(monthly_benefits: Iterable[Optional[float]]) -> float:
    """Sum monthly government/pension/other income into an annual figure. Missing entries count as zero."""
    return sum(amount or 0.0 for amount in monthly_benefits) * MONTHS_PER_YEAR


def final_year_income(current_income: float, income_growth_rate: float, years_to_retirement: int) -> float:
    return current_income * (1 + income_growth_rate) ** years_to_retirement


def required_annual_income(
    current_income: float,
    income_growth_rate: float,
    years_to_retirement: int,
    replacement_ratio: float,
) -> float:
    return final_year_income(current_income, income_growth_rate, years_to_retirement) * replacement_ratio


def required_annual_withdrawal(required_income: float, annual_fixed_benefits: float) -> float:
    """What savings must cover each year once fixed benefits are netted off."""
    return max(0.0, required_income - annual_fixed_benefits)
