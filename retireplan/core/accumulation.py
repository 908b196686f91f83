"""Pre-retirement accumulation schedule."""

from __future__ import annotations

from typing import List

from retireplan.models import Phase, YearlyRecord


def project_accumulation(
    start_balance: float,
    annual_contribution: float,
    income_growth_rate: float,
    pre_retirement_rate: float,
    years: int,
    *,
    start_age: int,
    base_year: int,
    annual_income: float = 0.0,
    grow_contribution: bool = False,
) -> List[YearlyRecord]:
    """
    Compound the savings balance one year at a time until retirement.

    Order of operations (per year):
      1) From the second year on, grow income by ``income_growth_rate``; the
         contribution follows income only when ``grow_contribution`` is set.
      2) Investment return on the beginning balance only.
      3) Add the contribution at year end (no growth in its own year).
    """
    schedule: List[YearlyRecord] = []

    income = float(annual_income)
    contribution = float(annual_contribution)
    balance = float(start_balance)

    for step in range(years):
        if step > 0:
            income *= 1 + income_growth_rate
            if grow_contribution:
                contribution *= 1 + income_growth_rate

        investment_return = balance * pre_retirement_rate
        ending = balance + contribution + investment_return
        assert ending >= 0, f"negative accumulation balance at step {step}"

        schedule.append(
            YearlyRecord(
                year=base_year + step,
                age=start_age + step + 1,
                phase=Phase.ACCUMULATION,
                beginningBalance=balance,
                endingBalance=ending,
                cashFlow=contribution,
                investmentReturn=investment_return,
                annualIncome=income,
            )
        )
        balance = ending

    return schedule
