"""Retirement drawdown schedule with depletion detection."""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from retireplan.models import Phase, YearlyRecord

logger = logging.getLogger(__name__)


def project_decumulation(
    start_balance: float,
    annual_withdrawal: float,
    retirement_rate: float,
    horizon_years: int,
    inflation_rate: float = 0.0,
    *,
    retirement_age: int,
    base_year: int,
    required_income: float = 0.0,
) -> Tuple[List[YearlyRecord], Optional[int]]:
    """
    Draw the balance down for up to ``horizon_years`` and report the depletion age.

    Conventions (per year):
      1) Withdrawal = base withdrawal grown by inflation from the second year on.
      2) Withdraw at START of year, never more than the balance on hand.
      3) Apply growth on the post-withdrawal remainder.
      4) Stop once the ending balance reaches zero; that year's age is the
         depletion age. ``None`` means the money lasted the whole horizon.

    A capped year keeps the full need in ``withdrawalNeeded`` so callers can
    tell an underfunded final year from one that was paid in full.
    """
    rows: List[YearlyRecord] = []
    balance = float(start_balance)
    withdrawal = float(annual_withdrawal)

    for step in range(horizon_years):
        if step > 0:
            withdrawal *= 1 + inflation_rate

        starting = balance
        actual = min(withdrawal, starting)
        remainder = starting - actual
        investment_return = remainder * retirement_rate
        ending = remainder + investment_return
        assert ending >= -1e-9, f"negative drawdown balance at step {step}"
        ending = max(0.0, ending)

        age = retirement_age + step + 1
        rows.append(
            YearlyRecord(
                year=base_year + step,
                age=age,
                phase=Phase.DECUMULATION,
                beginningBalance=starting,
                endingBalance=ending,
                cashFlow=-actual,
                investmentReturn=investment_return,
                withdrawalRate=actual / starting if starting > 0 else 0.0,
                annualIncome=required_income,
                withdrawalNeeded=withdrawal,
            )
        )

        if ending <= 0:
            logger.debug("savings depleted at age %d after %d retirement years", age, step + 1)
            return rows, age

        balance = ending

    return rows, None
