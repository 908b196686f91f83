"""Life-insurance need and coverage gap for the protection step of a plan."""

from __future__ import annotations

import logging
from typing import Iterable

from retireplan.models import Dependent, ProtectionNeed

logger = logging.getLogger(__name__)

INCOME_MULTIPLIER = 11

# children: two kids at 15k a year, over an average of 15 years
CHILD_ANNUAL_COST = 15000.0
CHILDREN_ASSUMED = 2
CHILD_SUPPORT_YEARS = 15

SPOUSE_INCOME_SHARE = 0.6
SPOUSE_SUPPORT_YEARS = 10

# parents or anyone else who relies on the household
OTHER_ANNUAL_SUPPORT = 10000.0
OTHER_SUPPORT_YEARS = 10


def dependent_expenses(annual_income: float, dependents: Iterable[Dependent]) -> float:
    """Lump sum to support dependants until they are independent.

    Each kind of dependant counts once, however often it is listed. Parents and
    other dependants share a single allowance.
    """
    kinds = set(dependents)
    total = 0.0
    if Dependent.CHILDREN in kinds:
        total += CHILD_ANNUAL_COST * CHILDREN_ASSUMED * CHILD_SUPPORT_YEARS
    if Dependent.SPOUSE in kinds:
        total += annual_income * SPOUSE_INCOME_SHARE * SPOUSE_SUPPORT_YEARS
    if Dependent.PARENTS in kinds or Dependent.OTHER in kinds:
        total += OTHER_ANNUAL_SUPPORT * OTHER_SUPPORT_YEARS
    return total


def insurance_need(
    annual_income: float,
    *,
    debt: float = 0.0,
    dependents: Iterable[Dependent] = (),
    current_coverage: float = 0.0,
) -> ProtectionNeed:
    """
    Total cover needed: income replacement (11x income) plus debt to clear plus
    dependant support. The gap is whatever existing cover does not reach, never
    below zero.
    """
    income_replacement = annual_income * INCOME_MULTIPLIER
    dependants = dependent_expenses(annual_income, dependents)
    total = income_replacement + debt + dependants
    gap = max(0.0, total - current_coverage)
    logger.debug("protection need %.2f against cover %.2f", total, current_coverage)

    return ProtectionNeed(
        incomeReplacement=income_replacement,
        debtCoverage=debt,
        dependentExpenses=dependants,
        totalNeed=total,
        currentCoverage=current_coverage,
        coverageGap=gap,
    )

