from __future__ import annotations

from math import isclose

import pytest

from retireplan.core.protection import dependent_expenses, insurance_need
from retireplan.models import Dependent


def test_income_replacement_alone():
    need = insurance_need(65000.0)

    assert need.incomeReplacement == 715000.0
    assert need.debtCoverage == 0.0
    assert need.dependentExpenses == 0.0
    assert need.totalNeed == 715000.0
    assert need.coverageGap == 715000.0


def test_full_household_need_and_gap():
    need = insurance_need(
        65000.0,
        debt=200000.0,
        dependents=[Dependent.CHILDREN, Dependent.SPOUSE, Dependent.PARENTS],
        current_coverage=500000.0,
    )

    assert isclose(need.dependentExpenses, 450000.0 + 390000.0 + 100000.0)
    assert isclose(need.totalNeed, 1_855_000.0)
    assert need.currentCoverage == 500000.0
    assert isclose(need.coverageGap, 1_355_000.0)


@pytest.mark.parametrize(
    "dependents, expected",
    [
        ([], 0.0),
        ([Dependent.CHILDREN], 450000.0),
        ([Dependent.SPOUSE], 300000.0),
        ([Dependent.OTHER], 100000.0),
        ([Dependent.PARENTS, Dependent.OTHER], 100000.0),
        ([Dependent.CHILDREN, Dependent.CHILDREN], 450000.0),
    ],
)
def test_dependent_allowances(dependents, expected):
    assert isclose(dependent_expenses(50000.0, dependents), expected)


def test_gap_never_goes_negative():
    need = insurance_need(10000.0, current_coverage=1_000_000.0)

    assert need.totalNeed == 110000.0
    assert need.coverageGap == 0.0
