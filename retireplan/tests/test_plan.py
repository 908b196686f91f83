from __future__ import annotations

from copy import deepcopy
from math import isclose

import pytest

from retireplan.domain.plan import (
    InvalidInputError,
    build_projection_input,
    prepare_plan,
    protection_need,
    require_valid_plan,
)
from retireplan.models import ContributionMode, RiskProfile
from retireplan.schemas.projection import PlanRequest
from retireplan.tests.conftest import example_plan


def load_request(**overrides) -> PlanRequest:
    plan = deepcopy(example_plan())
    plan.update(overrides)
    return PlanRequest.model_validate(plan)


def test_example_plan_folds_into_projection_input():
    inputs = build_projection_input(load_request())

    assert inputs.targetHorizonYears == 30
    assert isclose(inputs.annualContribution, 4550.0)
    assert isclose(inputs.fixedAnnualBenefits, 23292.0)
    assert isclose(inputs.incomeReplacementRatio, 0.6)
    assert inputs.currentSavingsBalance == 10000.0
    assert inputs.riskProfile == RiskProfile.CUSTOM
    assert inputs.customPreRetirementRate == 0.07
    assert inputs.applyInflationToWithdrawals is False


def test_accounts_are_summed_in_fixed_sum_mode():
    request = load_request(
        contributionMode="fixedAnnualSum",
        savingsRatePercent=None,
        accounts=[
            {"label": "RRSP", "currentBalance": 20000, "annualContribution": 3000},
            {"label": "TFSA", "currentBalance": 5000, "annualContribution": 1500},
        ],
    )
    preparation = prepare_plan(request)

    assert preparation.errors == []
    assert preparation.warnings == []
    assert preparation.inputs.contributionMode == ContributionMode.FIXED_ANNUAL_SUM
    assert preparation.inputs.currentSavingsBalance == 35000.0
    assert preparation.inputs.annualContribution == 4500.0


def test_horizon_from_max_age_and_default():
    assert build_projection_input(load_request(yearsInRetirement=None, maxAge=95)).targetHorizonYears == 25
    assert build_projection_input(load_request(yearsInRetirement=None)).targetHorizonYears == 25
    assert (
        build_projection_input(load_request(yearsInRetirement=None), default_horizon_years=35).targetHorizonYears
        == 35
    )


def test_inflation_default_applies_when_missing():
    inputs = build_projection_input(load_request(inflationRate=None), default_inflation_rate=0.025)
    assert inputs.inflationRate == 0.025


@pytest.mark.parametrize(
    "overrides, message",
    [
        ({"currentAge": 70, "retirementAge": 65}, "Retirement age must be greater than current age"),
        ({"savingsRatePercent": 150}, "Savings rate cannot exceed 100%"),
        ({"incomeReplacementPercent": 250}, "Income replacement ratio seems unrealistic (>200%)"),
        ({"savingsRatePercent": None}, "savingsRatePercent is required when contributionMode is percentOfIncome"),
        ({"yearsInRetirement": None, "maxAge": 65}, "maxAge 65 must be greater than retirementAge 70"),
    ],
)
def test_invalid_plans_raise(overrides, message):
    with pytest.raises(InvalidInputError) as excinfo:
        build_projection_input(load_request(**overrides))
    assert message in excinfo.value.errors


def test_all_problems_reported_together():
    preparation = prepare_plan(
        load_request(currentAge=70, retirementAge=65, incomeReplacementPercent=300)
    )
    assert preparation.inputs is None
    assert len(preparation.errors) == 2


def test_ignored_fields_produce_warnings():
    preparation = prepare_plan(
        load_request(
            riskProfile="aggressive",
            accounts=[{"label": "RRSP", "currentBalance": 0, "annualContribution": 1000}],
        )
    )

    assert preparation.inputs.riskProfile == RiskProfile.BALANCED
    assert any("unknown riskProfile" in warning for warning in preparation.warnings)
    assert any("custom return rates ignored" in warning for warning in preparation.warnings)
    assert any("account contributions ignored" in warning for warning in preparation.warnings)


def test_require_valid_plan_keeps_warnings_and_raises_on_errors():
    preparation = require_valid_plan(load_request(riskProfile="aggressive"))
    assert preparation.inputs.riskProfile == RiskProfile.BALANCED
    assert preparation.errors == []
    assert any("unknown riskProfile" in warning for warning in preparation.warnings)

    with pytest.raises(InvalidInputError) as excinfo:
        require_valid_plan(load_request(savingsRatePercent=150))
    assert excinfo.value.errors == ["Savings rate cannot exceed 100%"]


def test_protection_amounts_follow_their_flags():
    request = load_request(
        protection={
            "hasDependents": True,
            "dependentTypes": ["children"],
            "hasDebt": False,
            "debtAmount": 50000,
            "hasCoverage": True,
            "insuranceCoverage": 250000,
        }
    )

    need = protection_need(request)
    assert need.debtCoverage == 0.0
    assert need.dependentExpenses == 450000.0
    assert need.currentCoverage == 250000.0
    assert isclose(need.coverageGap, 65000.0 * 11 + 450000.0 - 250000.0)

    preparation = prepare_plan(request)
    assert preparation.warnings == ["debtAmount ignored: hasDebt is false"]


def test_missing_protection_step_uses_income_only():
    request = load_request()

    assert request.protection is None
    assert protection_need(request).totalNeed == 65000.0 * 11
