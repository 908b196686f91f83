from __future__ import annotations

import pytest
from flask.testing import FlaskClient

from retireplan.app import create_app
from retireplan.models import ContributionMode, ProjectionInput, RiskProfile


@pytest.fixture()
def app():
    return create_app({"TESTING": True, "LOG_LEVEL": "WARNING"})


@pytest.fixture()
def client(app) -> FlaskClient:
    with app.test_client() as test_client:
        yield test_client


def example_plan() -> dict:
    """Worked example: 27-year-old saving 7% of 65k, retiring at 70 with CPP + OAS."""
    return {
        "currentAge": 27,
        "retirementAge": 70,
        "yearsInRetirement": 30,
        "annualIncome": 65000,
        "incomeGrowthRate": 0.021,
        "incomeReplacementPercent": 60,
        "contributionMode": "percentOfIncome",
        "savingsRatePercent": 7,
        "currentSavings": 10000,
        "riskProfile": "custom",
        "preRetirementReturn": 0.07,
        "retirementReturn": 0.04,
        "benefits": {"cpp": 1306, "oas": 635},
        "inflationRate": 0.0,
        "applyInflationToWithdrawals": False,
    }


def example_inputs(**overrides) -> ProjectionInput:
    values = dict(
        currentAge=27,
        retirementAge=70,
        targetHorizonYears=30,
        currentAnnualIncome=65000.0,
        incomeGrowthRate=0.021,
        incomeReplacementRatio=0.6,
        currentSavingsBalance=10000.0,
        annualContribution=65000.0 * 7 / 100,
        contributionMode=ContributionMode.PERCENT_OF_INCOME,
        riskProfile=RiskProfile.CUSTOM,
        customPreRetirementRate=0.07,
        customRetirementRate=0.04,
        fixedAnnualBenefits=(1306 + 635) * 12,
        inflationRate=0.0,
        applyInflationToWithdrawals=False,
    )
    values.update(overrides)
    return ProjectionInput(**values)
