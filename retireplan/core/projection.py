from __future__ import annotations

import logging
from datetime import datetime
from typing import Dict, Iterable, Optional

from retireplan.core.accumulation import project_accumulation
from retireplan.core.benefits import (
    MONTHS_PER_YEAR,
    final_year_income,
    required_annual_income,
    required_annual_withdrawal,
)
from retireplan.core.decumulation import project_decumulation
from retireplan.core.rates import resolve_rates
from retireplan.core.summary import (
    assess_withdrawal_sustainability,
    average_withdrawal_rate,
    balance_at_retirement,
    is_sustainable,
    is_underfunded,
    needed_capital,
    shortfall_capital,
    total_contributions,
    total_investment_growth,
)
from retireplan.models import (
    ContributionMode,
    ProfileOutcome,
    ProjectionInput,
    ProjectionResult,
    ProjectionSummary,
    RiskProfile,
    ScenarioComparison,
    Verdict,
)

logger = logging.getLogger(__name__)

CONSERVATIVE_RETIREMENT_RATE = 0.04
AGGRESSIVE_RETIREMENT_RATE = 0.07


def run_projection(
    inputs: ProjectionInput,
    base_year: Optional[int] = None,
    retirement_rate_override: Optional[float] = None,
) -> ProjectionResult:
    """
    Project savings to retirement, draw them down over the target horizon and
    summarise the outcome.

    Conventions:
      - Ages on every row are ages at year end.
      - Accumulation: return on the beginning balance, contribution lands at year end.
      - Decumulation: withdrawal at year start, return on what is left.
      - ``retirement_rate_override`` replaces the profile's retirement-phase rate
        (used by the scenario comparison).
    """
    base_year = base_year or datetime.now().year

    rates = resolve_rates(
        inputs.riskProfile,
        inputs.customPreRetirementRate,
        inputs.customRetirementRate,
    )
    if retirement_rate_override is not None:
        rates = rates.model_copy(update={"retirementRate": retirement_rate_override})
    logger.debug(
        "projecting %s plan: pre=%.4f retirement=%.4f",
        rates.profile.value,
        rates.preRetirementRate,
        rates.retirementRate,
    )

    years = inputs.years_to_retirement
    accumulation = project_accumulation(
        start_balance=inputs.currentSavingsBalance,
        annual_contribution=inputs.annualContribution,
        income_growth_rate=inputs.incomeGrowthRate,
        pre_retirement_rate=rates.preRetirementRate,
        years=years,
        start_age=inputs.currentAge,
        base_year=base_year,
        annual_income=inputs.currentAnnualIncome,
        grow_contribution=inputs.contributionMode == ContributionMode.PERCENT_OF_INCOME,
    )
    at_retirement = balance_at_retirement(accumulation, inputs.currentSavingsBalance)

    income_at_retirement = final_year_income(
        inputs.currentAnnualIncome, inputs.incomeGrowthRate, years
    )
    required_income = required_annual_income(
        inputs.currentAnnualIncome,
        inputs.incomeGrowthRate,
        years,
        inputs.incomeReplacementRatio,
    )
    withdrawal = required_annual_withdrawal(required_income, inputs.fixedAnnualBenefits)

    decumulation, depletion_age = project_decumulation(
        start_balance=at_retirement,
        annual_withdrawal=withdrawal,
        retirement_rate=rates.retirementRate,
        horizon_years=inputs.targetHorizonYears,
        inflation_rate=inputs.withdrawal_inflation_rate,
        retirement_age=inputs.retirementAge,
        base_year=base_year + years,
        required_income=required_income,
    )

    sustainable = is_sustainable(
        depletion_age,
        inputs.retirementAge,
        inputs.targetHorizonYears,
        underfunded=is_underfunded(decumulation),
    )
    capital = needed_capital(withdrawal, rates.retirementRate, inputs.targetHorizonYears)
    shortfall = (
        0.0
        if sustainable
        else shortfall_capital(
            withdrawal, at_retirement, rates.retirementRate, inputs.targetHorizonYears
        )
    )

    contributions = total_contributions(accumulation)
    avg_rate = average_withdrawal_rate(decumulation)
    monthly_benefits = inputs.fixedAnnualBenefits / MONTHS_PER_YEAR
    monthly_withdrawal = withdrawal / MONTHS_PER_YEAR

    summary = ProjectionSummary(
        yearsUntilRetirement=years,
        totalContributions=contributions,
        totalInvestmentGrowth=total_investment_growth(accumulation, inputs.currentSavingsBalance),
        monthlyContribution=contributions / (MONTHS_PER_YEAR * years),
        incomeAtRetirement=income_at_retirement,
        requiredAnnualIncome=required_income,
        annualFixedBenefits=inputs.fixedAnnualBenefits,
        monthlyFixedBenefits=monthly_benefits,
        annualWithdrawalNeeded=withdrawal,
        monthlyWithdrawalNeeded=monthly_withdrawal,
        totalMonthlyRetirementIncome=monthly_benefits + monthly_withdrawal,
        averageWithdrawalRate=avg_rate,
        withdrawalAssessment=assess_withdrawal_sustainability(avg_rate),
        neededCapital=capital,
        finalBalance=decumulation[-1].endingBalance if decumulation else at_retirement,
        yearsMoneyWillLast=(
            depletion_age - inputs.retirementAge if depletion_age is not None else None
        ),
        verdict=Verdict.ON_TRACK if sustainable else Verdict.NEEDS_IMPROVEMENT,
    )

    if not sustainable:
        logger.debug(
            "plan depletes at age %s, shortfall %.2f", depletion_age, shortfall
        )

    return ProjectionResult(
        accumulationSeries=accumulation,
        decumulationSeries=decumulation,
        balanceAtRetirement=at_retirement,
        depletionAge=depletion_age,
        shortfallCapital=shortfall,
        isSustainable=sustainable,
        rates=rates,
        summary=summary,
    )


def compare_retirement_returns(
    inputs: ProjectionInput,
    base_year: Optional[int] = None,
    conservative_rate: float = CONSERVATIVE_RETIREMENT_RATE,
    aggressive_rate: float = AGGRESSIVE_RETIREMENT_RATE,
) -> ScenarioComparison:
    """Run the same plan with a conservative and an aggressive retirement-phase return."""
    conservative = run_projection(inputs, base_year, retirement_rate_override=conservative_rate)
    aggressive = run_projection(inputs, base_year, retirement_rate_override=aggressive_rate)

    return ScenarioComparison(
        conservative=conservative,
        aggressive=aggressive,
        finalBalanceDifference=(
            aggressive.summary.finalBalance - conservative.summary.finalBalance
        ),
        withdrawalRateDifference=(
            aggressive.summary.averageWithdrawalRate
            - conservative.summary.averageWithdrawalRate
        ),
        sustainabilityImprovement=aggressive.isSustainable and not conservative.isSustainable,
    )


def compare_profiles(
    inputs: ProjectionInput,
    profiles: Iterable[RiskProfile] = (
        RiskProfile.CONSERVATIVE,
        RiskProfile.BALANCED,
        RiskProfile.GROWTH,
    ),
    base_year: Optional[int] = None,
) -> Dict[str, ProfileOutcome]:
    """Headline outcome of the plan under each risk profile, keyed by profile name."""
    outcomes: Dict[str, ProfileOutcome] = {}
    for profile in profiles:
        result = run_projection(inputs.model_copy(update={"riskProfile": profile}), base_year)
        outcomes[result.rates.profile.value] = ProfileOutcome(
            rates=result.rates,
            balanceAtRetirement=result.balanceAtRetirement,
            depletionAge=result.depletionAge,
            shortfallCapital=result.shortfallCapital,
            isSustainable=result.isSustainable,
        )
    return outcomes


__all__ = [
    "run_projection",
    "compare_retirement_returns",
    "compare_profiles",
]
