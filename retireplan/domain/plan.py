from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from pydantic import ValidationError

from retireplan.core.benefits import aggregate_benefits
from retireplan.core.protection import insurance_need
from retireplan.core.rates import coerce_profile
from retireplan.models import ContributionMode, ProjectionInput, ProtectionNeed, RiskProfile
from retireplan.schemas.projection import PlanRequest, ProtectionInput

logger = logging.getLogger(__name__)

DEFAULT_TARGET_HORIZON_YEARS = 25
DEFAULT_INFLATION_RATE = 0.025
MAX_SAVINGS_RATE_PERCENT = 100
MAX_REPLACEMENT_PERCENT = 200


class InvalidInputError(ValueError):
    def __init__(self, errors: List[str]):
        super().__init__("; ".join(errors))
        self.errors = errors


@dataclass
class PreparationResult:
    inputs: Optional[ProjectionInput]
    errors: List[str]
    warnings: List[str]


def target_horizon(request: PlanRequest, default_years: int) -> tuple[int, List[str]]:
    """Retirement horizon: explicit years, else ``maxAge - retirementAge``, else the default."""
    if request.yearsInRetirement is not None:
        return request.yearsInRetirement, []
    if request.maxAge is not None:
        years = request.maxAge - request.retirementAge
        if years <= 0:
            return 0, [f"maxAge {request.maxAge} must be greater than retirementAge {request.retirementAge}"]
        return years, []
    return default_years, []


def annual_contribution(request: PlanRequest) -> tuple[float, List[str], List[str]]:
    errors: List[str] = []
    warnings: List[str] = []
    account_total = sum(account.annualContribution for account in request.accounts)

    if request.contributionMode == ContributionMode.PERCENT_OF_INCOME:
        if request.savingsRatePercent is None:
            errors.append("savingsRatePercent is required when contributionMode is percentOfIncome")
            return 0.0, errors, warnings
        if request.savingsRatePercent > MAX_SAVINGS_RATE_PERCENT:
            errors.append("Savings rate cannot exceed 100%")
            return 0.0, errors, warnings
        if account_total:
            warnings.append("account contributions ignored: contributions follow savingsRatePercent")
        return request.annualIncome * request.savingsRatePercent / 100, errors, warnings

    if request.savingsRatePercent is not None:
        warnings.append("savingsRatePercent ignored: contributions are the sum of account contributions")
    return account_total, errors, warnings


def protection_warnings(protection: Optional[ProtectionInput]) -> List[str]:
    if protection is None:
        return []
    warnings: List[str] = []
    if protection.dependentTypes and not protection.hasDependents:
        warnings.append("dependentTypes ignored: hasDependents is false")
    if protection.debtAmount and not protection.hasDebt:
        warnings.append("debtAmount ignored: hasDebt is false")
    if protection.insuranceCoverage and not protection.hasCoverage:
        warnings.append("insuranceCoverage ignored: hasCoverage is false")
    return warnings


def protection_need(request: PlanRequest) -> ProtectionNeed:
    """Insurance need for the plan's income, using an empty protection step when none was sent."""
    protection = request.protection or ProtectionInput()
    return insurance_need(
        request.annualIncome,
        debt=protection.debtAmount if protection.hasDebt else 0.0,
        dependents=protection.dependentTypes if protection.hasDependents else (),
        current_coverage=protection.insuranceCoverage if protection.hasCoverage else 0.0,
    )


def prepare_plan(
    request: PlanRequest,
    default_horizon_years: int = DEFAULT_TARGET_HORIZON_YEARS,
    default_inflation_rate: float = DEFAULT_INFLATION_RATE,
) -> PreparationResult:
    errors: List[str] = []
    warnings: List[str] = []

    if request.retirementAge <= request.currentAge:
        errors.append("Retirement age must be greater than current age")
    if request.incomeReplacementPercent > MAX_REPLACEMENT_PERCENT:
        errors.append("Income replacement ratio seems unrealistic (>200%)")

    horizon, horizon_errors = target_horizon(request, default_horizon_years)
    errors.extend(horizon_errors)

    contribution, contribution_errors, contribution_warnings = annual_contribution(request)
    errors.extend(contribution_errors)
    warnings.extend(contribution_warnings)

    profile = coerce_profile(request.riskProfile)
    if request.riskProfile is not None and profile.value != request.riskProfile.lower():
        warnings.append(f"unknown riskProfile {request.riskProfile!r}, using balanced")
    if profile != RiskProfile.CUSTOM and (
        request.preRetirementReturn is not None or request.retirementReturn is not None
    ):
        warnings.append("custom return rates ignored unless riskProfile is custom")
    warnings.extend(protection_warnings(request.protection))

    if errors:
        return PreparationResult(inputs=None, errors=errors, warnings=warnings)

    try:
        inputs = ProjectionInput(
            currentAge=request.currentAge,
            retirementAge=request.retirementAge,
            targetHorizonYears=horizon,
            currentAnnualIncome=request.annualIncome,
            incomeGrowthRate=request.incomeGrowthRate,
            incomeReplacementRatio=request.incomeReplacementPercent / 100,
            currentSavingsBalance=request.currentSavings
            + sum(account.currentBalance for account in request.accounts),
            annualContribution=contribution,
            contributionMode=request.contributionMode,
            riskProfile=profile,
            customPreRetirementRate=request.preRetirementReturn,
            customRetirementRate=request.retirementReturn,
            fixedAnnualBenefits=aggregate_benefits(request.benefits.amounts()),
            inflationRate=(
                default_inflation_rate if request.inflationRate is None else request.inflationRate
            ),
            applyInflationToWithdrawals=request.applyInflationToWithdrawals,
        )
    except ValidationError as exc:
        errors.extend(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in exc.errors())
        return PreparationResult(inputs=None, errors=errors, warnings=warnings)

    return PreparationResult(inputs=inputs, errors=errors, warnings=warnings)


def require_valid_plan(
    request: PlanRequest,
    default_horizon_years: int = DEFAULT_TARGET_HORIZON_YEARS,
    default_inflation_rate: float = DEFAULT_INFLATION_RATE,
) -> PreparationResult:
    """Like ``prepare_plan`` but raises ``InvalidInputError`` instead of returning errors."""
    preparation = prepare_plan(request, default_horizon_years, default_inflation_rate)
    if preparation.errors or preparation.inputs is None:
        logger.info("rejected plan: %s", "; ".join(preparation.errors))
        raise InvalidInputError(preparation.errors)
    return preparation


def build_projection_input(
    request: PlanRequest,
    default_horizon_years: int = DEFAULT_TARGET_HORIZON_YEARS,
    default_inflation_rate: float = DEFAULT_INFLATION_RATE,
) -> ProjectionInput:
    """Fold a plan request into a ``ProjectionInput``, dropping the warnings."""
    return require_valid_plan(request, default_horizon_years, default_inflation_rate).inputs
