from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RiskProfile(str, Enum):
    CONSERVATIVE = "conservative"
    BALANCED = "balanced"
    GROWTH = "growth"
    CUSTOM = "custom"


class ContributionMode(str, Enum):
    PERCENT_OF_INCOME = "percentOfIncome"
    FIXED_ANNUAL_SUM = "fixedAnnualSum"


class Phase(str, Enum):
    ACCUMULATION = "accumulation"
    DECUMULATION = "decumulation"


class Verdict(str, Enum):
    ON_TRACK = "on_track"
    NEEDS_IMPROVEMENT = "needs_improvement"


class Dependent(str, Enum):
    CHILDREN = "children"
    SPOUSE = "spouse"
    PARENTS = "parents"
    OTHER = "other"


class RatePair(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    profile: RiskProfile
    preRetirementRate: float
    retirementRate: float


class ProjectionInput(BaseModel):
    """Everything the engine needs for one calculation.

    Built by the caller (see ``retireplan.domain.plan``) after folding the
    account list and monthly benefits into single figures.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    currentAge: int = Field(ge=10, le=100)
    retirementAge: int = Field(ge=20, le=110)
    targetHorizonYears: int = Field(default=25, ge=1, le=80)

    currentAnnualIncome: float = Field(ge=0)
    incomeGrowthRate: float = Field(default=0.0, ge=-0.5, le=1)
    incomeReplacementRatio: float = Field(ge=0, le=2)

    currentSavingsBalance: float = Field(default=0.0, ge=0)
    annualContribution: float = Field(default=0.0, ge=0)
    contributionMode: ContributionMode = ContributionMode.FIXED_ANNUAL_SUM

    riskProfile: RiskProfile = RiskProfile.BALANCED
    customPreRetirementRate: Optional[float] = Field(default=None, ge=-0.5, le=1)
    customRetirementRate: Optional[float] = Field(default=None, ge=-0.5, le=1)

    fixedAnnualBenefits: float = Field(default=0.0, ge=0)
    inflationRate: float = Field(default=0.0, ge=0, le=0.3)
    applyInflationToWithdrawals: bool = True

    @model_validator(mode="after")
    def ensure_age_order(self) -> "ProjectionInput":
        if self.retirementAge <= self.currentAge:
            raise ValueError("retirementAge must be greater than currentAge")
        return self

    @property
    def years_to_retirement(self) -> int:
        return self.retirementAge - self.currentAge

    @property
    def withdrawal_inflation_rate(self) -> float:
        return self.inflationRate if self.applyInflationToWithdrawals else 0.0


class YearlyRecord(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    year: int
    age: int  # age at year end
    phase: Phase
    beginningBalance: float = Field(ge=0)
    endingBalance: float = Field(ge=0)
    # contribution (+) while saving, withdrawal (-) while retired
    cashFlow: float
    investmentReturn: float
    withdrawalRate: float = 0.0
    annualIncome: float = 0.0
    # withdrawal the plan called for this year, before capping at the balance
    withdrawalNeeded: float = Field(0.0, ge=0)


class WithdrawalAssessment(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    level: str
    description: str


class ProjectionSummary(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    yearsUntilRetirement: int
    totalContributions: float
    totalInvestmentGrowth: float
    monthlyContribution: float
    incomeAtRetirement: float
    requiredAnnualIncome: float
    annualFixedBenefits: float
    monthlyFixedBenefits: float
    annualWithdrawalNeeded: float
    monthlyWithdrawalNeeded: float
    totalMonthlyRetirementIncome: float
    averageWithdrawalRate: float
    withdrawalAssessment: WithdrawalAssessment
    neededCapital: Optional[float] = None
    finalBalance: float
    yearsMoneyWillLast: Optional[int] = None
    verdict: Verdict


class ProjectionResult(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    accumulationSeries: List[YearlyRecord]
    decumulationSeries: List[YearlyRecord]
    balanceAtRetirement: float
    depletionAge: Optional[int] = None
    shortfallCapital: float = Field(ge=0)
    isSustainable: bool
    rates: RatePair
    summary: ProjectionSummary


class ScenarioComparison(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    conservative: ProjectionResult
    aggressive: ProjectionResult
    finalBalanceDifference: float
    withdrawalRateDifference: float
    sustainabilityImprovement: bool


class ProfileOutcome(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    rates: RatePair
    balanceAtRetirement: float
    depletionAge: Optional[int] = None
    shortfallCapital: float
    isSustainable: bool


class ProtectionNeed(BaseModel):
    """Life-insurance need built up from income, debt and dependants, net of cover held."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    incomeReplacement: float = Field(ge=0)
    debtCoverage: float = Field(ge=0)
    dependentExpenses: float = Field(ge=0)
    totalNeed: float = Field(ge=0)
    currentCoverage: float = Field(ge=0)
    coverageGap: float = Field(ge=0)
