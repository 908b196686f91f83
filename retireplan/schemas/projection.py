"""Data contracts for the projection endpoints."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from retireplan.models import ContributionMode, Dependent, ProjectionResult, ProtectionNeed


class SavingsAccount(BaseModel):
    """One named account from the savings step. Only its totals reach the engine."""

    model_config = ConfigDict(extra="forbid")

    label: str = "Savings"
    currentBalance: float = Field(0.0, ge=0)
    annualContribution: float = Field(0.0, ge=0)


class MonthlyBenefits(BaseModel):
    """Fixed monthly income expected in retirement."""

    model_config = ConfigDict(extra="forbid")

    cpp: float = Field(0.0, ge=0, description="Canada Pension Plan, per month.")
    oas: float = Field(0.0, ge=0, description="Old Age Security, per month.")
    companyPension: float = Field(0.0, ge=0)
    otherIncome: float = Field(0.0, ge=0)

    def amounts(self) -> List[float]:
        return [self.cpp, self.oas, self.companyPension, self.otherIncome]


class ProtectionInput(BaseModel):
    """Answers from the protection step. Amounts only count when their yes/no flag is set."""

    model_config = ConfigDict(extra="forbid")

    hasDependents: bool = False
    dependentTypes: List[Dependent] = Field(default_factory=list)
    hasDebt: bool = False
    debtAmount: float = Field(0.0, ge=0)
    hasCoverage: bool = False
    insuranceCoverage: float = Field(0.0, ge=0)


class PlanRequest(BaseModel):
    """Wizard-shaped plan as submitted by the client.

    Percentages are expressed the way the form collects them
    (``savingsRatePercent=7`` means 7%, ``incomeReplacementPercent=60`` means 60%).
    Rates are decimals (0.021 for 2.1%).
    """

    model_config = ConfigDict(extra="forbid")

    currentAge: int = Field(ge=10, le=100)
    retirementAge: int = Field(ge=20, le=110)
    yearsInRetirement: Optional[int] = Field(default=None, ge=1, le=80)
    maxAge: Optional[int] = Field(default=None, ge=20, le=120)

    annualIncome: float = Field(ge=0)
    incomeGrowthRate: float = Field(default=0.0, ge=-0.5, le=1)
    incomeReplacementPercent: float = Field(ge=0)

    contributionMode: ContributionMode = ContributionMode.FIXED_ANNUAL_SUM
    savingsRatePercent: Optional[float] = Field(default=None, ge=0)
    currentSavings: float = Field(default=0.0, ge=0, description="Savings held outside the listed accounts.")
    accounts: List[SavingsAccount] = Field(default_factory=list)

    riskProfile: Optional[str] = None
    preRetirementReturn: Optional[float] = Field(default=None, ge=-0.5, le=1)
    retirementReturn: Optional[float] = Field(default=None, ge=-0.5, le=1)

    benefits: MonthlyBenefits = Field(default_factory=MonthlyBenefits)
    inflationRate: Optional[float] = Field(default=None, ge=0, le=0.3)
    applyInflationToWithdrawals: bool = True

    protection: Optional[ProtectionInput] = None


class ProjectionResponse(BaseModel):
    result: ProjectionResult
    warnings: List[str] = []
    protection: Optional[ProtectionNeed] = None


class ComparisonRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    plan: PlanRequest
    conservativeRate: float = Field(0.04, ge=-0.5, le=1)
    aggressiveRate: float = Field(0.07, ge=-0.5, le=1)
