"""Pydantic request / response schemas for all API endpoints.

Field names follow the estimator form:
  - IncomeDetails → gross income heads (salary, interest, rent, …)
  - Deductions    → Chapter VI-A items (old regime only)
  - TaxResult     → derived breakdown, recomputed on every call
"""

from __future__ import annotations
from enum import Enum
from typing import Any, List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.config import settings
from app.utils.helpers import parse_amount

class Regime(str, Enum):
    NEW = "new"
    OLD = "old"

class FinancialYear(str, Enum):
    FY_2025_2026 = "FY 2025-2026"
    FY_2024_2025 = "FY 2024-2025"

class AgeGroup(str, Enum):
    """Collected by the form; does not change the computed tax."""
    BELOW_60 = "0-60"
    SENIOR = "60-80"
    SUPER_SENIOR = "80+"

class _AmountModel(BaseModel):
    """Immutable bag of amounts; every field is coerced with ``parse_amount``."""

    model_config = ConfigDict(frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_amount(cls, value: Any) -> float:
        return parse_amount(value)

class IncomeDetails(_AmountModel):
    """Gross income heads as entered on the form.

    Amounts are non-negative: a negative entry (including a loss under a
    head) is read as 0, not netted against other income.
    """
    salary: float = Field(0.0, description="Annual salary (CTC)")
    exemptAllowances: float = Field(0.0, description="HRA, LTA etc. (subtracted under the old regime only)")
    interestIncome: float = Field(0.0, description="Interest from savings, FDs, etc.")
    homeLoanSelfOccupied: float = Field(0.0, description="Interest on home loan (self-occupied)")
    rentalIncome: float = Field(0.0, description="Income from rented property")
    homeLoanLetOut: float = Field(0.0, description="Interest on home loan (let-out property)")
    digitalAssets: float = Field(0.0, description="Income from virtual digital assets")
    otherIncome: float = Field(0.0, description="Any other taxable income")

class Deductions(_AmountModel):
    """Chapter VI-A deductions (ignored under the new regime)."""
    basic80C: float = Field(0.0, description="Section 80C investments (PPF, ELSS, …)")
    deposits80TTA: float = Field(0.0, description="Savings account interest (80TTA)")
    medical80D: float = Field(0.0, description="Medical insurance premium (80D)")
    donations80G: float = Field(0.0, description="Donations to approved charities (80G)")
    housing80EEA: float = Field(0.0, description="Additional home-loan interest (80EEA)")
    nps80CCD: float = Field(0.0, description="Own NPS contribution (80CCD(1))")
    nps80CCD2: float = Field(0.0, description="Employer NPS contribution (80CCD(2))")
    otherDeduction: float = Field(0.0, description="Other Chapter VI-A deductions")

class TaxResult(BaseModel):
    """Computed tax breakdown for one regime."""

    model_config = ConfigDict(frozen=True)

    totalIncome: float = Field(..., description="Gross total income")
    exemptAllowances: float = Field(..., description="Exempt allowances not netted off salary (new regime)")
    standardDeduction: float
    chapterVIA: float = Field(..., description="Chapter VI-A total (old regime only)")
    taxableIncome: float = Field(..., ge=0)
    incomeTax: float = Field(..., ge=0, description="Slab tax after rebate")
    healthEducationCess: float = Field(..., ge=0, description="4 % cess, whole rupees")
    surcharge: float = Field(0.0, description="Not modelled; always 0")
    taxPayable: float = Field(..., ge=0, description="incomeTax + healthEducationCess")

# ── 1. Evaluate  (/tax:evaluate) ─────────────────────────────────────────

class EvaluateRequest(BaseModel):
    regime: Regime = Regime.NEW
    financialYear: FinancialYear = FinancialYear(settings.DEFAULT_FINANCIAL_YEAR)
    ageGroup: AgeGroup = AgeGroup.BELOW_60
    incomeDetails: IncomeDetails = Field(default_factory=IncomeDetails)
    deductions: Deductions = Field(default_factory=Deductions)

class EvaluateResponse(BaseModel):
    regime: Regime
    financialYear: FinancialYear
    ageGroup: AgeGroup
    result: TaxResult

# ── 2. Compare regimes  (/tax:compare) ───────────────────────────────────

class CompareRequest(BaseModel):
    financialYear: FinancialYear = FinancialYear(settings.DEFAULT_FINANCIAL_YEAR)
    ageGroup: AgeGroup = AgeGroup.BELOW_60
    incomeDetails: IncomeDetails = Field(default_factory=IncomeDetails)
    deductions: Deductions = Field(default_factory=Deductions)

class CompareResponse(BaseModel):
    financialYear: FinancialYear
    ageGroup: AgeGroup
    new: TaxResult
    old: TaxResult
    recommended: Regime = Field(..., description="Regime with the lower tax payable (new on a tie)")
    savings: float = Field(..., ge=0, description="Difference in tax payable between regimes")

# ── 3. Policy table  (/tax/policies) ─────────────────────────────────────

class SlabOut(BaseModel):
    lower: float
    upper: Optional[float] = Field(None, description="None for the open-ended top slab")
    rate: float

class PolicyOut(BaseModel):
    regime: Regime
    financialYear: FinancialYear
    standardDeduction: float
    rebateLimit: float = Field(..., description="Tax is waived at or below this taxable income")
    slabs: List[SlabOut]

class PoliciesResponse(BaseModel):
    cessRate: float
    policies: List[PolicyOut]

# ── 4. Performance Report  (/performance) ────────────────────────────────

class PerformanceResponse(BaseModel):
    time: str = Field(..., description="Last response time (HH:mm:ss.SSS)")
    uptime: str = Field(..., description="Time since startup (HH:mm:ss.SSS)")
    memory: str = Field(..., description="Current memory usage (e.g. '123.45 MB')")
    threads: int = Field(..., description="Number of active threads")
