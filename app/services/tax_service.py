"""Indian income-tax estimation (new & old regime, FY 2024-25 / FY 2025-26).

New regime, FY 2025-26:
    ₹0 – ₹3,00,000           → 0 %
    ₹3,00,001 – ₹6,00,000    → 5 %
    ₹6,00,001 – ₹9,00,000    → 10 %
    ₹9,00,001 – ₹12,00,000   → 15 %
    ₹12,00,001 – ₹15,00,000  → 20 %
    Above ₹15,00,000          → 25 %   (30 % in FY 2024-25)
    Rebate: no tax up to ₹12,00,000    (₹7,00,000 in FY 2024-25)

Old regime (every year, every age group):
    ₹0 – ₹2,50,000           → 0 %
    ₹2,50,001 – ₹5,00,000    → 5 %
    ₹5,00,001 – ₹10,00,000   → 20 %
    Above ₹10,00,000          → 30 %
    Rebate: no tax up to ₹5,00,000

Health & education cess of 4 % is added on top, rounded to whole rupees.
Surcharge is not modelled.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Tuple

from app.config import settings
from app.models.schemas import (
    AgeGroup,
    CompareResponse,
    Deductions,
    FinancialYear,
    IncomeDetails,
    Regime,
    TaxResult,
)
from app.utils.helpers import round_currency, round_half_up

logger = logging.getLogger(__name__)

_INF = float("inf")


@dataclass(frozen=True)
class Slab:
    lower: float
    upper: float
    rate: float


@dataclass(frozen=True)
class TaxPolicy:
    slabs: Tuple[Slab, ...]
    rebate_limit: float


@dataclass(frozen=True)
class TaxBreakdown:
    income_tax: float
    cess: int
    tax_payable: float


def _slabs(*rows: Tuple[float, float, float]) -> Tuple[Slab, ...]:
    return tuple(Slab(lower, upper, rate) for lower, upper, rate in rows)


_NEW_REGIME_FY2526 = _slabs(
    # (lower_bound, upper_bound, marginal_rate)
    (0.0,         300_000.0,   0.00),
    (300_000.0,   600_000.0,   0.05),
    (600_000.0,   900_000.0,   0.10),
    (900_000.0,   1_200_000.0, 0.15),
    (1_200_000.0, 1_500_000.0, 0.20),
    (1_500_000.0, _INF,        0.25),
)

_NEW_REGIME_FY2425 = _NEW_REGIME_FY2526[:-1] + _slabs((1_500_000.0, _INF, 0.30))

_OLD_REGIME = _slabs(
    (0.0,         250_000.0,   0.00),
    (250_000.0,   500_000.0,   0.05),
    (500_000.0,   1_000_000.0, 0.20),
    (1_000_000.0, _INF,        0.30),
)

# TODO: the form collects an age group but the old regime has no 60-80 / 80+
# exemption limits (3L / 5L) yet; add them once the product confirms.
POLICIES: Dict[Tuple[Regime, FinancialYear], TaxPolicy] = {
    (Regime.NEW, FinancialYear.FY_2025_2026): TaxPolicy(_NEW_REGIME_FY2526, 1_200_000.0),
    (Regime.NEW, FinancialYear.FY_2024_2025): TaxPolicy(_NEW_REGIME_FY2425, 700_000.0),
    (Regime.OLD, FinancialYear.FY_2025_2026): TaxPolicy(_OLD_REGIME, 500_000.0),
    (Regime.OLD, FinancialYear.FY_2024_2025): TaxPolicy(_OLD_REGIME, 500_000.0),
}

_STANDARD_DEDUCTION: Dict[FinancialYear, float] = {
    FinancialYear.FY_2025_2026: 75_000.0,
    FinancialYear.FY_2024_2025: 50_000.0,
}


def get_policy(regime: Regime, financial_year: FinancialYear) -> TaxPolicy:
    return POLICIES[(Regime(regime), FinancialYear(financial_year))]


def standard_deduction(financial_year: FinancialYear) -> float:
    return _STANDARD_DEDUCTION[FinancialYear(financial_year)]


def chapter_via_total(deductions: Deductions) -> float:
    """Sum of every Chapter VI-A field."""
    return sum(deductions.model_dump().values())


# ── Aggregation ───────────────────────────────────────────────────────────

def compute_total_income(income: IncomeDetails, regime: Regime) -> float:
    """Gross total income.

    Exempt allowances are netted off salary under the old regime only.  The
    result is not floored: allowances larger than salary give a negative
    salary head.
    """
    other = (
        income.interestIncome
        + income.homeLoanSelfOccupied
        + income.rentalIncome
        + income.homeLoanLetOut
        + income.digitalAssets
        + income.otherIncome
    )
    salary = income.salary
    if regime == Regime.OLD:
        salary -= income.exemptAllowances
    return salary + other


def compute_deductions(
    deductions: Deductions,
    financial_year: FinancialYear,
    regime: Regime,
) -> float:
    """Standard deduction, plus Chapter VI-A under the old regime."""
    total = standard_deduction(financial_year)
    if regime == Regime.OLD:
        total += chapter_via_total(deductions)
    return total


# ── Slab tax ──────────────────────────────────────────────────────────────

def slab_tax(taxable_income: float, slabs: Tuple[Slab, ...]) -> float:
    """Full bracket amounts below *taxable_income* plus the marginal part."""
    tax = 0.0
    for slab in slabs:
        if taxable_income <= slab.lower:
            break
        tax += (min(taxable_income, slab.upper) - slab.lower) * slab.rate
    return tax


def compute_tax(
    taxable_income: float,
    financial_year: FinancialYear,
    regime: Regime,
) -> TaxBreakdown:
    """Slab tax with rebate, then cess.

    Income at or below the policy's rebate limit pays nothing; one rupee
    above it pays the full slab tax.  Negative input is treated as 0.
    Cess is taken on the unrounded slab tax.

    Returns
    -------
    TaxBreakdown
        ``income_tax`` (2 dp), ``cess`` (whole rupees) and ``tax_payable``.
    """
    policy = get_policy(regime, financial_year)
    taxable_income = max(0.0, taxable_income)

    if taxable_income <= policy.rebate_limit:
        raw_tax = 0.0
    else:
        raw_tax = slab_tax(taxable_income, policy.slabs)

    cess = round_half_up(raw_tax * settings.CESS_RATE)
    return TaxBreakdown(
        income_tax=round_currency(raw_tax),
        cess=cess,
        tax_payable=round_currency(raw_tax + cess),
    )


# ── Public API ────────────────────────────────────────────────────────────

def evaluate(
    income: IncomeDetails,
    deductions: Deductions,
    regime: Regime,
    financial_year: FinancialYear,
    age_group: AgeGroup = AgeGroup.BELOW_60,
) -> TaxResult:
    """Compute the complete tax breakdown for one regime.

    ``age_group`` is accepted for completeness; no slab table depends on it.
    """
    regime = Regime(regime)
    financial_year = FinancialYear(financial_year)

    total_income = compute_total_income(income, regime)
    total_deductions = compute_deductions(deductions, financial_year, regime)
    taxable_income = max(0.0, total_income - total_deductions)
    breakdown = compute_tax(taxable_income, financial_year, regime)

    logger.debug(
        "Evaluated %s regime, %s, age %s: taxable=%.2f payable=%.2f",
        regime.value, financial_year.value, AgeGroup(age_group).value,
        taxable_income, breakdown.tax_payable,
    )

    return TaxResult(
        totalIncome=round_currency(total_income),
        exemptAllowances=income.exemptAllowances if regime == Regime.NEW else 0.0,
        standardDeduction=standard_deduction(financial_year),
        chapterVIA=chapter_via_total(deductions) if regime == Regime.OLD else 0.0,
        taxableIncome=round_currency(taxable_income),
        incomeTax=breakdown.income_tax,
        healthEducationCess=float(breakdown.cess),
        surcharge=0.0,
        taxPayable=breakdown.tax_payable,
    )


def compare_regimes(
    income: IncomeDetails,
    deductions: Deductions,
    financial_year: FinancialYear,
    age_group: AgeGroup = AgeGroup.BELOW_60,
) -> CompareResponse:
    """Evaluate both regimes; the cheaper one is recommended (new on a tie)."""
    new = evaluate(income, deductions, Regime.NEW, financial_year, age_group)
    old = evaluate(income, deductions, Regime.OLD, financial_year, age_group)
    recommended = Regime.OLD if old.taxPayable < new.taxPayable else Regime.NEW

    return CompareResponse(
        financialYear=financial_year,
        ageGroup=age_group,
        new=new,
        old=old,
        recommended=recommended,
        savings=round_currency(abs(new.taxPayable - old.taxPayable)),
    )


def list_policies() -> List[dict]:
    """Policy table flattened for display; the open top slab has ``upper=None``."""
    return [
        {
            "regime": regime,
            "financialYear": fy,
            "standardDeduction": standard_deduction(fy),
            "rebateLimit": policy.rebate_limit,
            "slabs": [
                {
                    "lower": s.lower,
                    "upper": None if s.upper == _INF else s.upper,
                    "rate": s.rate,
                }
                for s in policy.slabs
            ],
        }
        for (regime, fy), policy in POLICIES.items()
    ]
