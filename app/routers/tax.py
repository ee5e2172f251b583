"""Routers for tax estimation endpoints:
    POST  /api/v1/tax:evaluate
    POST  /api/v1/tax:compare
    GET   /api/v1/tax/policies
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException

from app.config import settings
from app.models.schemas import (
    CompareRequest,
    CompareResponse,
    EvaluateRequest,
    EvaluateResponse,
    PoliciesResponse,
)
from app.services.tax_service import compare_regimes, evaluate, list_policies

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix=settings.API_PREFIX,
    tags=["Tax"],
)


# ── 1. Evaluate ───────────────────────────────────────────────────────────

@router.post(
    "/tax:evaluate",
    response_model=EvaluateResponse,
    summary="Compute the tax breakdown for one regime",
)
async def tax_evaluate(body: EvaluateRequest) -> EvaluateResponse:
    """Aggregate income and deductions, apply the slab table for the chosen
    regime and financial year, and return taxable income, income tax, cess
    and tax payable.

    Blank or non-numeric amounts count as zero.
    """
    try:
        result = evaluate(
            body.incomeDetails,
            body.deductions,
            body.regime,
            body.financialYear,
            body.ageGroup,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))

    return EvaluateResponse(
        regime=body.regime,
        financialYear=body.financialYear,
        ageGroup=body.ageGroup,
        result=result,
    )


# ── 2. Compare ────────────────────────────────────────────────────────────

@router.post(
    "/tax:compare",
    response_model=CompareResponse,
    summary="Compare new and old regime for the same inputs",
)
async def tax_compare(body: CompareRequest) -> CompareResponse:
    """Evaluate both regimes and recommend the one with the lower tax
    payable.  A tie recommends the new regime.
    """
    try:
        return compare_regimes(
            body.incomeDetails,
            body.deductions,
            body.financialYear,
            body.ageGroup,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc))


# ── 3. Policy table ───────────────────────────────────────────────────────

@router.get(
    "/tax/policies",
    response_model=PoliciesResponse,
    summary="Slab tables, rebate limits and standard deductions",
)
async def tax_policies() -> PoliciesResponse:
    return PoliciesResponse(cessRate=settings.CESS_RATE, policies=list_policies())
