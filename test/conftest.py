# Test type: Configuration
# Validation to be executed: Shared fixtures for all test modules
# Command: pytest test/ -v (this file is auto-loaded by pytest)

"""Shared pytest fixtures for the Income Tax Estimator API test suite."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from app.main import app
from app.models.schemas import Deductions, IncomeDetails


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
async def client():
    """Async HTTP client bound to the FastAPI app (no real server needed)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


# ── Sample data fixtures ─────────────────────────────────────────────────

@pytest.fixture
def salaried_income():
    """₹10 L salary with ₹1 L exempt allowances, nothing else."""
    return IncomeDetails(salary=1_000_000, exemptAllowances=100_000)


@pytest.fixture
def section_80c_only():
    """Fully used 80C limit."""
    return Deductions(basic80C=150_000)


@pytest.fixture
def form_income_payload():
    """Income tab as the form posts it: grouped strings and blanks."""
    return {
        "salary": "10,00,000",
        "exemptAllowances": "1,00,000",
        "interestIncome": "",
        "homeLoanSelfOccupied": "",
        "rentalIncome": "",
        "homeLoanLetOut": "",
        "digitalAssets": "",
        "otherIncome": "",
    }


@pytest.fixture
def form_deductions_payload():
    return {
        "basic80C": "1,50,000",
        "deposits80TTA": "",
        "medical80D": "",
        "donations80G": "",
        "housing80EEA": "",
        "nps80CCD": "",
        "nps80CCD2": "",
        "otherDeduction": "",
    }
