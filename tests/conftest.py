"""
Shared pytest fixtures for the TL Payroll tests.
"""
from dataclasses import replace
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from main import app, limiter
from payroll_engine import PayrollInput, TimorLestePayrollEngine
from statutory import TIMOR_LESTE_2025


@pytest.fixture
def engine() -> TimorLestePayrollEngine:
    return TimorLestePayrollEngine()


@pytest.fixture
def doubled_tax_engine() -> TimorLestePayrollEngine:
    """Same rules with a 20% WIT rate, as a later year's snapshot would be"""
    return TimorLestePayrollEngine(replace(TIMOR_LESTE_2025, tax_rate=Decimal('0.20')))


@pytest.fixture
def resident_with_overtime() -> PayrollInput:
    return PayrollInput(
        base_salary=Decimal('500'),
        is_resident=True,
        overtime_hours_regular=Decimal('10'),
        allowances=Decimal('50'),
        employee_id="EMP001",
    )


# ── HTTP client fixture ───────────────────────────────────────────────────────

@pytest_asyncio.fixture
async def client() -> AsyncClient:
    """FastAPI test client over ASGI; rate limits reset per test."""
    limiter.reset()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c
