"""
HTTP tests for the payroll API (httpx AsyncClient over ASGI).
"""
from decimal import Decimal

import pytest

from config import settings


def money(value) -> Decimal:
    return Decimal(str(value))


@pytest.mark.asyncio
async def test_root_and_health(client):
    resp = await client.get("/")
    assert resp.status_code == 200
    assert resp.json()["version"] == settings.app_version

    resp = await client.get("/health")
    assert resp.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_calculate_payroll(client):
    resp = await client.post("/payroll/calculate", json={
        "employee_id": "EMP001",
        "base_salary": "500",
        "is_resident": True,
        "overtime_hours_regular": 10,
        "allowances": "50",
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["employee_id"] == "EMP001"
    assert money(data["gross_pay"]) == Decimal("589.34")
    assert money(data["tax_withheld"]) == Decimal("8.93")
    assert money(data["inss_employee"]) == Decimal("22.00")
    assert money(data["net_pay"]) == Decimal("558.41")
    assert data["below_minimum_wage"] is False


@pytest.mark.asyncio
async def test_calculate_payroll_flags_minimum_wage(client):
    resp = await client.post("/payroll/calculate", json={"base_salary": 100, "is_resident": True})
    assert resp.status_code == 200
    assert resp.json()["below_minimum_wage"] is True


@pytest.mark.asyncio
async def test_calculate_payroll_rejects_negative_amounts(client):
    resp = await client.post("/payroll/calculate", json={"base_salary": -1, "is_resident": True})
    assert resp.status_code == 422

    resp = await client.post("/payroll/calculate", json={
        "base_salary": 500, "is_resident": True, "night_shift_hours": -3,
    })
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_calculate_payroll_requires_residency(client):
    resp = await client.post("/payroll/calculate", json={"base_salary": 500})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_batch_payroll_totals(client):
    resp = await client.post("/payroll/batch", json={"employees": [
        {"employee_id": "A", "base_salary": 1000, "is_resident": True},
        {"employee_id": "B", "base_salary": 800, "is_resident": False, "is_small_employer": True},
        {"employee_id": "C", "base_salary": 100, "is_resident": True},
    ]})
    assert resp.status_code == 200
    data = resp.json()
    assert [r["employee_id"] for r in data["results"]] == ["A", "B", "C"]
    assert money(data["total_gross"]) == Decimal("1900.00")
    assert money(data["total_tax"]) == Decimal("130.00")            # 50 + 80 + 0
    assert money(data["total_inss_employee"]) == Decimal("76.00")   # 40 + 32 + 4
    assert money(data["total_inss_employer"]) == Decimal("109.20")  # 60 + 43.20 + 6
    assert money(data["total_net"]) == Decimal("1694.00")
    assert data["below_minimum_wage_count"] == 1


@pytest.mark.asyncio
async def test_batch_payroll_empty_rejected(client):
    resp = await client.post("/payroll/batch", json={"employees": []})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_batch_payroll_too_large(client, monkeypatch):
    monkeypatch.setattr(settings, "max_batch_size", 1)
    resp = await client.post("/payroll/batch", json={"employees": [
        {"base_salary": 500, "is_resident": True},
        {"base_salary": 600, "is_resident": True},
    ]})
    assert resp.status_code == 413
    assert "max 1" in resp.json()["detail"]


@pytest.mark.asyncio
async def test_severance_endpoint(client):
    resp = await client.post("/termination/severance", json={
        "monthly_salary": 1000, "months_of_service": 12,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["days"] == 60
    assert money(data["amount"]) == Decimal("2000.00")


@pytest.mark.asyncio
async def test_notice_period_endpoint(client):
    resp = await client.get("/termination/notice-period", params={"months_of_service": 30})
    assert resp.status_code == 200
    assert resp.json()["days"] == 30

    resp = await client.get("/termination/notice-period", params={"months_of_service": -1})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_final_pay_endpoint(client):
    resp = await client.post("/termination/final-pay", json={
        "monthly_salary": 900,
        "months_of_service": 30,
        "unused_annual_leave_days": 5,
        "is_for_cause": True,
    })
    assert resp.status_code == 200
    data = resp.json()
    assert money(data["severance_pay"]) == 0
    assert money(data["pro_rated_salary"]) == 0
    assert money(data["total"]) == Decimal("1050.00")


@pytest.mark.asyncio
async def test_minimum_wage_endpoint(client):
    resp = await client.post("/minimum-wage/validate", json={"monthly_salary": 100})
    assert resp.status_code == 200
    data = resp.json()
    assert data["is_valid"] is False
    assert money(data["shortfall"]) == Decimal("15")


@pytest.mark.asyncio
async def test_statutory_rates_endpoint(client):
    resp = await client.get("/statutory-rates")
    assert resp.status_code == 200
    data = resp.json()
    assert money(data["minimum_wage_monthly"]) == Decimal("115")
    assert money(data["inss_employer_rate_small"]) == Decimal("0.054")
    assert data["severance_schedule"][-1] == {"min_months": 36, "max_months": None, "days": 120}


@pytest.mark.asyncio
async def test_deadlines_endpoint(client):
    resp = await client.get("/deadlines", params={"reference": "2025-03-10"})
    assert resp.status_code == 200
    data = resp.json()
    assert [d["id"] for d in data] == ["wit-monthly", "inss-monthly", "annual-tax"]
    assert data[0]["due_date"] == "2025-03-15"
    assert data[0]["label"] == "5 days"
    assert data[0]["period"] == "2025-02-01"


@pytest.mark.asyncio
async def test_calculate_payroll_rejects_oversized_and_nan(client):
    resp = await client.post("/payroll/calculate", json={"base_salary": "1e27", "is_resident": True})
    assert resp.status_code == 422

    resp = await client.post("/payroll/calculate", json={"base_salary": "NaN", "is_resident": True})
    assert resp.status_code == 422

    resp = await client.post("/payroll/calculate", json={
        "base_salary": 500, "is_resident": True, "overtime_hours_regular": 745,
    })
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_termination_rejects_oversized_tenure(client):
    resp = await client.post("/termination/final-pay", json={
        "monthly_salary": 900, "months_of_service": 5000,
    })
    assert resp.status_code == 422

    resp = await client.get("/termination/notice-period", params={"months_of_service": "1e30"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_statutory_rates_include_limits_and_holidays(client):
    data = (await client.get("/statutory-rates")).json()
    assert data["max_overtime_per_day"] == 4
    assert data["max_overtime_per_week"] == 16
    assert data["probation_standard_months"] == 1
    assert data["probation_skilled_months"] == 3
    assert len(data["public_holidays"]) == 16
    assert data["public_holidays"][0] == {
        "date": "2025-01-01",
        "name_en": "New Year's Day",
        "name_pt": "Ano Novo",
        "name_tet": "Tinan Foun",
    }
