"""
TL Payroll — Timor-Leste payroll calculation service
Thin HTTP layer; the rules live in payroll_engine.py and statutory.py
"""
import logging
from contextlib import asynccontextmanager
from datetime import date
from decimal import Decimal
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import JSONResponse

from slowapi import Limiter
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from config import settings
from deadlines import format_days_until, upcoming_deadlines
from payroll_engine import default_engine
from schemas import (
    MAX_MONTHS, DeadlineOut, FinalPayRequest, FinalPayResponse, MinimumWageRequest,
    MinimumWageResponse, NoticePeriodResponse, PayrollBatchRequest,
    PayrollBatchResponse, PayrollRequest, PayrollResponse, SeveranceRequest,
    SeveranceResponse, StatutoryRatesOut,
)
from utils import fmt

# ── Logging ─────────────────────────────────────────────────────────────────

logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","msg":"%(message)s"}',
)
logger = logging.getLogger("tlpayroll")

# ── App Lifecycle ───────────────────────────────────────────────────────────

@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        "TL Payroll starting up (env=%s, minimum wage %s)",
        settings.environment, fmt(default_engine.rates.minimum_wage_monthly),
    )
    yield
    logger.info("TL Payroll shut down")

app = FastAPI(title="TL Payroll", version=settings.app_version, lifespan=lifespan)

# ── Rate Limiting ───────────────────────────────────────────────────────────

limiter = Limiter(key_func=get_remote_address)
app.state.limiter = limiter


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("Rate limit hit on %s", request.url.path)
    return JSONResponse(
        status_code=429,
        content={"detail": "Too many requests. Please wait a moment and try again."},
    )


# ── Payroll ─────────────────────────────────────────────────────────────────

@app.post("/payroll/calculate", response_model=PayrollResponse)
@limiter.limit(settings.rate_limit)
async def calculate_payroll(request: Request, payload: PayrollRequest):
    result = default_engine.calculate_payroll(payload.to_input())
    return PayrollResponse.model_validate(result)


@app.post("/payroll/batch", response_model=PayrollBatchResponse)
@limiter.limit(settings.rate_limit)
async def calculate_payroll_batch(request: Request, payload: PayrollBatchRequest):
    if len(payload.employees) > settings.max_batch_size:
        raise HTTPException(
            status_code=413,
            detail=f"Batch too large (max {settings.max_batch_size} employees)",
        )

    results = default_engine.calculate_payroll_batch(e.to_input() for e in payload.employees)
    logger.info("Batch payroll calculated for %d employees", len(results))

    def total(attr: str) -> Decimal:
        return sum((getattr(r, attr) for r in results), Decimal('0.00'))

    return PayrollBatchResponse(
        results=[PayrollResponse.model_validate(r) for r in results],
        total_gross=total("gross_pay"),
        total_net=total("net_pay"),
        total_tax=total("tax_withheld"),
        total_inss_employee=total("inss_employee"),
        total_inss_employer=total("inss_employer"),
        total_employer_cost=total("total_employer_cost"),
        below_minimum_wage_count=sum(1 for r in results if r.below_minimum_wage),
    )


# ── Termination ─────────────────────────────────────────────────────────────

@app.post("/termination/severance", response_model=SeveranceResponse)
@limiter.limit(settings.rate_limit)
async def severance(request: Request, payload: SeveranceRequest):
    result = default_engine.calculate_severance(payload.monthly_salary, payload.months_of_service)
    return SeveranceResponse.model_validate(result)


@app.get("/termination/notice-period", response_model=NoticePeriodResponse)
async def notice_period(
    months_of_service: Decimal = Query(..., ge=0, le=MAX_MONTHS, allow_inf_nan=False),
):
    return NoticePeriodResponse(
        months_of_service=months_of_service,
        days=default_engine.calculate_notice_period(months_of_service),
    )


@app.post("/termination/final-pay", response_model=FinalPayResponse)
@limiter.limit(settings.rate_limit)
async def final_pay(request: Request, payload: FinalPayRequest):
    result = default_engine.calculate_final_pay(payload.to_input())
    return FinalPayResponse.model_validate(result)


# ── Compliance ──────────────────────────────────────────────────────────────

@app.post("/minimum-wage/validate", response_model=MinimumWageResponse)
async def minimum_wage(payload: MinimumWageRequest):
    return MinimumWageResponse.model_validate(
        default_engine.validate_minimum_wage(payload.monthly_salary)
    )


@app.get("/statutory-rates", response_model=StatutoryRatesOut)
async def statutory_rates():
    return StatutoryRatesOut.model_validate(default_engine.rates)


@app.get("/deadlines", response_model=List[DeadlineOut])
async def deadlines(reference: Optional[date] = None):
    reference = reference or date.today()
    return [
        DeadlineOut(
            id=d.id,
            type=d.type,
            name=d.name,
            description=d.description,
            due_date=d.due_date,
            days_until_due=d.days_until_due,
            urgency=d.urgency,
            label=format_days_until(d.days_until_due),
            period=d.period,
        )
        for d in upcoming_deadlines(reference, default_engine.rates)
    ]


# ── Health & Root ───────────────────────────────────────────────────────────

@app.get("/")
async def root():
    return {"status": "TL Payroll is running!", "version": settings.app_version}


@app.get("/health")
async def health():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
