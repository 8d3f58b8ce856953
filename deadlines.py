"""
TL Payroll — Statutory filing deadlines
WIT and INSS returns are due on the 15th of the month after the pay period.
"""
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from statutory import StatutoryRates, TIMOR_LESTE_2025

# Annual deadlines only show up this many days ahead
ANNUAL_LOOKAHEAD_DAYS = 90


@dataclass(frozen=True)
class Deadline:
    id: str
    type: str  # wit, inss, annual_tax, employee_declarations
    name: str
    description: str
    due_date: date
    days_until_due: int
    urgency: str
    period: Optional[date] = None  # first day of the month being filed


def next_filing_deadline(reference: date, rates: StatutoryRates = TIMOR_LESTE_2025) -> date:
    """
    On or before the 15th, this month's deadline is still open (last month's filing).
    After the 15th, the next one is the 15th of next month.
    """
    day = rates.monthly_filing_deadline_day
    if reference.day <= day:
        return reference.replace(day=day)
    if reference.month == 12:
        return date(reference.year + 1, 1, day)
    return date(reference.year, reference.month + 1, day)


def filing_period(deadline: date) -> date:
    """The month a deadline refers to, i.e. the month before it"""
    if deadline.month == 1:
        return date(deadline.year - 1, 12, 1)
    return date(deadline.year, deadline.month - 1, 1)


def days_until(deadline: date, reference: date) -> int:
    return (deadline - reference).days


def urgency(days: int) -> str:
    if days < 0:
        return "overdue"
    if days <= 3:
        return "urgent"
    if days <= 7:
        return "warning"
    return "normal"


def _next_annual(reference: date, month: int, day: int) -> date:
    due = date(reference.year, month, day)
    if due < reference:
        due = date(reference.year + 1, month, day)
    return due


def upcoming_deadlines(reference: date, rates: StatutoryRates = TIMOR_LESTE_2025) -> List[Deadline]:
    """Monthly WIT/INSS plus any annual filing within 90 days, soonest first"""
    deadlines = []

    monthly = next_filing_deadline(reference, rates)
    monthly_days = days_until(monthly, reference)
    deadlines.append(Deadline(
        id="wit-monthly",
        type="wit",
        name="WIT Monthly Filing",
        description="Withholding Income Tax return",
        due_date=monthly,
        days_until_due=monthly_days,
        urgency=urgency(monthly_days),
        period=filing_period(monthly),
    ))
    deadlines.append(Deadline(
        id="inss-monthly",
        type="inss",
        name="INSS Monthly Filing",
        description="Social security contributions",
        due_date=monthly,
        days_until_due=monthly_days,
        urgency=urgency(monthly_days),
        period=filing_period(monthly),
    ))

    annual_tax = _next_annual(
        reference, rates.annual_filing_deadline_month, rates.annual_filing_deadline_day
    )
    annual_days = days_until(annual_tax, reference)
    if annual_days <= ANNUAL_LOOKAHEAD_DAYS:
        deadlines.append(Deadline(
            id="annual-tax",
            type="annual_tax",
            name="Annual Tax Return",
            description="Company income tax filing",
            due_date=annual_tax,
            days_until_due=annual_days,
            urgency=urgency(annual_days),
        ))

    declarations = _next_annual(
        reference,
        rates.employee_declaration_deadline_month,
        rates.employee_declaration_deadline_day,
    )
    declaration_days = days_until(declarations, reference)
    if declaration_days <= ANNUAL_LOOKAHEAD_DAYS:
        deadlines.append(Deadline(
            id="employee-declarations",
            type="employee_declarations",
            name="Employee Declarations",
            description="Annual salary statements",
            due_date=declarations,
            days_until_due=declaration_days,
            urgency=urgency(declaration_days),
        ))

    # Stable sort keeps WIT before INSS on the same day
    return sorted(deadlines, key=lambda d: d.days_until_due)


def format_days_until(days: int) -> str:
    if days < 0:
        overdue = abs(days)
        return "1 day overdue" if overdue == 1 else f"{overdue} days overdue"
    if days == 0:
        return "Due today"
    if days == 1:
        return "Due tomorrow"
    return f"{days} days"
