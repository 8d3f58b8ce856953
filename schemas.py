"""
TL Payroll — Request/response models for the HTTP API
Money goes over the wire as Decimal strings.
"""
from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field

from payroll_engine import FinalPayInput, PayrollInput

# Upper bounds for request fields
MAX_AMOUNT = Decimal('1000000000')
MAX_HOURS = Decimal('744')          # every hour of a 31-day month
MAX_MONTHS = Decimal('1200')
MAX_LEAVE_DAYS = Decimal('1000')


class PayrollRequest(BaseModel):
    employee_id: Optional[str] = Field(default=None, max_length=50)
    base_salary: Decimal = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    is_resident: bool
    overtime_hours_regular: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_HOURS, allow_inf_nan=False)
    overtime_hours_holiday: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_HOURS, allow_inf_nan=False)
    night_shift_hours: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_HOURS, allow_inf_nan=False)
    allowances: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    bonuses: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    other_deductions: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    is_small_employer: bool = False

    def to_input(self) -> PayrollInput:
        return PayrollInput(**self.model_dump())


class PayrollResponse(BaseModel):
    employee_id: Optional[str] = None
    base_salary: Decimal
    overtime_pay_regular: Decimal
    overtime_pay_holiday: Decimal
    night_shift_premium: Decimal
    allowances: Decimal
    bonuses: Decimal
    gross_pay: Decimal
    taxable_income: Decimal
    tax_withheld: Decimal
    inss_employee: Decimal
    inss_employer: Decimal
    total_deductions: Decimal
    net_pay: Decimal
    total_employer_cost: Decimal
    below_minimum_wage: bool
    calculation_notes: List[str] = []

    model_config = {"from_attributes": True}


class PayrollBatchRequest(BaseModel):
    employees: List[PayrollRequest] = Field(min_length=1)


class PayrollBatchResponse(BaseModel):
    results: List[PayrollResponse]
    total_gross: Decimal
    total_net: Decimal
    total_tax: Decimal
    total_inss_employee: Decimal
    total_inss_employer: Decimal
    total_employer_cost: Decimal
    below_minimum_wage_count: int


class SeveranceRequest(BaseModel):
    monthly_salary: Decimal = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    months_of_service: Decimal = Field(ge=0, le=MAX_MONTHS, allow_inf_nan=False)


class SeveranceResponse(BaseModel):
    days: int
    amount: Decimal

    model_config = {"from_attributes": True}


class NoticePeriodResponse(BaseModel):
    months_of_service: Decimal
    days: int


class FinalPayRequest(BaseModel):
    monthly_salary: Decimal = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)
    months_of_service: Decimal = Field(ge=0, le=MAX_MONTHS, allow_inf_nan=False)
    unused_annual_leave_days: Decimal = Field(default=Decimal('0'), ge=0, le=MAX_LEAVE_DAYS, allow_inf_nan=False)
    is_for_cause: bool = False
    notice_period_worked: bool = False

    def to_input(self) -> FinalPayInput:
        return FinalPayInput(**self.model_dump())


class FinalPayResponse(BaseModel):
    pro_rated_salary: Decimal
    unused_leave_payment: Decimal
    severance_pay: Decimal
    notice_payment: Decimal
    total: Decimal
    severance_days: int
    notice_days: int

    model_config = {"from_attributes": True}


class MinimumWageRequest(BaseModel):
    monthly_salary: Decimal = Field(ge=0, le=MAX_AMOUNT, allow_inf_nan=False)


class MinimumWageResponse(BaseModel):
    is_valid: bool
    minimum_wage: Decimal
    shortfall: Decimal

    model_config = {"from_attributes": True}


class DeadlineOut(BaseModel):
    id: str
    type: str
    name: str
    description: str
    due_date: date
    days_until_due: int
    urgency: str
    label: str
    period: Optional[date] = None


class SeveranceBandOut(BaseModel):
    min_months: int
    max_months: Optional[int] = None
    days: int

    model_config = {"from_attributes": True}


class PublicHolidayOut(BaseModel):
    date: date
    name_en: str
    name_pt: str
    name_tet: str

    model_config = {"from_attributes": True}


class StatutoryRatesOut(BaseModel):
    minimum_wage_monthly: Decimal
    standard_hours_per_week: int
    max_overtime_per_day: int
    max_overtime_per_week: int
    overtime_rate_regular: Decimal
    overtime_rate_holiday: Decimal
    night_shift_rate: Decimal
    tax_exemption_monthly: Decimal
    tax_rate: Decimal
    inss_employee_rate: Decimal
    inss_employer_rate: Decimal
    inss_employer_rate_small: Decimal
    annual_leave_days: int
    sick_leave_total_days: int
    maternity_leave_weeks: int
    paternity_leave_days: int
    severance_schedule: List[SeveranceBandOut]
    notice_period_under_2_years: int
    notice_period_over_2_years: int
    monthly_filing_deadline_day: int
    probation_standard_months: int
    probation_skilled_months: int
    public_holidays: List[PublicHolidayOut]

    model_config = {"from_attributes": True}
