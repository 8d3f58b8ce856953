"""
Timor-Leste Payroll Engine
Gross-to-net under the WIT and INSS rules, plus termination pay.

- Wage Income Tax: 10% above $500/month for residents, 10% of everything for non-residents
- INSS: 4% employee, 6% employer (5.4% for qualifying small employers), overtime excluded
- Overtime: 150% regular, 200% holiday / rest day
- Night shift: 25% premium on top of normal pay
- Severance and notice from tenure

Every amount is rounded to cents where it is computed, before it is summed
into anything else. The engine does not validate its inputs; the caller does.
"""

import logging
from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple

from statutory import StatutoryRates, TIMOR_LESTE_2025
from utils import money_context, round_money, to_decimal

logger = logging.getLogger("tlpayroll.engine")

ZERO = Decimal('0')


@dataclass
class PayrollInput:
    """One employee's inputs for a monthly pay period"""
    base_salary: Decimal
    is_resident: bool  # 183+ days a year in Timor-Leste

    # Overtime
    overtime_hours_regular: Decimal = ZERO
    overtime_hours_holiday: Decimal = ZERO

    # Night shift
    night_shift_hours: Decimal = ZERO

    # Additional earnings
    allowances: Decimal = ZERO
    bonuses: Decimal = ZERO

    # Additional deductions
    other_deductions: Decimal = ZERO

    # Organization settings, decided by the business layer
    is_small_employer: bool = False

    employee_id: Optional[str] = None


@dataclass(frozen=True)
class PayrollResult:
    """Complete gross-to-net breakdown"""
    # Earnings
    base_salary: Decimal
    overtime_pay_regular: Decimal
    overtime_pay_holiday: Decimal
    night_shift_premium: Decimal
    allowances: Decimal
    bonuses: Decimal
    gross_pay: Decimal

    # Tax
    taxable_income: Decimal
    tax_withheld: Decimal

    # INSS
    inss_employee: Decimal
    inss_employer: Decimal

    # Totals
    total_deductions: Decimal
    net_pay: Decimal
    total_employer_cost: Decimal

    # Validation
    below_minimum_wage: bool

    employee_id: Optional[str] = None
    calculation_notes: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, object]:
        """Field name → value, money as 2dp strings, for storage and report exports"""
        out: Dict[str, object] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Decimal):
                value = str(value)
            elif isinstance(value, tuple):
                value = list(value)
            out[f.name] = value
        return out


class OvertimePay(NamedTuple):
    regular: Decimal
    holiday: Decimal


@dataclass(frozen=True)
class SeveranceResult:
    days: int
    amount: Decimal


@dataclass
class FinalPayInput:
    monthly_salary: Decimal
    months_of_service: Decimal
    unused_annual_leave_days: Decimal
    is_for_cause: bool  # forfeits severance
    notice_period_worked: bool


@dataclass(frozen=True)
class FinalPayResult:
    # Final-month salary is not pro-rated; always zero.
    pro_rated_salary: Decimal
    unused_leave_payment: Decimal
    severance_pay: Decimal
    notice_payment: Decimal
    total: Decimal

    severance_days: int = 0
    notice_days: int = 0


@dataclass(frozen=True)
class MinimumWageCheck:
    is_valid: bool
    minimum_wage: Decimal
    shortfall: Decimal


class TimorLestePayrollEngine:
    """
    Stateless payroll calculator bound to one StatutoryRates snapshot.
    Safe to share between threads and requests.
    """

    def __init__(self, rates: StatutoryRates = TIMOR_LESTE_2025):
        self.rates = rates

    @money_context
    def calculate_hourly_rate(self, monthly_salary) -> Decimal:
        """
        Monthly salary over a 44h week, 52/12 weeks per month.
        Not rounded; rounding happens on the pay amounts.
        """
        return to_decimal(monthly_salary) / self.rates.hours_per_month

    @money_context
    def calculate_tax(self, gross_pay, is_resident: bool) -> Decimal:
        """
        Wage Income Tax (WIT)
        Residents: 10% on the amount above $500/month
        Non-residents: 10% on the total, no exemption
        """
        gross_pay = to_decimal(gross_pay)
        if is_resident:
            taxable = self._above_exemption(gross_pay)
            return round_money(taxable * self.rates.tax_rate)
        return round_money(gross_pay * self.rates.tax_rate)

    def _above_exemption(self, gross_pay: Decimal) -> Decimal:
        # NaN has no order; let it through instead of raising on max()
        if gross_pay.is_nan():
            return gross_pay
        return max(ZERO, gross_pay - self.rates.tax_exemption_monthly)

    @money_context
    def calculate_inss_employee(self, contributory_base) -> Decimal:
        """INSS employee share (4%)"""
        return round_money(to_decimal(contributory_base) * self.rates.inss_employee_rate)

    @money_context
    def calculate_inss_employer(self, contributory_base, is_small_employer: bool = False) -> Decimal:
        """INSS employer share (6%, or the reduced small-employer rate)"""
        rate = (
            self.rates.inss_employer_rate_small if is_small_employer
            else self.rates.inss_employer_rate
        )
        return round_money(to_decimal(contributory_base) * rate)

    @money_context
    def calculate_overtime_pay(self, hourly_rate, regular_hours=ZERO, holiday_hours=ZERO) -> OvertimePay:
        """Regular and holiday overtime, each rounded on its own"""
        hourly_rate = to_decimal(hourly_rate)
        return OvertimePay(
            regular=round_money(
                hourly_rate * self.rates.overtime_rate_regular * to_decimal(regular_hours)
            ),
            holiday=round_money(
                hourly_rate * self.rates.overtime_rate_holiday * to_decimal(holiday_hours)
            ),
        )

    @money_context
    def calculate_night_shift_premium(self, hourly_rate, night_hours) -> Decimal:
        # Only the extra 25%; the hours themselves are already in base pay
        premium_rate = self.rates.night_shift_rate - 1
        return round_money(to_decimal(hourly_rate) * premium_rate * to_decimal(night_hours))

    @money_context
    def calculate_payroll(self, payroll_input: PayrollInput) -> PayrollResult:
        """
        Calculate the full pay breakdown for one employee
        """
        notes: List[str] = []

        base_salary = to_decimal(payroll_input.base_salary)
        allowances = to_decimal(payroll_input.allowances)
        bonuses = to_decimal(payroll_input.bonuses)
        other_deductions = to_decimal(payroll_input.other_deductions)
        is_resident = payroll_input.is_resident

        # 1. Hourly rate for overtime / night work
        hourly_rate = self.calculate_hourly_rate(base_salary)

        # 2. Overtime and night premium
        overtime = self.calculate_overtime_pay(
            hourly_rate,
            to_decimal(payroll_input.overtime_hours_regular),
            to_decimal(payroll_input.overtime_hours_holiday),
        )
        night_shift_premium = self.calculate_night_shift_premium(
            hourly_rate, to_decimal(payroll_input.night_shift_hours)
        )

        # 3. Gross pay
        gross_pay = (
            base_salary +
            overtime.regular +
            overtime.holiday +
            night_shift_premium +
            allowances +
            bonuses
        )

        # 4. INSS contributory base (overtime excluded)
        inss_base = base_salary + allowances + bonuses + night_shift_premium

        # 5-6. Statutory deductions
        tax_withheld = self.calculate_tax(gross_pay, is_resident)
        inss_employee = self.calculate_inss_employee(inss_base)
        inss_employer = self.calculate_inss_employer(inss_base, payroll_input.is_small_employer)

        # 7-9. Totals; employer INSS is a cost, not a deduction
        total_deductions = round_money(tax_withheld + inss_employee + other_deductions)
        net_pay = round_money(gross_pay - total_deductions)
        total_employer_cost = round_money(gross_pay + inss_employer)

        # 10. Taxable income echo
        taxable_income = self._above_exemption(gross_pay) if is_resident else gross_pay

        # 11. Minimum wage is checked on base salary only; NaN never compares below
        below_minimum_wage = (
            not base_salary.is_nan() and base_salary < self.rates.minimum_wage_monthly
        )

        if below_minimum_wage:
            notes.append(
                f"Base salary below minimum wage (${self.rates.minimum_wage_monthly}/month)"
            )
            logger.warning(
                "Payroll calculated below minimum wage for employee=%s",
                payroll_input.employee_id or "-",
            )
        if tax_withheld == 0:
            notes.append("No WIT due")
        if overtime.regular or overtime.holiday:
            notes.append("Overtime excluded from INSS contributory base")

        logger.debug(
            "Payroll employee=%s gross=%s net=%s",
            payroll_input.employee_id or "-", gross_pay, net_pay,
        )

        return PayrollResult(
            base_salary=round_money(base_salary),
            overtime_pay_regular=overtime.regular,
            overtime_pay_holiday=overtime.holiday,
            night_shift_premium=night_shift_premium,
            allowances=round_money(allowances),
            bonuses=round_money(bonuses),
            gross_pay=round_money(gross_pay),

            taxable_income=round_money(taxable_income),
            tax_withheld=tax_withheld,

            inss_employee=inss_employee,
            inss_employer=inss_employer,

            total_deductions=total_deductions,
            net_pay=net_pay,
            total_employer_cost=total_employer_cost,

            below_minimum_wage=below_minimum_wage,

            employee_id=payroll_input.employee_id,
            calculation_notes=tuple(notes),
        )

    @money_context
    def calculate_payroll_batch(self, inputs: Iterable[PayrollInput]) -> List[PayrollResult]:
        """Each employee is independent; results keep input order."""
        return [self.calculate_payroll(i) for i in inputs]

    @money_context
    def calculate_severance(self, monthly_salary, months_of_service) -> SeveranceResult:
        """
        Severance from the tenure schedule, paid at monthly salary / 30 per day.
        Nothing is owed under 3 months of service.
        """
        months_of_service = to_decimal(months_of_service)
        if months_of_service.is_nan() or months_of_service < self.rates.severance_minimum_months:
            return SeveranceResult(days=0, amount=round_money(ZERO))

        days = self.rates.severance_days_for(months_of_service)
        daily_rate = to_decimal(monthly_salary) / self.rates.days_per_month
        return SeveranceResult(days=days, amount=round_money(daily_rate * days))

    @money_context
    def calculate_notice_period(self, months_of_service) -> int:
        """Notice days owed; the longer period applies from 24 months"""
        months_of_service = to_decimal(months_of_service)
        if not months_of_service.is_nan() and months_of_service >= self.rates.notice_threshold_months:
            return self.rates.notice_period_over_2_years
        return self.rates.notice_period_under_2_years

    @money_context
    def calculate_final_pay(self, final_pay_input: FinalPayInput) -> FinalPayResult:
        """
        Final pay on termination: unused leave, severance and pay in lieu of notice.
        The final month's salary is not pro-rated here and is always reported as 0.
        """
        monthly_salary = to_decimal(final_pay_input.monthly_salary)
        daily_rate = monthly_salary / self.rates.days_per_month

        unused_leave_payment = round_money(
            daily_rate * to_decimal(final_pay_input.unused_annual_leave_days)
        )

        if final_pay_input.is_for_cause:
            severance = SeveranceResult(days=0, amount=round_money(ZERO))
        else:
            severance = self.calculate_severance(monthly_salary, final_pay_input.months_of_service)

        notice_days = self.calculate_notice_period(final_pay_input.months_of_service)
        if final_pay_input.notice_period_worked:
            notice_payment = round_money(ZERO)
        else:
            notice_payment = round_money(daily_rate * notice_days)

        return FinalPayResult(
            pro_rated_salary=round_money(ZERO),
            unused_leave_payment=unused_leave_payment,
            severance_pay=severance.amount,
            notice_payment=notice_payment,
            total=round_money(unused_leave_payment + severance.amount + notice_payment),
            severance_days=severance.days,
            notice_days=notice_days,
        )

    @money_context
    def validate_minimum_wage(self, monthly_salary) -> MinimumWageCheck:
        """Advisory only; callers decide whether to block"""
        monthly_salary = to_decimal(monthly_salary)
        minimum = self.rates.minimum_wage_monthly
        is_valid = not monthly_salary.is_nan() and monthly_salary >= minimum
        return MinimumWageCheck(
            is_valid=is_valid,
            minimum_wage=minimum,
            shortfall=ZERO if is_valid else minimum - monthly_salary,
        )


default_engine = TimorLestePayrollEngine()

calculate_hourly_rate = default_engine.calculate_hourly_rate
calculate_tax = default_engine.calculate_tax
calculate_inss_employee = default_engine.calculate_inss_employee
calculate_inss_employer = default_engine.calculate_inss_employer
calculate_overtime_pay = default_engine.calculate_overtime_pay
calculate_night_shift_premium = default_engine.calculate_night_shift_premium
calculate_payroll = default_engine.calculate_payroll
calculate_payroll_batch = default_engine.calculate_payroll_batch
calculate_severance = default_engine.calculate_severance
calculate_notice_period = default_engine.calculate_notice_period
calculate_final_pay = default_engine.calculate_final_pay
validate_minimum_wage = default_engine.validate_minimum_wage
