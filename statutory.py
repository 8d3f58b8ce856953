"""
Timor-Leste statutory rates
Labour Code Law No. 4/2012 plus the current WIT and INSS regulations.
One immutable snapshot; a new year's rules is a new StatutoryRates instance.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional, Tuple


@dataclass(frozen=True)
class SeveranceBand:
    """Tenure band [min_months, max_months) → days of pay owed"""
    min_months: int
    max_months: Optional[int]  # None = open-ended
    days: int

    def contains(self, months_of_service) -> bool:
        if months_of_service < self.min_months:
            return False
        return self.max_months is None or months_of_service < self.max_months


@dataclass(frozen=True)
class PublicHoliday:
    date: date
    name_en: str
    name_pt: str
    name_tet: str


@dataclass(frozen=True)
class StatutoryRates:
    """Read-only lookup table for every rate the payroll engine uses"""

    # Minimum wage (USD, unchanged since 2012)
    minimum_wage_monthly: Decimal = Decimal('115')

    # Working hours
    standard_hours_per_day: int = 8
    standard_hours_per_week: int = 44
    max_overtime_per_day: int = 4
    max_overtime_per_week: int = 16

    # Pay multipliers
    overtime_rate_regular: Decimal = Decimal('1.5')   # +50%
    overtime_rate_holiday: Decimal = Decimal('2.0')   # +100% holiday / rest day
    night_shift_rate: Decimal = Decimal('1.25')       # +25%, 21:00-06:00

    # Wage Income Tax (WIT)
    tax_exemption_monthly: Decimal = Decimal('500')   # residents only
    tax_rate: Decimal = Decimal('0.10')

    # Social security (INSS)
    inss_employee_rate: Decimal = Decimal('0.04')
    inss_employer_rate: Decimal = Decimal('0.06')
    # <=10 employees and 60%+ Timorese staff
    inss_small_employer_reduction: Decimal = Decimal('0.10')

    # Leave entitlements (days unless noted)
    annual_leave_days: int = 12
    sick_leave_full_pay_days: int = 6
    sick_leave_half_pay_days: int = 6
    maternity_leave_weeks: int = 12
    paternity_leave_days: int = 5
    personal_leave_days: int = 3

    # Termination
    severance_minimum_months: int = 3
    severance_schedule: Tuple[SeveranceBand, ...] = (
        SeveranceBand(3, 12, 30),
        SeveranceBand(12, 24, 60),
        SeveranceBand(24, 36, 90),
        SeveranceBand(36, None, 120),
    )
    notice_threshold_months: int = 24
    notice_period_under_2_years: int = 15
    notice_period_over_2_years: int = 30
    days_per_month: int = 30

    # Filing deadlines
    monthly_filing_deadline_day: int = 15   # of the following month
    annual_filing_deadline_month: int = 3
    annual_filing_deadline_day: int = 31
    employee_declaration_deadline_month: int = 1
    employee_declaration_deadline_day: int = 31

    # Probation
    probation_standard_months: int = 1
    probation_skilled_months: int = 3

    public_holidays: Tuple[PublicHoliday, ...] = field(default=())

    @property
    def inss_total_rate(self) -> Decimal:
        return self.inss_employee_rate + self.inss_employer_rate

    @property
    def inss_employer_rate_small(self) -> Decimal:
        return self.inss_employer_rate * (1 - self.inss_small_employer_reduction)

    @property
    def sick_leave_total_days(self) -> int:
        return self.sick_leave_full_pay_days + self.sick_leave_half_pay_days

    @property
    def hours_per_month(self) -> Decimal:
        """Standard week times 52/12 weeks per month"""
        return Decimal(self.standard_hours_per_week) * Decimal(52) / Decimal(12)

    def severance_days_for(self, months_of_service) -> int:
        """First matching band wins; 0 when no band covers the tenure"""
        for band in self.severance_schedule:
            if band.contains(months_of_service):
                return band.days
        return 0


# Islamic holidays follow the lunar calendar; those dates are approximate.
PUBLIC_HOLIDAYS_2025 = (
    PublicHoliday(date(2025, 1, 1), "New Year's Day", "Ano Novo", "Tinan Foun"),
    PublicHoliday(date(2025, 3, 31), "Eid al-Fitr", "Eid al-Fitr", "Eid al-Fitr"),
    PublicHoliday(date(2025, 4, 18), "Good Friday", "Sexta-feira Santa", "Sesta-feira Santa"),
    PublicHoliday(date(2025, 5, 1), "Labour Day", "Dia do Trabalhador", "Loron Trabalhador"),
    PublicHoliday(date(2025, 5, 20), "Independence Day", "Dia da Independência", "Loron Independénsia"),
    PublicHoliday(date(2025, 5, 29), "Corpus Christi", "Corpo de Deus", "Korpu Kristu"),
    PublicHoliday(date(2025, 6, 7), "Eid al-Adha", "Eid al-Adha", "Eid al-Adha"),
    PublicHoliday(date(2025, 8, 30), "Popular Consultation Day", "Dia da Consulta Popular", "Loron Konsulta Popular"),
    PublicHoliday(date(2025, 9, 20), "Liberation Day", "Dia da Libertação", "Loron Libertasaun"),
    PublicHoliday(date(2025, 11, 1), "All Saints' Day", "Dia de Todos os Santos", "Loron Santu Sira"),
    PublicHoliday(date(2025, 11, 2), "All Souls' Day", "Dia dos Fiéis Defuntos", "Loron Mate Sira"),
    PublicHoliday(date(2025, 11, 12), "Santa Cruz Day", "Dia de Santa Cruz", "Loron Santa Cruz"),
    PublicHoliday(date(2025, 11, 28), "Independence Proclamation Day", "Dia da Proclamação", "Loron Proklamasaun"),
    PublicHoliday(date(2025, 12, 7), "National Heroes Day", "Dia dos Heróis Nacionais", "Loron Eroi Nasionál"),
    PublicHoliday(date(2025, 12, 8), "Immaculate Conception", "Imaculada Conceição", "Imakulada Konseisaun"),
    PublicHoliday(date(2025, 12, 25), "Christmas Day", "Natal", "Natál"),
)


TIMOR_LESTE_2025 = StatutoryRates(public_holidays=PUBLIC_HOLIDAYS_2025)
