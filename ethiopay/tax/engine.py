"""
Ethiopian payroll tax and severance engine.

Income tax follows the monthly schedule of Proclamation 979/2016 using the
quick-deduction form (amount * rate - deduction). Severance follows Labour
Proclamation 1156/2019: 30 days for the first year, 10 days for every further
year (pro-rated continuously), capped at 360 days.
"""
from typing import Optional, Sequence

from ethiopay.core.config import settings
from ethiopay.core.schemas import SalaryFrequency, SalaryInputs, TaxBand, TaxBreakdown
from ethiopay.core.utils import round2, setup_logging

logger = setup_logging("engine")

def default_bands() -> tuple:
    return tuple(TaxBand(*band) for band in settings.TAX_BANDS)

def bracket_tax(amount: float, bands: Optional[Sequence[TaxBand]] = None) -> float:
    """Tax due on a monthly taxable amount, floored at zero."""
    bands = bands or default_bands()
    amount = round2(amount)
    band = next((b for b in bands if amount <= b.upper), bands[-1])
    return round2(max(0.0, amount * band.rate - band.deduction))

def bracket_percentage(amount: float, bands: Optional[Sequence[TaxBand]] = None) -> int:
    """Marginal rate (in percent) of the band the amount falls into."""
    bands = bands or default_bands()
    percentage = bands[0].percentage
    for lower, band in zip(bands, bands[1:]):
        if amount > lower.upper:
            percentage = band.percentage
    return percentage

def severance_days(service_years: float) -> float:
    if service_years <= 0:
        days = 0.0
    elif service_years <= 1:
        days = settings.SEVERANCE_FIRST_YEAR_DAYS * service_years
    else:
        days = settings.SEVERANCE_FIRST_YEAR_DAYS + (service_years - 1) * settings.SEVERANCE_ADDITIONAL_YEAR_DAYS
    return min(days, settings.SEVERANCE_CAP_DAYS)

class TaxEngine:
    def __init__(self, bands: Optional[Sequence[TaxBand]] = None, pension_rate: float = None):
        self.bands = tuple(bands) if bands else default_bands()
        self.pension_rate = settings.PENSION_RATE if pension_rate is None else pension_rate
        self.days_per_month = settings.DAYS_PER_MONTH

    def compute(self, inputs: SalaryInputs) -> TaxBreakdown:
        gross = inputs.gross_salary
        gross_monthly = gross / 12 if inputs.frequency == SalaryFrequency.ANNUAL else gross

        pension = round2(gross_monthly * self.pension_rate)
        taxable = round2(gross_monthly - pension)
        income_tax = bracket_tax(taxable, self.bands)
        net_monthly = round2(taxable - income_tax)

        # leave is valued on a fixed 30-day month
        daily_rate = gross_monthly / self.days_per_month
        leave_net_impact = round2((net_monthly / self.days_per_month) * inputs.leave_days)

        service_years = inputs.years_worked + inputs.months_worked / 12
        days = severance_days(service_years)
        severance_pay = round2(days * daily_rate)
        # the lump sum is taxed on its own, as if it were one month's income
        severance_tax = bracket_tax(severance_pay, self.bands)

        result = TaxBreakdown(
            gross_monthly=gross_monthly,
            pension_contribution=pension,
            taxable_income=taxable,
            income_tax=income_tax,
            net_monthly=net_monthly,
            annual_net=net_monthly * 12,
            leave_daily_rate=daily_rate,
            total_leave_value=daily_rate * inputs.leave_days,
            leave_net_impact=leave_net_impact,
            tax_bracket_percentage=bracket_percentage(taxable, self.bands),
            severance_days=days,
            severance_pay=severance_pay,
            severance_tax=severance_tax,
            net_severance_pay=round2(max(0.0, severance_pay - severance_tax)),
            service_years_total=service_years,
        )
        logger.debug("computed gross=%s taxable=%s tax=%s severance_days=%s",
                     gross_monthly, taxable, income_tax, days)
        return result

def calculate_ethiopian_tax(inputs: SalaryInputs) -> TaxBreakdown:
    return TaxEngine().compute(inputs)
