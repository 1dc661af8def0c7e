"""
Value types shared by the engine and its callers.
All records are frozen: built once per calculation and handed to the caller.
"""
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict

class SalaryFrequency(Enum):
    """Unit of the gross salary figure."""
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"

@dataclass(frozen=True)
class TaxBand:
    """One step of the progressive schedule: amount * rate - deduction."""
    upper: float
    rate: float
    deduction: float

    @property
    def percentage(self) -> int:
        return int(round(self.rate * 100))

@dataclass(frozen=True)
class SalaryInputs:
    """Validated employee inputs for a single calculation."""
    gross_salary: float
    frequency: SalaryFrequency = SalaryFrequency.MONTHLY
    leave_days: int = 0
    years_worked: int = 0
    months_worked: int = 0

@dataclass(frozen=True)
class TaxBreakdown:
    """Full monthly pay and severance breakdown, all amounts in ETB."""
    gross_monthly: float
    pension_contribution: float
    taxable_income: float
    income_tax: float
    net_monthly: float
    annual_net: float
    leave_daily_rate: float
    total_leave_value: float
    leave_net_impact: float
    tax_bracket_percentage: int
    severance_days: float
    severance_pay: float
    severance_tax: float
    net_severance_pay: float
    service_years_total: float

    @property
    def daily_net_rate(self) -> float:
        return self.net_monthly / 30

    @property
    def total_deductions(self) -> float:
        return self.pension_contribution + self.income_tax

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

@dataclass(frozen=True)
class ChatMessage:
    role: str  # 'user' or 'model'
    text: str
