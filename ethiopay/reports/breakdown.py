from typing import Optional

import pandas as pd

from ethiopay.core.schemas import TaxBreakdown
from ethiopay.tax.engine import default_bands

def format_etb(amount: float) -> str:
    return f"{amount:,.2f} ETB"

def monthly_statement(b: TaxBreakdown) -> pd.DataFrame:
    rows = [
        {"Item": "Gross Salary", "Amount": b.gross_monthly},
        {"Item": "Pension (7%)", "Amount": -b.pension_contribution},
        {"Item": f"Income Tax ({b.tax_bracket_percentage}% bracket)", "Amount": -b.income_tax},
        {"Item": "Net Pay", "Amount": b.net_monthly},
    ]
    return pd.DataFrame(rows)

def severance_statement(b: TaxBreakdown) -> pd.DataFrame:
    rows = [
        {"Item": "Service Years", "Value": round(b.service_years_total, 2)},
        {"Item": "Accrued Days", "Value": round(b.severance_days, 1)},
        {"Item": "Daily Rate", "Value": round(b.leave_daily_rate, 2)},
        {"Item": "Gross Severance", "Value": b.severance_pay},
        {"Item": "Severance Tax", "Value": -b.severance_tax},
        {"Item": "Net Severance", "Value": b.net_severance_pay},
    ]
    return pd.DataFrame(rows)

def pay_distribution(b: TaxBreakdown) -> pd.DataFrame:
    return pd.DataFrame([
        {"Component": "Net Pay", "Amount": b.net_monthly},
        {"Component": "Income Tax", "Amount": b.income_tax},
        {"Component": "Pension", "Amount": b.pension_contribution},
    ])

def tax_schedule(taxable_income: Optional[float] = None) -> pd.DataFrame:
    """Bracket table with display ranges; `active` marks bands the income has reached."""
    rows = []
    lower = 0.0
    for band in default_bands():
        if lower == 0:
            label = f"0 - {band.upper:,.0f}"
        elif band.upper == float("inf"):
            label = f"Over {lower:,.0f}"
        else:
            label = f"{lower + 1:,.0f} - {band.upper:,.0f}"
        rows.append({
            "Range": label,
            "Rate": f"{band.percentage}%",
            "Deduction": band.deduction,
            "active": taxable_income is not None and taxable_income > lower,
        })
        lower = band.upper
    return pd.DataFrame(rows)
