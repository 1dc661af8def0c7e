"""
Caller-side input validation.

The engine trusts its inputs, so anything built from raw form or file values
goes through here first. Errors are collected per field rather than failing on
the first one, so a form can show every message at once.
"""
import math
from typing import Any, Dict, Mapping, Optional, Union

from ethiopay.core.schemas import SalaryFrequency, SalaryInputs

FIELDS = ("gross_salary", "leave_days", "years_worked", "months_worked")

class ValidationError(ValueError):
    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{k}: {v}" for k, v in self.errors.items()))

def clean_numeric_text(value: Any) -> str:
    """Trim whitespace, thousands separators and leading zeros ('007' -> '7')."""
    if value is None:
        return ""
    text = str(value).strip().replace(",", "")
    if len(text) > 1 and text.startswith("0") and not text.startswith("0."):
        text = text.lstrip("0") or "0"
    return text

def _to_number(value: Any) -> Optional[float]:
    """None for blanks, raises ValueError for garbage."""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if isinstance(value, float) and math.isnan(value):
            return None
        number = float(value)
    else:
        text = clean_numeric_text(value)
        if text == "":
            return None
        number = float(text)
    if math.isinf(number) or math.isnan(number):
        raise ValueError(f"not a finite number: {value!r}")
    return number

def parse_frequency(value: Union[SalaryFrequency, str, None]) -> SalaryFrequency:
    if isinstance(value, SalaryFrequency):
        return value
    if value is None or (isinstance(value, float) and math.isnan(value)) or str(value).strip() == "":
        return SalaryFrequency.MONTHLY
    try:
        return SalaryFrequency(str(value).strip().upper())
    except ValueError:
        raise ValidationError({"frequency": "Must be MONTHLY or ANNUAL"})

def validate_salary_form(raw: Mapping[str, Any]) -> Dict[str, str]:
    """Return field -> message for every invalid field (empty when valid)."""
    errors: Dict[str, str] = {}
    values: Dict[str, Optional[float]] = {}
    for field in FIELDS:
        try:
            values[field] = _to_number(raw.get(field))
        except (TypeError, ValueError):
            errors[field] = "Must be a number"

    if "gross_salary" not in errors:
        gross = values["gross_salary"]
        if gross is None or gross <= 0:
            errors["gross_salary"] = "Salary must be greater than 0"
    if "leave_days" not in errors and (values["leave_days"] or 0) < 0:
        errors["leave_days"] = "Leave days cannot be negative"
    if "years_worked" not in errors and (values["years_worked"] or 0) < 0:
        errors["years_worked"] = "Cannot be negative"
    if "months_worked" not in errors:
        months = values["months_worked"] or 0
        if months < 0 or months > 11:
            errors["months_worked"] = "Must be between 0-11"
    return errors

def parse_salary_form(raw: Mapping[str, Any], frequency: Union[SalaryFrequency, str, None] = None) -> SalaryInputs:
    """Validate raw values and build SalaryInputs, or raise ValidationError."""
    errors = validate_salary_form(raw)
    try:
        freq = parse_frequency(frequency if frequency is not None else raw.get("frequency"))
    except ValidationError as e:
        errors.update(e.errors)
        freq = None
    if errors:
        raise ValidationError(errors)

    return SalaryInputs(
        gross_salary=_to_number(raw.get("gross_salary")),
        frequency=freq,
        leave_days=int(_to_number(raw.get("leave_days")) or 0),
        years_worked=int(_to_number(raw.get("years_worked")) or 0),
        months_worked=int(_to_number(raw.get("months_worked")) or 0),
    )
