import pytest
from ethiopay.core.schemas import SalaryFrequency
from ethiopay.payroll.validation import (
    ValidationError, clean_numeric_text, parse_frequency, parse_salary_form, validate_salary_form
)

def test_clean_numeric_text():
    assert clean_numeric_text("007")=="7"
    assert clean_numeric_text("0")=="0"
    assert clean_numeric_text("00")=="0"
    assert clean_numeric_text("")==""
    assert clean_numeric_text(None)==""
    assert clean_numeric_text(" 25,000 ")=="25000"
    assert clean_numeric_text("0.5")=="0.5"

def test_parse_valid_form():
    inputs=parse_salary_form({"gross_salary":"25000","leave_days":"20","years_worked":"3","months_worked":"0"},"monthly")
    assert inputs.gross_salary==25000.0
    assert inputs.frequency==SalaryFrequency.MONTHLY
    assert (inputs.leave_days,inputs.years_worked,inputs.months_worked)==(20,3,0)

def test_blank_optional_fields_default_to_zero():
    inputs=parse_salary_form({"gross_salary":300000,"leave_days":""},SalaryFrequency.ANNUAL)
    assert inputs.leave_days==0 and inputs.years_worked==0 and inputs.months_worked==0
    assert inputs.frequency==SalaryFrequency.ANNUAL

def test_error_messages():
    errors=validate_salary_form({"gross_salary":"0","leave_days":"-1","years_worked":"-2","months_worked":"12"})
    assert errors=={
        "gross_salary":"Salary must be greater than 0",
        "leave_days":"Leave days cannot be negative",
        "years_worked":"Cannot be negative",
        "months_worked":"Must be between 0-11",
    }

def test_missing_salary():
    assert validate_salary_form({})=={"gross_salary":"Salary must be greater than 0"}

def test_non_numeric_field():
    errors=validate_salary_form({"gross_salary":"abc","months_worked":"11"})
    assert errors=={"gross_salary":"Must be a number"}

def test_parse_raises_with_all_errors():
    with pytest.raises(ValidationError) as exc:
        parse_salary_form({"gross_salary":"-5","months_worked":"-1"},"WEEKLY")
    assert set(exc.value.errors)=={"gross_salary","months_worked","frequency"}

def test_parse_frequency():
    assert parse_frequency("annual")==SalaryFrequency.ANNUAL
    assert parse_frequency(None)==SalaryFrequency.MONTHLY
    assert parse_frequency(SalaryFrequency.ANNUAL)==SalaryFrequency.ANNUAL
    with pytest.raises(ValidationError):
        parse_frequency("fortnightly")
