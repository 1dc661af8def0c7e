import json
import pandas as pd
import pytest
from ethiopay.payroll.bulk_processor import PayrollBulkProcessor, TEMPLATE_COLUMNS

ROWS=[
    {"employee_id":"EMP001","gross_salary":25000,"frequency":"MONTHLY","leave_days":20,"years_worked":3,"months_worked":0},
    {"employee_id":"EMP002","gross_salary":300000,"frequency":"ANNUAL","leave_days":20,"years_worked":3,"months_worked":0},
    {"employee_id":"EMP003","gross_salary":0,"frequency":"MONTHLY","leave_days":5,"years_worked":1,"months_worked":14},
]

def test_template_columns():
    p=PayrollBulkProcessor()
    df=p.get_template()
    assert list(df.columns)==TEMPLATE_COLUMNS
    assert len(df)==1

def test_process_keeps_valid_and_reports_invalid():
    p=PayrollBulkProcessor()
    batch=p.process(pd.DataFrame(ROWS))
    assert batch.total_rows==3
    assert batch.processed_rows==2
    assert batch.error_rows==1
    assert batch.success
    err=batch.row_errors[0]
    assert err["row"]==3 and err["employee_id"]=="EMP003"
    assert set(err["errors"])=={"gross_salary","months_worked"}
    nets=batch.results.set_index("employee_id")["net_monthly"]
    assert nets["EMP001"]==nets["EMP002"]==16672.5

def test_totals():
    batch=PayrollBulkProcessor().process(pd.DataFrame(ROWS[:2]))
    totals=batch.totals()
    assert totals["gross_monthly"]==50000.0
    assert totals["income_tax"]==13155.0
    assert totals["net_severance_pay"]==pytest.approx(57286.68)
    assert batch.to_dict()["processed_rows"]==2

def test_missing_frequency_defaults_monthly(tmp_path):
    path=tmp_path/"staff.json"
    path.write_text(json.dumps([{"employee_id":"E1","gross_salary":5000}]))
    batch=PayrollBulkProcessor().process_file(path)
    assert batch.results.iloc[0]["frequency"]=="MONTHLY"
    assert batch.results.iloc[0]["gross_monthly"]==5000

def test_csv_and_excel_files(tmp_path):
    df=pd.DataFrame(ROWS[:1])
    csv=tmp_path/"staff.csv"; df.to_csv(csv,index=False)
    xlsx=tmp_path/"staff.xlsx"; df.to_excel(xlsx,index=False)
    p=PayrollBulkProcessor()
    for path in (csv,xlsx):
        batch=p.process_file(path)
        assert batch.processed_rows==1
        assert batch.results.iloc[0]["income_tax"]==6577.5

def test_empty_batch():
    batch=PayrollBulkProcessor().process(pd.DataFrame(columns=TEMPLATE_COLUMNS))
    assert not batch.success
    assert batch.totals()["net_monthly"]==0.0

def test_bad_files(tmp_path):
    p=PayrollBulkProcessor()
    with pytest.raises(FileNotFoundError):
        p.load_file(tmp_path/"missing.csv")
    txt=tmp_path/"staff.txt"; txt.write_text("x")
    with pytest.raises(ValueError):
        p.load_file(txt)

def test_huge_salary_row_does_not_abort_batch():
    rows=[{"employee_id":"EMP001","gross_salary":25000},{"employee_id":"EMP009","gross_salary":1e27}]
    batch=PayrollBulkProcessor().process(pd.DataFrame(rows))
    assert batch.processed_rows==2
    assert batch.error_rows==0
    assert batch.results.set_index("employee_id").loc["EMP009","income_tax"]>0
