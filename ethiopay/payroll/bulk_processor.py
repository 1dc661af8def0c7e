"""
Bulk payroll processing: one engine run per employee row of a CSV/Excel/JSON file.
Invalid rows are reported back with their field errors and never stop the batch.
"""
import json
import pandas as pd
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Union

from ethiopay.core.utils import setup_logging
from ethiopay.payroll.validation import ValidationError, parse_salary_form
from ethiopay.tax.engine import TaxEngine

logger = setup_logging("payroll")

TEMPLATE_COLUMNS = ["employee_id", "gross_salary", "frequency", "leave_days", "years_worked", "months_worked"]
TOTAL_COLUMNS = ["gross_monthly", "pension_contribution", "income_tax", "net_monthly", "net_severance_pay"]

@dataclass
class BatchResult:
    """Outcome of a bulk run with per-row errors."""
    results: pd.DataFrame
    row_errors: List[Dict[str, Any]] = field(default_factory=list)
    total_rows: int = 0

    @property
    def processed_rows(self) -> int:
        return len(self.results)

    @property
    def error_rows(self) -> int:
        return len(self.row_errors)

    @property
    def success(self) -> bool:
        return self.processed_rows > 0

    def totals(self) -> Dict[str, float]:
        if self.results.empty:
            return {col: 0.0 for col in TOTAL_COLUMNS}
        return {col: round(float(self.results[col].sum()), 2) for col in TOTAL_COLUMNS}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "total_rows": self.total_rows,
            "processed_rows": self.processed_rows,
            "error_rows": self.error_rows,
            "row_errors": self.row_errors,
            "totals": self.totals(),
        }

class PayrollBulkProcessor:
    def __init__(self, engine: TaxEngine = None):
        self.engine = engine or TaxEngine()

    def get_template(self) -> pd.DataFrame:
        """Upload template with one sample row."""
        return pd.DataFrame([{
            "employee_id": "EMP001",
            "gross_salary": 25000.0,
            "frequency": "MONTHLY",
            "leave_days": 20,
            "years_worked": 3,
            "months_worked": 0,
        }], columns=TEMPLATE_COLUMNS)

    def load_file(self, file_path: Union[str, Path]) -> pd.DataFrame:
        file_path = Path(file_path)
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        ext = file_path.suffix.lower()
        if ext == '.csv':
            return pd.read_csv(file_path, dtype={"employee_id": str})
        if ext in ('.xlsx', '.xls'):
            return pd.read_excel(file_path, dtype={"employee_id": str})
        if ext == '.json':
            with open(file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return pd.DataFrame(data if isinstance(data, list) else [data])
        raise ValueError(f"Unsupported file format: {ext}")

    def process(self, df: pd.DataFrame) -> BatchResult:
        rows = []
        row_errors = []
        for idx, record in enumerate(df.to_dict('records'), start=1):
            employee_id = record.get("employee_id")
            if pd.isna(employee_id):
                employee_id = None
            try:
                inputs = parse_salary_form(record)
            except ValidationError as e:
                logger.warning("row %s (%s) rejected: %s", idx, employee_id, e)
                row_errors.append({"row": idx, "employee_id": employee_id, "errors": e.errors})
                continue
            breakdown = self.engine.compute(inputs)
            rows.append({"employee_id": employee_id, "frequency": inputs.frequency.value, **breakdown.to_dict()})

        results = pd.DataFrame(rows)
        batch = BatchResult(results=results, row_errors=row_errors, total_rows=len(df))
        logger.info("payroll batch: %s rows, %s processed, %s rejected",
                    batch.total_rows, batch.processed_rows, batch.error_rows)
        return batch

    def process_file(self, file_path: Union[str, Path]) -> BatchResult:
        return self.process(self.load_file(file_path))
