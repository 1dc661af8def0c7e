"""
Optional Q&A helper. Sends the user's question with a read-only snapshot of
the computed breakdown to a chat endpoint and returns its free-form answer.
Nothing here feeds back into the engine.
"""
from typing import Iterable, Optional

import requests

from ethiopay.core.config import settings
from ethiopay.core.schemas import ChatMessage, TaxBreakdown
from ethiopay.core.utils import setup_logging
from ethiopay.reports.breakdown import format_etb

logger = setup_logging("assistant")

SYSTEM_PROMPT = (
    "You are an assistant for Ethiopian payroll questions. Answer using the "
    "employee's computed figures below. Income tax follows Proclamation 979/2016, "
    "pension is 7% of gross, severance follows Labour Proclamation 1156/2019. "
    "Say so when a question needs professional or legal advice."
)

class AssistantError(RuntimeError):
    pass

class TaxAssistant:
    def __init__(self, api_url: str = None, api_key: str = None, model: str = None,
                 timeout: float = None, session: Optional[requests.Session] = None):
        self.api_url = api_url or settings.ASSISTANT_API_URL
        self.api_key = api_key or settings.ASSISTANT_API_KEY
        self.model = model or settings.ASSISTANT_MODEL
        self.timeout = timeout or settings.ASSISTANT_TIMEOUT
        self.session = session or requests.Session()

    def is_configured(self) -> bool:
        return bool(self.api_url)

    def build_context(self, b: TaxBreakdown) -> str:
        lines = [
            f"Gross monthly salary: {format_etb(b.gross_monthly)}",
            f"Pension contribution: {format_etb(b.pension_contribution)}",
            f"Taxable income: {format_etb(b.taxable_income)}",
            f"Income tax: {format_etb(b.income_tax)} (marginal bracket {b.tax_bracket_percentage}%)",
            f"Net monthly pay: {format_etb(b.net_monthly)}",
            f"Annual net pay: {format_etb(b.annual_net)}",
            f"Unused leave value (net): {format_etb(b.leave_net_impact)}",
            f"Service: {b.service_years_total:.2f} years, {b.severance_days:.1f} severance days",
            f"Severance: {format_etb(b.severance_pay)} gross, {format_etb(b.severance_tax)} tax, "
            f"{format_etb(b.net_severance_pay)} net",
        ]
        return "\n".join(lines)

    def ask(self, question: str, breakdown: TaxBreakdown, history: Iterable[ChatMessage] = ()) -> str:
        if not question or not question.strip():
            raise ValueError("Question must not be empty")
        if not self.is_configured():
            raise AssistantError("Assistant endpoint is not configured")

        messages = [{"role": m.role, "text": m.text} for m in history]
        messages.append({"role": "user", "text": question.strip()})
        payload = {
            "model": self.model,
            "system": f"{SYSTEM_PROMPT}\n\n{self.build_context(breakdown)}",
            "messages": messages,
        }
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            r = self.session.post(self.api_url, json=payload, headers=headers, timeout=self.timeout)
            r.raise_for_status()
            text = r.json()["text"]
        except (requests.RequestException, ValueError, KeyError, TypeError) as e:
            logger.warning("assistant request failed: %s", e)
            raise AssistantError(f"Assistant request failed: {e}") from e
        return text
