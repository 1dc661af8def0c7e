import pytest
from ethiopay.assistant.client import AssistantError, TaxAssistant
from ethiopay.core.config import settings
from ethiopay.core.schemas import ChatMessage, SalaryInputs
from ethiopay.tax.engine import calculate_ethiopian_tax

URL="http://fakeassistant.local/chat"

def _breakdown():
    return calculate_ethiopian_tax(SalaryInputs(25000,leave_days=20,years_worked=3))

def test_context_contains_figures():
    ctx=TaxAssistant(api_url=URL).build_context(_breakdown())
    assert "16,672.50 ETB" in ctx
    assert "35%" in ctx
    assert "50.0 severance days" in ctx

def test_ask_sends_history_and_context(requests_mock):
    requests_mock.post(URL,json={"text":"Severance is taxed as one month's income."})
    a=TaxAssistant(api_url=URL,api_key="secret",model="test-model")
    history=[ChatMessage("user","hi"),ChatMessage("model","hello")]
    answer=a.ask("Why is my severance taxed?",_breakdown(),history)
    assert answer.startswith("Severance")
    req=requests_mock.last_request
    body=req.json()
    assert req.headers["Authorization"]=="Bearer secret"
    assert body["model"]=="test-model"
    assert [m["role"] for m in body["messages"]]==["user","model","user"]
    assert "6,577.50 ETB" in body["system"]

def test_http_error_is_wrapped(requests_mock):
    requests_mock.post(URL,status_code=500)
    with pytest.raises(AssistantError):
        TaxAssistant(api_url=URL).ask("hello",_breakdown())

def test_malformed_response_is_wrapped(requests_mock):
    requests_mock.post(URL,json={"unexpected":True})
    with pytest.raises(AssistantError):
        TaxAssistant(api_url=URL).ask("hello",_breakdown())

def test_empty_question_and_unconfigured(monkeypatch):
    with pytest.raises(ValueError):
        TaxAssistant(api_url=URL).ask("  ",_breakdown())
    monkeypatch.setattr(settings,"ASSISTANT_API_URL",None)
    a=TaxAssistant()
    assert not a.is_configured()
    with pytest.raises(AssistantError):
        a.ask("hello",_breakdown())
