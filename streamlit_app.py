import streamlit as st
import pandas as pd
import plotly.express as px
import tempfile
from pathlib import Path

from ethiopay.core.config import settings
from ethiopay.core.schemas import ChatMessage, SalaryFrequency
from ethiopay.payroll.validation import ValidationError, clean_numeric_text, parse_salary_form
from ethiopay.payroll.bulk_processor import PayrollBulkProcessor
from ethiopay.reports.breakdown import (
    format_etb, monthly_statement, pay_distribution, severance_statement, tax_schedule
)
from ethiopay.tax.engine import calculate_ethiopian_tax
from ethiopay.assistant.client import AssistantError, TaxAssistant

st.set_page_config(
    page_title=f"{settings.APP_NAME} | Ethiopia Tax Portal",
    layout="wide",
    page_icon="🇪🇹",
    initial_sidebar_state="expanded",
)

st.markdown("""
<style>
    .main-header {
        background: linear-gradient(90deg, #064e3b, #059669);
        padding: 1rem;
        border-radius: 10px;
        color: white;
        text-align: center;
        margin-bottom: 2rem;
    }
</style>
""", unsafe_allow_html=True)

DEFAULT_FORM = {"gross_salary": "25000", "leave_days": "20", "years_worked": "3", "months_worked": "0"}

def _init_state():
    for key, value in DEFAULT_FORM.items():
        st.session_state.setdefault(key, value)
    st.session_state.setdefault("frequency", SalaryFrequency.MONTHLY.value)
    st.session_state.setdefault("errors", {})
    st.session_state.setdefault("breakdown", None)
    st.session_state.setdefault("chat_history", [])

def show_inputs():
    st.sidebar.markdown("### 💵 Income Details")
    st.sidebar.radio("Salary basis", [f.value for f in SalaryFrequency], key="frequency", horizontal=True)
    label = "Monthly" if st.session_state["frequency"] == SalaryFrequency.MONTHLY.value else "Annual"
    errors = st.session_state["errors"]

    fields = [
        ("gross_salary", f"Gross {label} Salary (ETB)"),
        ("leave_days", "Annual Leave Days"),
        ("years_worked", "Years of Service"),
        ("months_worked", "Additional Months"),
    ]
    for key, title in fields:
        st.sidebar.text_input(title, key=key)
        if key in errors:
            st.sidebar.error(errors[key])

    if st.sidebar.button("Calculate", type="primary"):
        raw = {key: clean_numeric_text(st.session_state[key]) for key, _ in fields}
        try:
            inputs = parse_salary_form(raw, st.session_state["frequency"])
        except ValidationError as e:
            st.session_state["errors"] = e.errors
            st.session_state["breakdown"] = None
        else:
            st.session_state["errors"] = {}
            st.session_state["breakdown"] = calculate_ethiopian_tax(inputs)
        st.rerun()

def show_results(b):
    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("💰 Net Monthly Pay", format_etb(b.net_monthly))
    with col2:
        st.metric("📦 Net Severance", format_etb(b.net_severance_pay))
    with col3:
        st.metric("🏖️ Leave Value (net)", f"+{format_etb(b.leave_net_impact)}")

    col1, col2, col3 = st.columns(3)
    with col1:
        st.metric("🏦 Pension (7%)", f"-{format_etb(b.pension_contribution)}")
    with col2:
        st.metric("🧾 Income Tax", f"-{format_etb(b.income_tax)}", f"Bracket {b.tax_bracket_percentage}%", delta_color="off")
    with col3:
        st.metric("📅 Daily Net Rate", f"{b.daily_net_rate:,.0f} ETB")

    left, right = st.columns([1, 1])
    with left:
        st.markdown("### Monthly Statement")
        st.dataframe(monthly_statement(b), use_container_width=True, hide_index=True)
        st.caption(f"Annual net pay: {format_etb(b.annual_net)}")
    with right:
        fig = px.pie(pay_distribution(b), names="Component", values="Amount", title="Where the gross goes", hole=0.4)
        fig.update_layout(height=320)
        st.plotly_chart(fig, use_container_width=True)

    st.markdown("### Severance Analytics")
    st.write(
        f"You have served **{b.service_years_total:.2f} years**, accruing "
        f"**{b.severance_days:.1f} days** at {format_etb(b.leave_daily_rate)} per day "
        f"(monthly gross / 30). The gross amount is taxed through the same progressive schedule."
    )
    st.dataframe(severance_statement(b), use_container_width=True, hide_index=True)

    with st.expander("Income tax schedule (Proclamation 979/2016)"):
        st.dataframe(tax_schedule(b.taxable_income), use_container_width=True, hide_index=True)
        st.caption("Applied on taxable income (gross - 7% pension).")

def show_calculator():
    b = st.session_state["breakdown"]
    if b is None:
        st.info("Enter salary details in the sidebar and press **Calculate**.")
        return
    show_results(b)

def show_bulk():
    st.markdown("### 📁 Bulk Payroll")
    processor = PayrollBulkProcessor()
    st.download_button(
        "📥 Download Template",
        processor.get_template().to_csv(index=False),
        file_name="payroll_template.csv",
        mime="text/csv",
    )
    uploaded = st.file_uploader("Upload employees", type=["csv", "xlsx", "xls", "json"])
    if uploaded is None:
        return

    suffix = Path(uploaded.name).suffix
    with tempfile.NamedTemporaryFile(delete=False, suffix=suffix) as tmp:
        tmp.write(uploaded.getvalue())
        tmp_path = tmp.name
    try:
        batch = processor.process_file(tmp_path)
    except (FileNotFoundError, ValueError) as e:
        st.error(f"Could not read file: {e}")
        return
    finally:
        Path(tmp_path).unlink(missing_ok=True)

    col1, col2, col3 = st.columns(3)
    col1.metric("Rows", batch.total_rows)
    col2.metric("Processed", batch.processed_rows)
    col3.metric("Rejected", batch.error_rows)

    if batch.success:
        st.dataframe(batch.results, use_container_width=True)
        st.json(batch.totals())
        st.download_button(
            "💾 Download Results",
            batch.results.to_csv(index=False),
            file_name="payroll_results.csv",
            mime="text/csv",
        )
    if batch.row_errors:
        st.warning("Some rows were rejected")
        st.dataframe(pd.DataFrame(batch.row_errors), use_container_width=True)

def show_assistant(assistant):
    st.markdown("### 🤖 Ask about your results")
    b = st.session_state["breakdown"]
    if b is None:
        st.info("Calculate your pay first so the assistant can see your figures.")
        return

    history = st.session_state["chat_history"]
    for msg in history:
        with st.chat_message("user" if msg.role == "user" else "assistant"):
            st.write(msg.text)

    question = st.chat_input("e.g. Why is my severance taxed?")
    if question:
        try:
            answer = assistant.ask(question, b, history)
        except (AssistantError, ValueError) as e:
            st.error(str(e))
            return
        history.append(ChatMessage("user", question))
        history.append(ChatMessage("model", answer))
        st.rerun()

def main():
    _init_state()
    st.markdown('<div class="main-header"><h1>🇪🇹 Ethiopia Tax Portal</h1><p>Net pay & severance according to Proclamations 979/2016 and 1156/2019</p></div>', unsafe_allow_html=True)
    show_inputs()
    assistant = TaxAssistant()
    labels = ["🧮 Calculator", "📁 Bulk Payroll"]
    if assistant.is_configured():
        labels.append("🤖 Assistant")
    tabs = st.tabs(labels)
    with tabs[0]:
        show_calculator()
    with tabs[1]:
        show_bulk()
    if assistant.is_configured():
        with tabs[2]:
            show_assistant(assistant)

if __name__=="__main__":
    main()
