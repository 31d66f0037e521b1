import pandas as pd
import streamlit as st

from finplan.utils.answer_format import format_currency
from finplan.utils.quant_engine import InvalidInput
from finplan.utils.tax_engine import TaxProfile
from finplan.utils.validators import parse_number
from finplan.web_app.agent_helpers import run_query


def render():
    st.subheader("Tax Optimizer")
    st.caption("Get tax-saving suggestions based on your income and preferences.")

    col_l, col_r = st.columns([0.4, 0.6], gap="large")

    with col_l:
        income = st.text_input("Annual Income (₹)", value="1000000")
        deductions = st.text_input("Current 80C deductions (₹)", value="0")
        employment = st.selectbox("Employment Type", ["Salaried", "Self-employed", "Freelancer", "Business"])
        age_group = st.selectbox("Age Group", ["Below 60", "60-80", "80+"])
        regime = st.radio("Tax Regime", ["Old Regime", "New Regime"], horizontal=True)

        if st.button("Get Tax Suggestions", type="primary"):
            try:
                profile = TaxProfile(
                    annual_income=parse_number(income, "annual_income"),
                    current_deductions=parse_number(deductions, "current_deductions"),
                    employment_type=employment,
                    age_group=age_group,
                    regime=regime,
                )
            except (InvalidInput, ValueError) as e:
                st.error(f"Please enter a valid annual income and deductions: {e}")
            else:
                with st.spinner("Calculating..."):
                    resp, _ = run_query(user_text="tax suggestions", source_tab="tax", extra_state={"tax_profile": profile})
                st.session_state["tax_agent_response"] = resp

    with col_r:
        resp = st.session_state.get("tax_agent_response")
        if not resp:
            st.info("Enter your details to get tax suggestions.")
            return
        if resp.error:
            st.error(resp.answer_md)
            return

        report = resp.data["report"]
        a, b, c = st.columns(3)
        a.metric("Tax before", format_currency(report["tax_before"]))
        b.metric("Tax after", format_currency(report["tax_after"]))
        c.metric("Potential savings", format_currency(report["potential_savings"]))

        rows = [
            {"Priority": s["priority"], "Section": s["section"], "Suggestion": s["title"], "Saving": s["saving_amount"]}
            for s in report["suggestions"]
        ]
        if rows:
            st.dataframe(pd.DataFrame(rows), use_container_width=True, hide_index=True)
        st.markdown(resp.answer_md)
