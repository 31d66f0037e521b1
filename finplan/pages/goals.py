from datetime import date
from typing import Optional

import streamlit as st

from finplan.core.config import SETTINGS
from finplan.core.schemas import AgentResponse
from finplan.utils.quant_engine import InvalidInput
from finplan.utils.validators import parse_goal_form
from finplan.web_app.agent_helpers import run_query
from finplan.web_app.ui_helpers import _render_projection_chart

TIPS = (
    ("Start Early", "The earlier you start investing, the more time your money has to grow through compound interest."),
    ("Diversify Your Portfolio", "Spread your investments across different asset classes to reduce risk and potentially increase returns."),
    ("Consistency is Key", "Regular investments, even in small amounts, can lead to significant wealth over time through rupee-cost averaging."),
)


def render():
    st.subheader("Goal Planner")
    st.caption("Calculate how to achieve your financial goals.")

    this_year = date.today().year
    col_l, col_r = st.columns([0.45, 0.55], gap="large")

    with col_l:
        goal_name = st.text_input("What do you want to buy?", placeholder="e.g., Car, House, Vacation")
        goal_amount = st.text_input("Budget (₹)", placeholder="e.g., 500000")
        target_year = st.selectbox("Target Year to Buy", options=list(range(this_year + 1, this_year + 31)))
        monthly = st.slider("Monthly Investment (₹)", min_value=1000, max_value=50000, value=10000, step=1000)
        rate = st.slider(
            "Expected Annual Return (%)", min_value=5.0, max_value=15.0,
            value=float(SETTINGS.default_rate_pct), step=0.5,
        )

        if st.button("Calculate", type="primary"):
            try:
                goal = parse_goal_form(
                    goal_name=goal_name,
                    goal_amount=goal_amount,
                    target_year=target_year,
                    monthly_contribution=monthly,
                    annual_rate_pct=rate,
                    current_year=this_year,
                )
            except InvalidInput as e:
                st.error(str(e))
            else:
                resp, _ = run_query(user_text="goal projection", source_tab="goals", extra_state={"goal": goal})
                st.session_state["_goal_resp"] = resp

    with col_r:
        resp: Optional[AgentResponse] = st.session_state.get("_goal_resp")
        if not resp:
            st.info("Fill in your goal details and click Calculate to see your investment projection.")
        else:
            if resp.error:
                st.error(resp.answer_md)
            else:
                outcome = resp.data.get("outcome") or {}
                st.markdown(resp.answer_md)
                st.progress(min(1.0, float(outcome.get("progress_pct", 0.0)) / 100.0))
                _render_projection_chart(
                    (outcome.get("projection") or {}).get("year_series") or [],
                    goal_amount=outcome.get("goal_amount"),
                )
            if st.button("Recalculate"):
                st.session_state.pop("_goal_resp", None)
                st.rerun()

    st.divider()
    st.markdown("#### Investment Tips")
    for col, (title, body) in zip(st.columns(len(TIPS)), TIPS):
        with col:
            st.markdown(f"**{title}**")
            st.caption(body)
