import streamlit as st

from finplan.core.schemas import AgentResponse
from finplan.utils.fund_filter import CATEGORY_TABS, filter_by_category
from finplan.utils.catalog_models import FundRecord
from finplan.utils.quant_engine import InvalidInput
from finplan.utils.validators import parse_projection_input
from finplan.web_app.agent_helpers import run_query
from finplan.web_app.ui_helpers import _render_fund_cards, _render_milestones

RISK_LABELS = {
    "Low": "Conservative (Low Risk)",
    "Medium": "Moderate (Medium Risk)",
    "High": "Aggressive (High Risk)",
}


def render():
    st.subheader("Mutual Fund Recommendations")
    st.caption("Get mutual fund suggestions based on your investment profile.")

    profile = st.session_state["user_profile"]
    col_l, col_r = st.columns([0.45, 0.55], gap="large")

    with col_l:
        monthly = st.slider("Monthly Investment Amount (₹)", min_value=1000, max_value=50000, value=5000, step=1000)
        tiers = list(RISK_LABELS)
        tier = st.selectbox(
            "Risk Profile", options=tiers, index=tiers.index(profile.risk_tier),
            format_func=lambda t: RISK_LABELS[t],
        )
        rate = st.slider("Expected Annual Return (%)", min_value=6.0, max_value=18.0, value=12.0, step=0.5)

        if st.button("Get Recommendations", type="primary"):
            try:
                # horizon is not used for recommendations; milestones carry their own
                inp = parse_projection_input(monthly, rate, 1)
            except InvalidInput as e:
                st.error(str(e))
            else:
                resp, _ = run_query(
                    user_text="recommend funds",
                    source_tab="funds",
                    extra_state={"projection": inp, "payload": {"risk_tier": tier}},
                )
                st.session_state["_funds_resp"] = resp
                st.toast("Recommendations generated based on your profile")

    resp: AgentResponse = st.session_state.get("_funds_resp")
    with col_r:
        if not resp:
            st.info("Fill in your investment details and click Get Recommendations to see your projected returns.")
        elif resp.error:
            st.error(resp.answer_md)
        else:
            _render_milestones(resp.data.get("milestones") or [], profile.currency_symbol)
            st.info(resp.data["recommendations"]["allocation_guidance"])

    if resp and not resp.error:
        st.markdown("#### Recommended Funds")
        tab = st.radio("Category", options=list(CATEGORY_TABS), horizontal=True, format_func=str.title)
        funds = [FundRecord(**f) for f in resp.data["recommendations"]["funds"]]
        _render_fund_cards([f.model_dump() for f in filter_by_category(funds, tab)], profile.currency_symbol)
        st.caption(
            "Past performance is not indicative of future results. Mutual fund investments are subject to "
            "market risks. Read all scheme-related documents carefully before investing."
        )
