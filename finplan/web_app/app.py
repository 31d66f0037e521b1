import streamlit as st
import uuid
from finplan.core.config import SETTINGS
from finplan.utils.logging import setup_logging
from finplan.core.schemas import UserProfile
from finplan.pages import chat, funds, goals, tax

# Setup logging
setup_logging(SETTINGS.log_level)

st.set_page_config(page_title="Financial Planner", layout="wide")

# Session initialization
def _init_session() -> None:
    st.session_state.setdefault("session_id", str(uuid.uuid4()))
    st.session_state.setdefault("turn_id", 0)
    st.session_state.setdefault("chat", [])  # list[dict]
    st.session_state.setdefault("user_profile", UserProfile(currency_symbol=SETTINGS.currency_symbol))

_init_session()

# Sidebar for user profile
with st.sidebar:
    st.subheader("Profile")
    up: UserProfile = st.session_state["user_profile"]

    up.name = st.text_input("Name (optional)", value=up.name or "") or None
    up.risk_tier = st.selectbox("Risk tier", ["Low", "Medium", "High"], index=["Low", "Medium", "High"].index(up.risk_tier))
    up.currency_symbol = st.text_input("Currency symbol", value=up.currency_symbol)
    st.session_state["user_profile"] = up

    st.divider()
    st.caption(f"Session: {st.session_state['session_id']}")
    st.caption(f"Turn: {st.session_state['turn_id']}")

# Main UI
st.title("Financial Planner")

tab_goals, tab_funds, tab_tax, tab_coach = st.tabs(["Goals", "Funds", "Tax", "Coach"])

with tab_goals:
    goals.render()

with tab_funds:
    funds.render()

with tab_tax:
    tax.render()

with tab_coach:
    chat.render()
