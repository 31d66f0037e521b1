import streamlit as st

from finplan.agents.coach_agent import SUGGESTED_QUESTIONS, WELCOME_MESSAGE
from finplan.web_app.agent_helpers import ChatTurn, run_query


def _ask(user_text: str) -> None:
    st.session_state["chat"].append({"role": "user", "content": user_text, "meta": {}})
    resp, meta = run_query(user_text=user_text, source_tab="coach")
    st.session_state["chat"].append(
        {
            "role": "assistant",
            "content": resp.answer_md,
            "meta": {"agent_name": resp.agent_name, "rule": resp.data.get("rule"), **meta},
        }
    )


def render():
    left, right = st.columns([0.68, 0.32], gap="large")

    with left:
        st.subheader("Financial Coach")

        if not st.session_state["chat"]:
            st.session_state["chat"].append({"role": "assistant", "content": WELCOME_MESSAGE, "meta": {}})

        for t in st.session_state["chat"]:
            turn = ChatTurn(**t)
            with st.chat_message(turn.role):
                st.markdown(turn.content)

        user_text = st.chat_input("Type your financial question...")
        if user_text and user_text.strip():
            _ask(user_text)
            st.rerun()

    with right:
        st.subheader("Suggested Questions")
        for i, q in enumerate(SUGGESTED_QUESTIONS):
            if st.button(q, key=f"suggested_{i}", use_container_width=True):
                _ask(q)
                st.rerun()

        st.divider()
        st.caption(
            "Answers come from a fixed set of rules of thumb. Consult a professional financial advisor "
            "for complex decisions."
        )
        if st.button("Clear conversation"):
            st.session_state["chat"] = []
            st.rerun()
