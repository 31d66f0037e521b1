from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import streamlit as st

from finplan.agents.base_agent import BaseAgent
from finplan.agents.coach_agent import CoachAgent
from finplan.agents.fund_agent import FundAgent
from finplan.agents.goal_agent import GoalAgent
from finplan.agents.tax_agent import TaxAgent
from finplan.core.schemas import AgentRequest, AgentResponse, ChatMessage, UserProfile
from finplan.utils.logging import get_logger, set_log_context

logger = get_logger("agent_helpers")

AGENTS: Dict[str, BaseAgent] = {
    "goals": GoalAgent(),
    "funds": FundAgent(),
    "tax": TaxAgent(),
    "coach": CoachAgent(),
}


@dataclass
class ChatTurn:
    role: str
    content: str
    meta: Dict[str, Any] = field(default_factory=dict)


def _mk_messages() -> List[ChatMessage]:
    msgs = []
    for t in st.session_state.get("chat", []):
        role = t.get("role")
        content = t.get("content")
        if role and content:
            msgs.append(ChatMessage(role=role, content=content))
    return msgs


def build_request(
    *,
    user_text: str,
    session_id: str,
    turn_id: int,
    user_profile: Optional[UserProfile] = None,
    extra_state: Optional[Dict[str, Any]] = None,
    messages: Optional[List[ChatMessage]] = None,
) -> AgentRequest:
    state: Dict[str, Any] = {
        "request_id": str(uuid.uuid4()),
        "session_id": session_id,
        "turn_id": turn_id,
        "user_text": user_text,
        "user_profile": user_profile or UserProfile(),
        "messages": messages or [],
    }
    if extra_state:
        state.update(extra_state)
    return AgentRequest(**state)


def dispatch(source_tab: str, req: AgentRequest) -> AgentResponse:
    agent = AGENTS.get(source_tab)
    if agent is None:
        raise KeyError(f"No agent for tab {source_tab!r}; expected one of {sorted(AGENTS)}")
    set_log_context(request_id=req.request_id, session_id=req.session_id)
    return agent.run(req)


def run_query(
    *,
    user_text: str,
    source_tab: str,
    extra_state: Optional[Dict[str, Any]] = None,
) -> Tuple[AgentResponse, Dict[str, Any]]:
    """Single entry point for all tabs; the tab decides the agent."""
    turn_id = int(st.session_state.get("turn_id") or 0) + 1
    st.session_state["turn_id"] = turn_id

    req = build_request(
        user_text=user_text,
        session_id=st.session_state.get("session_id") or "local",
        turn_id=turn_id,
        user_profile=st.session_state.get("user_profile") or UserProfile(),
        extra_state=extra_state,
        messages=_mk_messages(),
    )
    resp = dispatch(source_tab, req)
    meta = {"request_id": req.request_id, "tab": source_tab, "turn_id": turn_id}
    return resp, meta
