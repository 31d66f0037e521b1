import logging

import pytest

from finplan.utils.logging import KeyValueFormatter, agent_context, agent_var, request_id_var
from finplan.web_app.agent_helpers import AGENTS, build_request, dispatch
from finplan.web_app.ui_helpers import year_series_frame


def test_every_tab_has_an_agent():
    assert set(AGENTS) == {"goals", "funds", "tax", "coach"}


def test_build_request_merges_extra_state():
    req = build_request(
        user_text="goal",
        session_id="s1",
        turn_id=3,
        extra_state={"payload": {"risk_tier": "High"}},
    )
    assert req.turn_id == 3
    assert req.payload == {"risk_tier": "High"}
    assert req.user_profile.risk_tier == "Medium"
    assert req.request_id


def test_dispatch_routes_by_tab_and_sets_log_context():
    req = build_request(user_text="how do I budget", session_id="s1", turn_id=1)
    resp = dispatch("coach", req)
    assert resp.agent_name == "coach_agent"
    assert resp.data["rule"] == "budget"
    assert request_id_var.get() == req.request_id


def test_dispatch_unknown_tab():
    req = build_request(user_text="x", session_id="s1", turn_id=1)
    with pytest.raises(KeyError):
        dispatch("portfolio", req)


def test_agent_context_resets():
    before = agent_var.get()
    with agent_context("goal_agent"):
        assert agent_var.get() == "goal_agent"
    assert agent_var.get() == before


def test_key_value_formatter():
    rec = logging.LogRecord("quant_engine", logging.INFO, __file__, 1, "project months=%d", (36,), None)
    rec.request_id, rec.session_id, rec.agent = "r1", "s1", "goal_agent"
    line = KeyValueFormatter().format(rec)
    assert "level=INFO logger=quant_engine request_id=r1 session_id=s1 agent=goal_agent" in line
    assert line.endswith("msg=project months=36")


def test_year_series_frame_labels():
    df = year_series_frame([{"year": 2024, "accumulated_value": 0}, {"year": 2025, "accumulated_value": 250000}])
    assert list(df.columns) == ["year", "accumulated_value", "label"]
    assert df["label"].tolist() == ["₹0", "₹2.5L"]
