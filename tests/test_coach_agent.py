import pytest

from finplan.agents.coach_agent import (
    DEFAULT_RESPONSE,
    SUGGESTED_QUESTIONS,
    WELCOME_MESSAGE,
    CoachAgent,
    match_rule,
)
from finplan.core.schemas import AgentRequest


def _ask(text):
    return CoachAgent().run(AgentRequest(request_id="r", session_id="s", user_text=text))


@pytest.mark.parametrize(
    "text,rule",
    [
        ("How much should I save to retire by 50?", "retirement"),
        ("Is RETIREMENT planning hard?", "retirement"),
        ("What's the impact of taking a loan now?", "loan"),
        ("Should I borrow from family?", "loan"),
        ("I have credit card debt", "loan"),
        ("What are tax-saving strategies?", "tax"),
        ("How should I start investing?", "invest"),
        ("Help me create a budget", "budget"),
        ("my spending is out of control", "budget"),
        ("how do I save money", "budget"),
    ],
)
def test_rule_matching(text, rule):
    assert match_rule(text).name == rule


def test_first_matching_rule_wins():
    assert match_rule("tax on my loan").name == "loan"
    assert match_rule("retire early and invest").name == "retirement"


def test_no_match_falls_back_to_default():
    assert match_rule("hello there") is None
    out = _ask("hello there")
    assert out.answer_md == DEFAULT_RESPONSE
    assert out.confidence == "low"
    assert out.data["rule"] is None


def test_matched_reply():
    out = _ask("What are tax-saving strategies?")
    assert out.agent_name == "coach_agent"
    assert "80C" in out.answer_md
    assert out.data["rule"] == "tax"


def test_empty_question_gets_welcome():
    out = _ask("   ")
    assert out.answer_md == WELCOME_MESSAGE
    assert out.data["suggested_questions"] == list(SUGGESTED_QUESTIONS)


def test_suggested_questions_all_match_a_rule():
    assert all(match_rule(q) is not None for q in SUGGESTED_QUESTIONS)
