from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from finplan.agents.base_agent import BaseAgent
from finplan.core.schemas import AgentRequest, AgentResponse
from finplan.utils.logging import agent_context, get_logger

logger = get_logger("coach_agent")

WELCOME_MESSAGE = "Hello! I'm your Financial Coach. How can I help you today?"

SUGGESTED_QUESTIONS: Tuple[str, ...] = (
    "How much should I save to retire by 50?",
    "What's the impact of taking a loan now?",
    "What are tax-saving strategies?",
    "How should I start investing?",
    "Help me create a budget",
)


@dataclass(frozen=True)
class CoachRule:
    name: str
    triggers: Tuple[str, ...]
    response: str

    def matches(self, text: str) -> bool:
        return any(t in text for t in self.triggers)


# Evaluated top-down, first match wins: "tax on my loan" answers as a loan question.
RULES: Tuple[CoachRule, ...] = (
    CoachRule(
        name="retirement",
        triggers=("retire",),
        response=(
            "To retire comfortably by 50, you should aim to have savings of at least 25-30 times your annual "
            "expenses. Start by maximizing your retirement contributions early, diversify your investments, and "
            "consider a mix of equity and debt funds based on your risk tolerance. Creating additional passive "
            "income streams can also help you reach your goal faster."
        ),
    ),
    CoachRule(
        name="loan",
        triggers=("loan", "borrow", "debt"),
        response=(
            "Taking a loan now could impact your long-term financial goals. Consider factors like interest rates, "
            "loan tenure, and how the EMIs will affect your monthly cash flow. As a rule of thumb, your total EMIs "
            "shouldn't exceed 40% of your monthly income. Also, evaluate whether the loan is for an appreciating "
            "asset (like property) or a depreciating one (like a vehicle)."
        ),
    ),
    CoachRule(
        name="tax",
        triggers=("tax",),
        response=(
            "Some effective tax-saving strategies include: 1) Maximizing your 80C investments (up to ₹1.5 lakhs) "
            "through ELSS funds, PPF, or NPS. 2) Utilizing the ₹50,000 additional NPS benefit under 80CCD(1B). "
            "3) Claiming deductions for health insurance premiums under 80D. 4) If applicable, using the new tax "
            "regime might be beneficial depending on your income structure."
        ),
    ),
    CoachRule(
        name="invest",
        triggers=("invest",),
        response=(
            "For beginners, I recommend starting with: 1) Build an emergency fund covering 6 months of expenses in "
            "a high-yield savings account. 2) Invest in index funds for equity exposure. 3) Consider tax-saving ELSS "
            "funds if you haven't exhausted your 80C limit. 4) For debt allocation, look at government bonds or "
            "high-rated corporate bond funds. Start with a 70:30 or 60:40 equity to debt ratio if you're young."
        ),
    ),
    CoachRule(
        name="budget",
        triggers=("budget", "spending", "save money"),
        response=(
            "The 50/30/20 budgeting rule is a good starting point: allocate 50% of your income to needs (rent, "
            "groceries, bills), 30% to wants (entertainment, dining), and 20% to savings and debt repayment. Track "
            "your expenses using a budgeting app, identify areas to cut back, and automate your savings to ensure "
            "consistency."
        ),
    ),
)

DEFAULT_RESPONSE = (
    "I'm your Financial Coach. I can help with retirement planning, investment strategies, tax optimization, "
    "budgeting, or any other financial questions you have. Feel free to ask me anything!"
)


def match_rule(text: str, rules: Sequence[CoachRule] = RULES) -> Optional[CoachRule]:
    lowered = (text or "").lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule
    return None


class CoachAgent(BaseAgent):
    """Canned answers from a fixed keyword table; no model involved."""

    name = "coach_agent"

    def run(self, req: AgentRequest) -> AgentResponse:
        with agent_context(self.name):
            text = (req.user_text or "").strip()
            if not text:
                return AgentResponse(
                    agent_name=self.name,
                    answer_md=WELCOME_MESSAGE,
                    data={"rule": None, "suggested_questions": list(SUGGESTED_QUESTIONS)},
                    confidence="high",
                )

            rule = match_rule(text)
            logger.info(f"coach_reply rule={rule.name if rule else 'default'}")
            return AgentResponse(
                agent_name=self.name,
                answer_md=rule.response if rule else DEFAULT_RESPONSE,
                data={"rule": rule.name if rule else None},
                confidence="high" if rule else "low",
            )
