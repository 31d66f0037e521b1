from __future__ import annotations

from typing import Any, Dict, Optional

from finplan.agents.base_agent import BaseAgent
from finplan.core.schemas import AgentRequest, AgentResponse, ErrorEnvelope
from finplan.tools.quant_tools import tool_evaluate_goal
from finplan.utils.answer_format import format_goal_md
from finplan.utils.logging import agent_context, get_logger
from finplan.utils.quant_engine import InvalidInput

logger = get_logger("goal_agent")


def _extract_goal(req: AgentRequest) -> Optional[Dict[str, Any]]:
    # Prefer structured field if present
    if req.goal is not None:
        return req.goal.model_dump()

    g = req.payload.get("goal")
    if isinstance(g, dict):
        return g

    return None


class GoalAgent(BaseAgent):
    name = "goal_agent"

    def run(self, req: AgentRequest) -> AgentResponse:
        with agent_context(self.name):
            goal = _extract_goal(req)
            if not goal:
                return AgentResponse(
                    agent_name=self.name,
                    answer_md="Please fill in the goal name, budget and target year.",
                    warnings=["MISSING_GOAL_PAYLOAD"],
                    confidence="low",
                )

            try:
                outcome = tool_evaluate_goal(goal)
            except InvalidInput as e:
                logger.warning(f"invalid_goal detail={e}")
                return self.invalid_input(str(e))
            except Exception as e:
                logger.exception("goal_evaluation_failed")
                return AgentResponse(
                    agent_name=self.name,
                    answer_md="Goal calculation failed.",
                    warnings=["AGENT_FAILED"],
                    confidence="low",
                    error=ErrorEnvelope(code="AGENT_FAILED", message=str(e)).model_dump(),
                )

            warnings = []
            if not outcome["reached"]:
                warnings.append("GOAL_NOT_REACHED_BY_TARGET_YEAR")
            if outcome.get("reason") == "unreachable":
                warnings.append("GOAL_UNREACHABLE")

            logger.info(
                f"goal_evaluated reached={outcome['reached']} "
                f"target_year={outcome['target_year']} year_reached={outcome['year_goal_is_reached']}"
            )
            return AgentResponse(
                agent_name=self.name,
                answer_md=format_goal_md(outcome, req.user_profile.currency_symbol),
                data={"outcome": outcome},
                warnings=warnings,
                confidence="high",
            )
