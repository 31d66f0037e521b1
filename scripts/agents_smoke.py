from __future__ import annotations

import sys
import uuid
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from finplan.agents.coach_agent import CoachAgent
from finplan.agents.fund_agent import FundAgent
from finplan.agents.goal_agent import GoalAgent
from finplan.agents.tax_agent import TaxAgent
from finplan.core.schemas import AgentRequest, AgentResponse, UserProfile
from finplan.utils.quant_models import GoalInput, ProjectionInput
from finplan.utils.tax_engine import TaxProfile


def mk_req(user_text: str, up: UserProfile, turn_id: int, **extra) -> AgentRequest:
    return AgentRequest(
        request_id=str(uuid.uuid4()),
        session_id="smoke-session",
        turn_id=turn_id,
        user_text=user_text,
        user_profile=up,
        **extra,
    )


def _print_resp(title: str, resp: AgentResponse) -> None:
    print(f"--- {title} ---")
    print(resp.answer_md[:800])
    if resp.warnings:
        print("warnings:", resp.warnings)
    if resp.error:
        print("error:", resp.error)


def main():
    up = UserProfile()
    t = 1

    print("=== Goal ===")
    goal = GoalInput(goal_name="House", goal_amount=5000000, monthly_contribution=10000, annual_rate_pct=8, horizon_months=120)
    _print_resp("Goal", GoalAgent().run(mk_req("goal", up, t, goal=goal))); t += 1

    print("\n=== Funds ===")
    proj = ProjectionInput(monthly_contribution=5000, annual_rate_pct=12, horizon_months=12)
    _print_resp("Funds", FundAgent().run(mk_req("funds", up, t, projection=proj))); t += 1

    print("\n=== Tax ===")
    _print_resp("Tax", TaxAgent().run(mk_req("tax", up, t, tax_profile=TaxProfile(annual_income=1200000)))); t += 1

    print("\n=== Coach ===")
    _print_resp("Coach", CoachAgent().run(mk_req("How should I plan for retirement?", up, t)))

if __name__ == "__main__":
    main()
