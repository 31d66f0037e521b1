from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from finplan.tools.quant_tools import (
    tool_evaluate_goal,
    tool_optimize_tax,
    tool_project,
    tool_recommend_funds,
    tool_sip_milestones,
)


def main():
    proj = tool_project({"monthly_contribution": "5000", "annual_rate_pct": "12", "horizon_years": "3"})
    print("Final value:", round(proj["final_value"], 2))
    print("Total invested:", proj["total_invested"])
    for p in proj["year_series"]:
        print("  ", p["year"], p["accumulated_value"])

    goal = {
        "goal_name": "Car",
        "goal_amount": "1000000",
        "monthly_contribution": "10000",
        "annual_rate_pct": "8",
        "target_year": 2030,
        "start_year": 2026,
    }
    out = tool_evaluate_goal(goal)
    print("Reached:", out["reached"], "year:", out["year_goal_is_reached"], "months:", out["months_needed"])
    print("Required monthly for target:", out["required_monthly_for_target"])

    for m in tool_sip_milestones({"monthly_contribution": 5000, "annual_rate_pct": 12}):
        print("Milestone:", m["years"], m["projected_value"], m["total_invested"])

    recs = tool_recommend_funds({"risk_tier": "Low"})
    for f in recs["funds"]:
        print("Fund:", f["name"], f["five_year_return_pct"])

    tax = tool_optimize_tax({"annual_income": 1000000, "regime": "Old Regime"})
    print("Tax before/after:", tax["tax_before"], tax["tax_after"])
    print("Regimes:", tax["regime_comparison"])

if __name__ == "__main__":
    main()
