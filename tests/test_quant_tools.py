import pytest

from finplan.tools.quant_tools import (
    tool_evaluate_goal,
    tool_optimize_tax,
    tool_project,
    tool_recommend_funds,
    tool_sip_milestones,
)
from finplan.utils.quant_engine import InvalidInput


def test_project_accepts_aliases_and_years():
    out = tool_project({"sip": "5000", "expected_return": "12", "years": 3}, start_year=2024)
    assert out["horizon_months"] == 36
    assert len(out["year_series"]) == 4


def test_project_invalid_payload():
    with pytest.raises(InvalidInput):
        tool_project({"monthly_contribution": 5000, "annual_rate_pct": 12})
    with pytest.raises(InvalidInput):
        tool_project({"monthly_contribution": 5000, "annual_rate_pct": 12, "years": "soon"})


def test_evaluate_goal_from_target_year():
    out = tool_evaluate_goal(
        {"budget": 10_000_000, "monthly_investment": 5000, "rate_pct": 12, "target_year": 2027, "start_year": 2024}
    )
    assert out["target_year"] == 2027
    assert out["year_goal_is_reached"] == 2050


def test_sip_milestones_tool():
    rows = tool_sip_milestones({"monthly_contribution": 5000, "annual_rate_pct": 12}, years=[1])
    assert rows == [
        {"years": 1, "projected_value": rows[0]["projected_value"], "total_invested": 60000,
         "returns_generated": rows[0]["projected_value"] - 60000}
    ]


def test_recommend_funds_category_after_limit():
    out = tool_recommend_funds({"risk_profile": "Medium", "category": "debt"})
    assert out["risk_tier"] == "Medium"
    assert [f["id"] for f in out["funds"]] == ["9"]
    assert out["allocation_guidance"]


def test_optimize_tax_tool_adds_comparison():
    out = tool_optimize_tax({"income": 1_000_000, "tax_regime": "New Regime"})
    assert out["regime"] == "New Regime"
    assert out["regime_comparison"] == {"Old Regime": 106600, "New Regime": 62400}


def test_fractional_month_horizon_rejected():
    with pytest.raises(InvalidInput, match="whole number of months"):
        tool_project({"monthly_contribution": 5000, "annual_rate_pct": 12, "horizon_years": "2.55"})
    with pytest.raises(InvalidInput):
        tool_evaluate_goal({"goal_amount": 100000, "monthly_contribution": 5000, "years": 1.01})


def test_half_year_horizon_is_whole_months():
    out = tool_project({"monthly_contribution": 5000, "annual_rate_pct": 12, "horizon_years": "2.5"}, start_year=2024)
    assert out["horizon_months"] == 30
