from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional

from pydantic import ValidationError

from finplan.core.config import SETTINGS
from finplan.utils.catalog_loader import load_funds
from finplan.utils.catalog_models import FundRecord
from finplan.utils.fund_filter import allocation_guidance, filter_by_category, normalize_tier, recommend
from finplan.utils.quant_engine import InvalidInput, evaluate, project, sip_milestones
from finplan.utils.quant_models import GoalInput, ProjectionInput
from finplan.utils.tax_engine import TaxProfile, compare_regimes, optimize_tax

_ALIASES = {
    "monthly_investment": "monthly_contribution",
    "sip": "monthly_contribution",
    "expected_return": "annual_rate_pct",
    "expected_return_pct": "annual_rate_pct",
    "rate_pct": "annual_rate_pct",
    "target_amount": "goal_amount",
    "budget": "goal_amount",
    "risk_profile": "risk_tier",
    "risk_tolerance": "risk_tier",
    "income": "annual_income",
    "tax_regime": "regime",
    "deductions": "current_deductions",
}


def _whole_months(years: Any, field: str) -> int:
    try:
        months = Decimal(str(years).strip()) * 12
    except InvalidOperation as e:
        raise InvalidInput(f"{field} must be a number, got {years!r}") from e
    if not months.is_finite() or months != months.to_integral_value():
        raise InvalidInput(f"{field} must be a whole number of months, got {years!r}")
    return int(months)


def _canonical(payload: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    p = dict(payload or {})
    for alias, field in _ALIASES.items():
        if field not in p and alias in p:
            p[field] = p.pop(alias)

    if "horizon_months" in p:
        return p
    if "horizon_years" in p:
        p["horizon_months"] = _whole_months(p.pop("horizon_years"), "horizon_years")
    elif "years" in p:
        p["horizon_months"] = _whole_months(p.pop("years"), "years")
    elif "target_year" in p:
        try:
            start = int(p.get("start_year") or date.today().year)
            p["start_year"] = start
            p["horizon_months"] = (int(p.pop("target_year")) - start) * 12
        except (TypeError, ValueError) as e:
            raise InvalidInput(f"horizon could not be read from payload: {e}") from e
    return p


def _model(cls, payload: Dict[str, Any]):
    try:
        return cls.model_validate(payload)
    except ValidationError as e:
        err = e.errors()[0]
        loc = ".".join(str(x) for x in err.get("loc", ()))
        raise InvalidInput(f"{loc}: {err.get('msg')}") from e


def tool_project(payload: Dict[str, Any], *, start_year: Optional[int] = None) -> Dict[str, Any]:
    p = _canonical(payload)
    inp: ProjectionInput = _model(ProjectionInput, p)
    out = project(
        inp.monthly_contribution,
        inp.annual_rate_pct,
        inp.horizon_months,
        start_year=start_year if start_year is not None else p.get("start_year"),
    )
    return out.model_dump()


def tool_evaluate_goal(payload: Dict[str, Any]) -> Dict[str, Any]:
    g: GoalInput = _model(GoalInput, _canonical(payload))
    out = evaluate(
        g.goal_amount,
        g.monthly_contribution,
        g.annual_rate_pct,
        g.horizon_months,
        start_year=g.start_year,
        max_search_years=SETTINGS.max_search_years,
        goal_name=g.goal_name,
    )
    return out.model_dump()


def tool_sip_milestones(payload: Dict[str, Any], years: Optional[Iterable[int]] = None) -> List[Dict[str, Any]]:
    p = _canonical(payload)
    rows = sip_milestones(
        p.get("monthly_contribution"),
        p.get("annual_rate_pct", SETTINGS.default_rate_pct),
        years or SETTINGS.milestone_years,
    )
    return [r.model_dump() for r in rows]


def tool_recommend_funds(
    payload: Dict[str, Any],
    funds: Optional[List[FundRecord]] = None,
) -> Dict[str, Any]:
    p = _canonical(payload)
    tier = normalize_tier(p.get("risk_tier") or "Medium")
    catalogue = funds if funds is not None else load_funds(SETTINGS.fund_catalog)

    picks = recommend(catalogue, tier, limit=int(p.get("limit") or SETTINGS.max_recommendations))
    picks = filter_by_category(picks, p.get("category") or "all")
    return {
        "risk_tier": tier,
        "funds": [f.model_dump() for f in picks],
        "allocation_guidance": allocation_guidance(tier),
    }


def tool_optimize_tax(payload: Dict[str, Any]) -> Dict[str, Any]:
    profile: TaxProfile = _model(TaxProfile, _canonical(payload))
    report = optimize_tax(profile, cess_pct=SETTINGS.tax_cess_pct)
    out = report.model_dump()
    out["regime_comparison"] = compare_regimes(profile, cess_pct=SETTINGS.tax_cess_pct)
    return out
