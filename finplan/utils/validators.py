from __future__ import annotations

import re
from datetime import date
from typing import Any, Optional

from pydantic import ValidationError

from finplan.utils.catalog_loader import load_funds
from finplan.utils.catalog_models import ValidationReport
from finplan.utils.quant_engine import InvalidInput
from finplan.utils.quant_models import GoalInput, ProjectionInput

# matched after the rupee sign, grouping commas and "%" are stripped
_NUMBER_RE = re.compile(r"^[+-]?\d+(\.\d+)?$")


def parse_number(raw: Any, field: str) -> float:
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return float(raw)
    text = str(raw if raw is not None else "").strip()
    text = text.replace("₹", "").replace("Rs.", "").replace(",", "").replace("%", "").strip()
    if not text:
        raise InvalidInput(f"{field} is required")
    if not _NUMBER_RE.match(text):
        raise InvalidInput(f"{field} must be a number, got {raw!r}")
    return float(text)


def _first_error(e: ValidationError) -> str:
    err = e.errors()[0]
    loc = ".".join(str(p) for p in err.get("loc", ()))
    return f"{loc}: {err.get('msg')}" if loc else str(err.get("msg"))


def parse_projection_input(monthly_contribution: Any, annual_rate_pct: Any, horizon_years: Any) -> ProjectionInput:
    """Form text -> ProjectionInput. Horizon is entered in years."""
    years = parse_number(horizon_years, "horizon_years")
    if years != int(years):
        raise InvalidInput(f"horizon_years must be a whole number, got {horizon_years!r}")
    try:
        return ProjectionInput(
            monthly_contribution=parse_number(monthly_contribution, "monthly_contribution"),
            annual_rate_pct=parse_number(annual_rate_pct, "annual_rate_pct"),
            horizon_months=int(years) * 12,
        )
    except ValidationError as e:
        raise InvalidInput(_first_error(e)) from e


def parse_goal_form(
    *,
    goal_name: Any,
    goal_amount: Any,
    target_year: Any,
    monthly_contribution: Any,
    annual_rate_pct: Any,
    current_year: Optional[int] = None,
) -> GoalInput:
    name = str(goal_name or "").strip()
    if not name:
        raise InvalidInput("goal_name is required")

    this_year = current_year if current_year is not None else date.today().year
    year = parse_number(target_year, "target_year")
    if year != int(year):
        raise InvalidInput(f"target_year must be a whole year, got {target_year!r}")
    years_to_target = int(year) - this_year
    if years_to_target <= 0:
        raise InvalidInput("Target year must be in the future")

    try:
        return GoalInput(
            goal_name=name,
            goal_amount=parse_number(goal_amount, "goal_amount"),
            monthly_contribution=parse_number(monthly_contribution, "monthly_contribution"),
            annual_rate_pct=parse_number(annual_rate_pct, "annual_rate_pct"),
            horizon_months=years_to_target * 12,
            start_year=this_year,
        )
    except ValidationError as e:
        raise InvalidInput(_first_error(e)) from e


def validate_fund_catalog(catalog_path: str) -> ValidationReport:
    report = ValidationReport(ok=True)

    try:
        funds = load_funds(catalog_path)
    except (OSError, ValueError) as e:
        report.add_error(str(e), location=catalog_path)
        return report.finalize()

    if not funds:
        report.add_warning("Fund catalogue is empty; recommendations will be empty.", location=catalog_path)

    seen_ids = set()
    for f in funds:
        if f.id in seen_ids:
            report.add_error(f"Duplicate fund id: {f.id}", location=catalog_path)
        seen_ids.add(f.id)

        if f.expense_ratio_pct < 0:
            report.add_error(f"Negative expense ratio for {f.name}", location=f.id)
        elif f.expense_ratio_pct > 2.5:
            report.add_warning(f"Expense ratio above 2.5% for {f.name}", location=f.id)
        if f.aum_crore < 0:
            report.add_error(f"Negative AUM for {f.name}", location=f.id)
        if f.five_year_return_pct < 0 or f.three_year_return_pct < 0:
            report.add_warning(f"Negative trailing return for {f.name}", location=f.id)
        if not f.note:
            report.add_warning(f"Fund has no note: {f.name}", location=f.id)

    tiers = {f.risk_tier for f in funds}
    for tier in ("Low", "Medium", "High"):
        if funds and tier not in tiers:
            report.add_warning(f"No fund in the {tier} tier", location=catalog_path)

    return report.finalize()
