from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List

_COMPACT_UNITS = (
    (Decimal(10_000_000), "Cr"),
    (Decimal(100_000), "L"),
    (Decimal(1_000), "K"),
)


def _group_indian(digits: str) -> str:
    # 1234567 -> 12,34,567: last three digits, then pairs
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_currency(amount: Any, symbol: str = "₹") -> str:
    """Whole-rupee amount with Indian digit grouping, e.g. ``₹12,34,567``."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        value = Decimal(0)
    if not value.is_finite():
        value = Decimal(0)
    rounded = int(value.to_integral_value(rounding=ROUND_HALF_UP))
    sign = "-" if rounded < 0 else ""
    return f"{sign}{symbol}{_group_indian(str(abs(rounded)))}"


def format_compact(amount: Any, symbol: str = "₹") -> str:
    value = Decimal(str(amount))
    sign = "-" if value < 0 else ""
    value = abs(value)
    for size, unit in _COMPACT_UNITS:
        if value >= size:
            return f"{sign}{symbol}{value / size:.1f}{unit}"
    return f"{sign}{symbol}{int(value.to_integral_value(rounding=ROUND_HALF_UP))}"


def format_pct(value: Any, digits: int = 1) -> str:
    return f"{float(value):.{digits}f}%"


def format_goal_md(outcome: Dict[str, Any], symbol: str = "₹") -> str:
    """Markdown summary of a GoalOutcome dump."""
    name = outcome.get("goal_name") or "your goal"
    goal = outcome.get("goal_amount", 0.0)
    value = outcome.get("value_at_target_year", 0.0)
    proj = outcome.get("projection") or {}
    monthly = proj.get("monthly_contribution", 0.0)
    rate = proj.get("annual_rate_pct", 0.0)

    if outcome.get("reached"):
        headline = "### Congratulations! You can achieve your goal."
        detail = (
            f"If you invest {format_currency(monthly, symbol)} monthly at {format_pct(rate)} annual return, "
            f"you can afford **{name}** by **{outcome.get('target_year')}**."
        )
    elif outcome.get("year_goal_is_reached") is not None:
        headline = "### You'll need more time or money to achieve your goal."
        detail = (
            f"With your current plan, you'll reach your goal by **{outcome['year_goal_is_reached']}**. "
            "Consider increasing your monthly investment."
        )
    else:
        headline = "### This goal is out of reach with the current plan."
        detail = "Your contributions do not reach the goal within the planning window. Increase the monthly investment or lower the target."

    lines = [
        headline,
        detail,
        "",
        f"- Progress to goal: **{format_currency(value, symbol)} / {format_currency(goal, symbol)}** ({format_pct(outcome.get('progress_pct', 0.0))})",
        f"- Total investment: **{format_currency(proj.get('total_invested', 0.0), symbol)}**",
        f"- Returns generated: **{format_currency(proj.get('returns_generated', 0.0), symbol)}**",
    ]
    required = outcome.get("required_monthly_for_target")
    if required:
        lines.append(
            f"- Monthly investment needed to reach the goal by {outcome.get('target_year')}: "
            f"**{format_currency(required, symbol)}**"
        )
    return "\n".join(lines)


def format_funds_md(funds: List[Dict[str, Any]]) -> str:
    if not funds:
        return "No funds match the selected profile."
    lines = ["| Fund | Category | Risk | 3Y | 5Y | Expense |", "|---|---|---|---|---|---|"]
    for f in funds:
        lines.append(
            f"| {f['name']} | {f['category']} | {f['risk_tier']} | "
            f"{format_pct(f['three_year_return_pct'])} | {format_pct(f['five_year_return_pct'])} | "
            f"{format_pct(f['expense_ratio_pct'], 2)} |"
        )
    return "\n".join(lines)
