from __future__ import annotations

from datetime import date
from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation, getcontext
from typing import Iterable, List, Optional, Tuple

from finplan.utils.logging import get_logger
from finplan.utils.quant_models import GoalOutcome, MilestoneRow, ProjectionResult, YearPoint

getcontext().prec = 28

logger = get_logger("quant_engine")

DEFAULT_MAX_SEARCH_YEARS = 100
MAX_RATE_PCT = Decimal(100)

# Values this close to the goal count as reaching it; absorbs the float
# round trip of a projected value fed back in as a goal.
REACH_TOLERANCE = Decimal("0.005")


class PlannerError(Exception):
    pass


class InvalidInput(PlannerError, ValueError):
    pass


class UnreachableGoal(PlannerError):
    pass


class DivisionSingularity(PlannerError):
    pass


def _d(x, field: str = "value") -> Decimal:
    if isinstance(x, bool):
        raise InvalidInput(f"{field} must be a number, got {x!r}")
    if isinstance(x, Decimal):
        val = x
    else:
        try:
            val = Decimal(str(x).strip())
        except (InvalidOperation, ValueError, TypeError):
            raise InvalidInput(f"{field} must be a number, got {x!r}") from None
    if not val.is_finite():
        raise InvalidInput(f"{field} must be finite, got {x!r}")
    return val


def _months(x, field: str = "horizon_months") -> int:
    m = _d(x, field)
    if m != m.to_integral_value():
        raise InvalidInput(f"{field} must be a whole number of months, got {x!r}")
    n = int(m)
    if n <= 0:
        raise InvalidInput(f"{field} must be positive, got {x!r}")
    return n


def _validate(monthly_contribution, annual_rate_pct, horizon_months) -> Tuple[Decimal, Decimal, int]:
    p = _d(monthly_contribution, "monthly_contribution")
    if p <= 0:
        raise InvalidInput(f"monthly_contribution must be positive, got {monthly_contribution!r}")
    rate = _d(annual_rate_pct, "annual_rate_pct")
    if rate < 0 or rate > MAX_RATE_PCT:
        raise InvalidInput(f"annual_rate_pct must be within 0..100, got {annual_rate_pct!r}")
    return p, rate, _months(horizon_months)


def _round_rupee(x: Decimal) -> int:
    return int(x.to_integral_value(rounding=ROUND_HALF_UP))


def _ceil(x: Decimal) -> int:
    # drop precision noise like 36.000000000000000001 before rounding up
    return int(x.quantize(Decimal("1e-9")).to_integral_value(rounding=ROUND_CEILING))


def _monthly_rate(annual_rate_pct: Decimal) -> Decimal:
    return annual_rate_pct / Decimal(100) / Decimal(12)


def _annuity_due_fv(p: Decimal, mr: Decimal, n: int) -> Decimal:
    if mr == 0:
        raise DivisionSingularity("annuity factor is undefined at a zero monthly rate")
    growth = Decimal(1) + mr
    return p * ((growth ** n - Decimal(1)) / mr) * growth


def _future_value(p: Decimal, mr: Decimal, n: int) -> Decimal:
    if n <= 0:
        return Decimal(0)
    try:
        return _annuity_due_fv(p, mr, n)
    except DivisionSingularity:
        return p * Decimal(n)


def _inverse_annuity(goal: Decimal, p: Decimal, mr: Decimal) -> Decimal:
    # ordinary-annuity inverse: m = ln(goal*r/p + 1) / ln(1+r)
    if mr == 0:
        raise DivisionSingularity("inverse annuity is undefined at a zero monthly rate")
    growth = Decimal(1) + mr
    arg = goal * mr / p + Decimal(1)
    if arg <= 0:
        raise UnreachableGoal(f"logarithm argument {arg} is not positive")
    return arg.ln() / growth.ln()


def _solve_months(goal: Decimal, p: Decimal, mr: Decimal, max_months: int) -> Decimal:
    if p <= 0:
        raise UnreachableGoal("a goal cannot be reached without contributions")
    try:
        m = _inverse_annuity(goal, p, mr)
    except DivisionSingularity:
        m = goal / p
    if m > max_months:
        raise UnreachableGoal(f"goal needs {m:.1f} months, beyond the {max_months}-month search window")
    return m


def _projection(p: Decimal, rate: Decimal, n: int, mr: Decimal, fv: Decimal, start_year: int) -> ProjectionResult:
    series = [
        YearPoint(year=start_year + k, accumulated_value=_round_rupee(_future_value(p, mr, 12 * k)))
        for k in range(n // 12 + 1)
    ]
    invested = p * Decimal(n)
    return ProjectionResult(
        monthly_contribution=float(p),
        annual_rate_pct=float(rate),
        horizon_months=n,
        monthly_rate=float(mr),
        final_value=float(fv),
        total_invested=float(invested),
        returns_generated=float(fv - invested),
        year_series=series,
    )


def future_value(monthly_contribution, annual_rate_pct, horizon_months) -> float:
    p, rate, n = _validate(monthly_contribution, annual_rate_pct, horizon_months)
    return float(_future_value(p, _monthly_rate(rate), n))


def project(
    monthly_contribution,
    annual_rate_pct,
    horizon_months,
    *,
    start_year: Optional[int] = None,
) -> ProjectionResult:
    """Annuity-due projection of a monthly SIP.

    ``final_value`` is unrounded; ``year_series`` holds one rounded point per
    whole year from ``start_year`` (default: this year) up to the horizon.
    """
    p, rate, n = _validate(monthly_contribution, annual_rate_pct, horizon_months)
    mr = _monthly_rate(rate)
    fv = _future_value(p, mr, n)
    start = date.today().year if start_year is None else int(start_year)

    logger.debug(f"project monthly={p} rate_pct={rate} months={n} fv={fv:.2f}")
    return _projection(p, rate, n, mr, fv, start)


def solve_months_to_goal(
    goal_amount,
    monthly_contribution,
    annual_rate_pct,
    *,
    max_search_years: int = DEFAULT_MAX_SEARCH_YEARS,
) -> int:
    """Whole months of contributions needed before the projected value reaches the goal.

    Raises UnreachableGoal when there are no contributions or the answer lies
    beyond ``max_search_years``.
    """
    goal = _d(goal_amount, "goal_amount")
    if goal <= 0:
        raise InvalidInput(f"goal_amount must be positive, got {goal_amount!r}")
    p = _d(monthly_contribution, "monthly_contribution")
    rate = _d(annual_rate_pct, "annual_rate_pct")
    if rate < 0 or rate > MAX_RATE_PCT:
        raise InvalidInput(f"annual_rate_pct must be within 0..100, got {annual_rate_pct!r}")
    m = _solve_months(goal, p, _monthly_rate(rate), int(max_search_years) * 12)
    return _ceil(m)


def required_monthly_contribution(goal_amount, annual_rate_pct, horizon_months) -> float:
    goal = _d(goal_amount, "goal_amount")
    if goal <= 0:
        raise InvalidInput(f"goal_amount must be positive, got {goal_amount!r}")
    _, rate, n = _validate(1, annual_rate_pct, horizon_months)
    mr = _monthly_rate(rate)
    try:
        unit = _annuity_due_fv(Decimal(1), mr, n)
    except DivisionSingularity:
        unit = Decimal(n)
    return float(goal / unit)


def evaluate(
    goal_amount,
    monthly_contribution,
    annual_rate_pct,
    horizon_months,
    *,
    start_year: Optional[int] = None,
    max_search_years: int = DEFAULT_MAX_SEARCH_YEARS,
    goal_name: str = "My Goal",
) -> GoalOutcome:
    goal = _d(goal_amount, "goal_amount")
    if goal <= 0:
        raise InvalidInput(f"goal_amount must be positive, got {goal_amount!r}")
    p, rate, n = _validate(monthly_contribution, annual_rate_pct, horizon_months)

    mr = _monthly_rate(rate)
    fv = _future_value(p, mr, n)
    start = date.today().year if start_year is None else int(start_year)
    # year_series stops at the last whole year; a partial final year still
    # counts towards target_year
    target_year = start + _ceil(Decimal(n) / Decimal(12))
    reached = fv + REACH_TOLERANCE >= goal

    months_needed: Optional[int] = None
    year_reached: Optional[int] = None
    required: Optional[float] = None
    reason: Optional[str] = None

    if reached:
        year_reached = target_year
        m = _solve_months(goal, p, mr, max(n, int(max_search_years) * 12) + 1)
        months_needed = min(_ceil(m), n)
    else:
        required = required_monthly_contribution(goal, rate, n)
        try:
            m = _solve_months(goal, p, mr, int(max_search_years) * 12)
            months_needed = _ceil(m)
            # a missed goal is never reported as reached in the target year
            year_reached = max(start + _ceil(m / Decimal(12)), target_year + 1)
        except UnreachableGoal as e:
            reason = "unreachable"
            logger.info(f"goal_unreachable goal={goal} monthly={p} rate_pct={rate} detail={e}")

    progress = min(Decimal(100), fv / goal * Decimal(100))
    outcome = GoalOutcome(
        goal_name=goal_name,
        goal_amount=float(goal),
        reached=bool(reached),
        value_at_target_year=float(fv),
        target_year=target_year,
        year_goal_is_reached=year_reached,
        months_needed=months_needed,
        progress_pct=float(progress.quantize(Decimal("0.01"))),
        shortfall=float(max(Decimal(0), goal - fv)),
        required_monthly_for_target=required,
        reason=reason,
        projection=_projection(p, rate, n, mr, fv, start),
    )
    logger.debug(f"evaluate goal={goal} reached={outcome.reached} year={outcome.year_goal_is_reached}")
    return outcome


def sip_milestones(
    monthly_contribution,
    annual_rate_pct,
    years: Iterable[int] = (5, 10, 20),
) -> List[MilestoneRow]:
    rows: List[MilestoneRow] = []
    for y in years:
        n = _months(y, "years") * 12
        p, rate, _ = _validate(monthly_contribution, annual_rate_pct, n)
        fv = _future_value(p, _monthly_rate(rate), n)
        invested = p * Decimal(n)
        rows.append(
            MilestoneRow(
                years=n // 12,
                projected_value=_round_rupee(fv),
                total_invested=_round_rupee(invested),
                returns_generated=_round_rupee(fv - invested),
            )
        )
    return rows
