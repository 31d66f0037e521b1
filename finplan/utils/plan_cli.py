from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from finplan.core.config import SETTINGS
from finplan.utils.answer_format import format_currency, format_funds_md, format_goal_md
from finplan.utils.logging import setup_logging
from finplan.utils.quant_engine import InvalidInput
from finplan.utils.validators import validate_fund_catalog
from finplan.tools.quant_tools import (
    tool_evaluate_goal,
    tool_optimize_tax,
    tool_project,
    tool_recommend_funds,
)


def _emit(args: argparse.Namespace, data, text: str) -> None:
    if args.json:
        print(json.dumps(data, indent=2, default=str))
    else:
        print(text)


def cmd_project(args: argparse.Namespace) -> int:
    out = tool_project(
        {
            "monthly_contribution": args.monthly,
            "annual_rate_pct": args.rate,
            "horizon_years": args.years,
        },
        start_year=args.start_year,
    )
    sym = SETTINGS.currency_symbol
    lines = [
        f"Final value:      {format_currency(out['final_value'], sym)}",
        f"Total invested:   {format_currency(out['total_invested'], sym)}",
        f"Returns:          {format_currency(out['returns_generated'], sym)}",
    ]
    lines += [f"  {p['year']}: {format_currency(p['accumulated_value'], sym)}" for p in out["year_series"]]
    _emit(args, out, "\n".join(lines))
    return 0


def cmd_goal(args: argparse.Namespace) -> int:
    out = tool_evaluate_goal(
        {
            "goal_name": args.name,
            "goal_amount": args.amount,
            "monthly_contribution": args.monthly,
            "annual_rate_pct": args.rate,
            "horizon_years": args.years,
            "start_year": args.start_year,
        }
    )
    _emit(args, out, format_goal_md(out, SETTINGS.currency_symbol))
    return 0


def cmd_funds(args: argparse.Namespace) -> int:
    payload = {"risk_tier": args.tier, "category": args.category}
    if args.limit is not None:
        payload["limit"] = args.limit
    out = tool_recommend_funds(payload)
    _emit(args, out, f"{format_funds_md(out['funds'])}\n\n{out['allocation_guidance']}")
    return 0


def cmd_tax(args: argparse.Namespace) -> int:
    out = tool_optimize_tax(
        {
            "annual_income": args.income,
            "current_deductions": args.deductions,
            "employment_type": args.employment,
            "age_group": args.age_group,
            "regime": args.regime,
        }
    )
    sym = SETTINGS.currency_symbol
    lines = [
        f"Tax ({out['regime']}): {format_currency(out['tax_before'], sym)}",
        f"After suggestions:   {format_currency(out['tax_after'], sym)}",
        f"Potential savings:   {format_currency(out['potential_savings'], sym)}",
    ]
    for s in out["suggestions"]:
        lines.append(f"- [{s['priority']}] {s['section']} {s['title']}")
    for regime, tax in out["regime_comparison"].items():
        lines.append(f"{regime}: {format_currency(tax, sym)}")
    _emit(args, out, "\n".join(lines))
    return 0


def cmd_validate_funds(args: argparse.Namespace) -> int:
    rep = validate_fund_catalog(args.catalog or SETTINGS.fund_catalog)

    if args.json:
        print(rep.model_dump_json(indent=2))
    else:
        if rep.errors:
            print("❌ Fund catalogue validation FAILED")
            for e in rep.errors:
                print(f"ERROR: {e.message} ({e.location or ''})")
        else:
            print("✅ Fund catalogue OK (no errors)")

        for w in rep.warnings:
            print(f"WARN: {w.message} ({w.location or ''})")

    return 0 if rep.ok else 2


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="finplan", description="SIP, goal, fund and tax planning utilities")
    sub = p.add_subparsers(dest="cmd", required=True)

    pr = sub.add_parser("project", help="Project a monthly SIP")
    pr.add_argument("--monthly", required=True)
    pr.add_argument("--rate", default=SETTINGS.default_rate_pct)
    pr.add_argument("--years", required=True)
    pr.add_argument("--start_year", type=int, default=None)
    pr.add_argument("--json", action="store_true")
    pr.set_defaults(func=cmd_project)

    g = sub.add_parser("goal", help="Check whether a savings goal is reached")
    g.add_argument("--name", default="My Goal")
    g.add_argument("--amount", required=True)
    g.add_argument("--monthly", required=True)
    g.add_argument("--rate", default=SETTINGS.default_rate_pct)
    g.add_argument("--years", required=True)
    g.add_argument("--start_year", type=int, default=None)
    g.add_argument("--json", action="store_true")
    g.set_defaults(func=cmd_goal)

    f = sub.add_parser("funds", help="Recommend funds for a risk tier")
    f.add_argument("--tier", default="Medium")
    f.add_argument("--category", default="all")
    f.add_argument("--limit", type=int, default=None)
    f.add_argument("--json", action="store_true")
    f.set_defaults(func=cmd_funds)

    t = sub.add_parser("tax", help="Tax estimate and saving suggestions")
    t.add_argument("--income", required=True)
    t.add_argument("--deductions", default=0)
    t.add_argument("--employment", default="Salaried")
    t.add_argument("--age_group", default="Below 60")
    t.add_argument("--regime", default="Old Regime")
    t.add_argument("--json", action="store_true")
    t.set_defaults(func=cmd_tax)

    v = sub.add_parser("validate-funds", help="Validate the fund catalogue")
    v.add_argument("--catalog", default=None)
    v.add_argument("--json", action="store_true")
    v.set_defaults(func=cmd_validate_funds)

    return p


def main(argv: Optional[List[str]] = None) -> None:
    # stdout carries command output
    setup_logging(SETTINGS.log_level, stream=sys.stderr)
    args = build_parser().parse_args(argv)
    try:
        rc = args.func(args)
    except InvalidInput as e:
        print(f"ERROR: {e}")
        rc = 2
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
