from __future__ import annotations

from typing import Any, Dict, List, Optional

from finplan.agents.base_agent import BaseAgent
from finplan.core.schemas import AgentRequest, AgentResponse
from finplan.tools.quant_tools import tool_optimize_tax
from finplan.utils.answer_format import format_currency
from finplan.utils.logging import agent_context, get_logger
from finplan.utils.quant_engine import InvalidInput

logger = get_logger("tax_agent")

DISCLAIMER = (
    "**Disclaimer:** This is a simplified estimate for general education only. "
    "Tax rules change; verify with official guidance or a qualified advisor."
)


def _extract_profile(req: AgentRequest) -> Optional[Dict[str, Any]]:
    if req.tax_profile is not None:
        return req.tax_profile.model_dump()
    tp = req.payload.get("tax_profile")
    if isinstance(tp, dict):
        return tp
    return None


def _suggestion_lines(suggestions: List[Dict[str, Any]], sym: str) -> List[str]:
    lines = []
    for s in suggestions:
        extra = []
        if s.get("lock_in_period"):
            extra.append(f"lock-in: {s['lock_in_period']}")
        if s.get("risk_level"):
            extra.append(f"risk: {s['risk_level']}")
        suffix = f" ({', '.join(extra)})" if extra else ""
        lines.append(
            f"- **[{s['priority']}] {s['section']} - {s['title']}**: {s['description']} "
            f"Estimated saving {format_currency(s['saving_amount'], sym)}.{suffix}"
        )
    return lines


class TaxAgent(BaseAgent):
    name = "tax_agent"

    def run(self, req: AgentRequest) -> AgentResponse:
        with agent_context(self.name):
            profile = _extract_profile(req)
            if not profile:
                return AgentResponse(
                    agent_name=self.name,
                    answer_md="Please enter your annual income",
                    warnings=["MISSING_TAX_PROFILE"],
                    confidence="low",
                )

            try:
                report = tool_optimize_tax(profile)
            except InvalidInput as e:
                logger.warning(f"invalid_tax_profile detail={e}")
                return self.invalid_input(str(e))

            sym = req.user_profile.currency_symbol
            comparison = report["regime_comparison"]
            lines = [
                f"## Tax estimate ({report['regime']})",
                f"- Tax before optimization: **{format_currency(report['tax_before'], sym)}**",
                f"- Tax after optimization: **{format_currency(report['tax_after'], sym)}**",
                f"- Potential savings: **{format_currency(report['potential_savings'], sym)}**",
                "",
                "### Regime comparison",
            ]
            lines += [f"- {regime}: {format_currency(tax, sym)}" for regime, tax in comparison.items()]
            lines += ["", "### Suggestions"]
            lines += _suggestion_lines(report["suggestions"], sym) or ["- (none)"]
            lines += ["", DISCLAIMER]

            logger.info(f"tax_optimized regime={report['regime']} suggestions={len(report['suggestions'])}")
            return AgentResponse(
                agent_name=self.name,
                answer_md="\n".join(lines),
                data={"report": report},
                confidence="medium",
            )
