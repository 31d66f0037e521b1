from __future__ import annotations

from typing import Any, Dict

from finplan.agents.base_agent import BaseAgent
from finplan.core.schemas import AgentRequest, AgentResponse, ErrorEnvelope
from finplan.tools.quant_tools import tool_recommend_funds, tool_sip_milestones
from finplan.utils.answer_format import format_currency, format_funds_md, format_pct
from finplan.utils.logging import agent_context, get_logger
from finplan.utils.quant_engine import InvalidInput

logger = get_logger("fund_agent")

DISCLAIMER = (
    "**Disclaimer:** Past performance is not indicative of future results. Mutual fund investments "
    "are subject to market risks. These recommendations are for educational purposes only."
)


class FundAgent(BaseAgent):
    name = "fund_agent"

    def run(self, req: AgentRequest) -> AgentResponse:
        with agent_context(self.name):
            payload: Dict[str, Any] = dict(req.payload)
            if req.projection is not None:
                payload.setdefault("monthly_contribution", req.projection.monthly_contribution)
                payload.setdefault("annual_rate_pct", req.projection.annual_rate_pct)
            payload.setdefault("risk_tier", req.user_profile.risk_tier)
            funds = payload.pop("funds", None)

            try:
                recs = tool_recommend_funds(payload, funds=funds)
                milestones = (
                    tool_sip_milestones(payload, years=payload.get("milestone_years"))
                    if payload.get("monthly_contribution") is not None
                    else []
                )
            except InvalidInput as e:
                logger.warning(f"invalid_fund_request detail={e}")
                return self.invalid_input(str(e))
            except (OSError, ValueError) as e:
                logger.exception("fund_catalog_unavailable")
                return AgentResponse(
                    agent_name=self.name,
                    answer_md="The fund catalogue could not be loaded.",
                    warnings=["CATALOG_UNAVAILABLE"],
                    confidence="low",
                    error=ErrorEnvelope(code="CATALOG_UNAVAILABLE", message=str(e)).model_dump(),
                )

            sym = req.user_profile.currency_symbol
            lines = [f"## Recommended funds ({recs['risk_tier']} risk)", format_funds_md(recs["funds"]), ""]
            if milestones:
                lines.append(
                    f"### SIP growth at {format_pct(payload['annual_rate_pct'])}"
                    if payload.get("annual_rate_pct") is not None
                    else "### SIP growth"
                )
                for m in milestones:
                    lines.append(
                        f"- **{m['years']} years**: {format_currency(m['projected_value'], sym)} "
                        f"(invested {format_currency(m['total_invested'], sym)})"
                    )
                lines.append("")
            lines += [f"> {recs['allocation_guidance']}", "", DISCLAIMER]

            warnings = [] if recs["funds"] else ["NO_MATCHING_FUNDS"]
            logger.info(f"funds_recommended tier={recs['risk_tier']} count={len(recs['funds'])}")
            return AgentResponse(
                agent_name=self.name,
                answer_md="\n".join(lines),
                data={"recommendations": recs, "milestones": milestones},
                warnings=warnings,
                confidence="high",
            )
