from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, List

from finplan.utils.catalog_models import FundRecord
from finplan.utils.quant_engine import InvalidInput

DEFAULT_LIMIT = 5

# Lower-risk funds stay acceptable as tolerance rises; not a symmetric match.
_ACCEPTED_TIERS: Dict[str, FrozenSet[str]] = {
    "Low": frozenset({"Low"}),
    "Medium": frozenset({"Low", "Medium"}),
    "High": frozenset({"Low", "Medium", "High"}),
}

_ALLOCATION_GUIDANCE: Dict[str, str] = {
    "Low": "Your conservative profile suggests a portfolio with 20-30% in equity funds and 70-80% in debt funds.",
    "Medium": "Your moderate profile suggests a balanced portfolio with 50-60% in equity funds and 40-50% in debt funds.",
    "High": "Your aggressive profile suggests a growth-oriented portfolio with 70-80% in equity funds and 20-30% in debt funds.",
}

CATEGORY_TABS = ("all", "equity", "debt", "hybrid")


def normalize_tier(risk_tier: str) -> str:
    tier = str(risk_tier or "").strip().capitalize()
    if tier not in _ACCEPTED_TIERS:
        raise InvalidInput(f"risk tier must be one of Low/Medium/High, got {risk_tier!r}")
    return tier


def recommend(all_funds: Iterable[FundRecord], risk_tier: str, *, limit: int = DEFAULT_LIMIT) -> List[FundRecord]:
    """Funds acceptable for ``risk_tier``, best five-year return first.

    Ties keep catalogue order. Recomputed on every call.
    """
    accepted = _ACCEPTED_TIERS[normalize_tier(risk_tier)]
    if limit < 0:
        raise InvalidInput(f"limit must not be negative, got {limit}")

    eligible = [f for f in all_funds if f.risk_tier in accepted]
    eligible.sort(key=lambda f: f.five_year_return_pct, reverse=True)
    return eligible[:limit]


def _in_tab(fund: FundRecord, tab: str) -> bool:
    cat = fund.category
    if tab == "equity":
        return "Equity" in cat or "Cap" in cat or cat == "ELSS"
    if tab == "debt":
        return "Debt" in cat
    if tab == "hybrid":
        return "Hybrid" in cat or "Balanced" in cat
    return True


def filter_by_category(funds: Iterable[FundRecord], tab: str = "all") -> List[FundRecord]:
    key = (tab or "all").strip().lower()
    if key not in CATEGORY_TABS:
        raise InvalidInput(f"category tab must be one of {CATEGORY_TABS}, got {tab!r}")
    return [f for f in funds if _in_tab(f, key)]


def allocation_guidance(risk_tier: str) -> str:
    return _ALLOCATION_GUIDANCE[normalize_tier(risk_tier)]
