import pytest

from finplan.core.config import DEFAULT_FUND_CATALOG
from finplan.utils.catalog_loader import load_funds
from finplan.utils.catalog_models import FundRecord
from finplan.utils.fund_filter import allocation_guidance, filter_by_category, normalize_tier, recommend
from finplan.utils.quant_engine import InvalidInput


@pytest.fixture(scope="module")
def funds():
    return load_funds(DEFAULT_FUND_CATALOG)


def _fund(i, tier, five):
    return FundRecord(
        id=str(i), name=f"Fund {i}", category="Debt Fund", risk_tier=tier,
        three_year_return_pct=five, five_year_return_pct=five,
    )


def test_low_tier_only_low_funds_best_first(funds):
    out = recommend(funds, "Low")
    assert [f.name for f in out] == [
        "Corporate Bond Fund",
        "Fixed Income Securities Fund",
        "Short-Term Debt Fund",
    ]
    assert all(f.risk_tier == "Low" for f in out)


def test_medium_tier_accepts_low_and_medium(funds):
    out = recommend(funds, "Medium")
    assert [f.id for f in out] == ["6", "1", "5", "4", "9"]
    assert {f.risk_tier for f in out} <= {"Low", "Medium"}


def test_high_tier_accepts_everything(funds):
    out = recommend(funds, "High", limit=20)
    assert len(out) == 9
    assert out[0].name == "Small Cap Opportunities Fund"
    returns = [f.five_year_return_pct for f in out]
    assert returns == sorted(returns, reverse=True)


def test_limit_truncates(funds):
    assert len(recommend(funds, "High", limit=2)) == 2
    assert recommend(funds, "High", limit=0) == []
    with pytest.raises(InvalidInput):
        recommend(funds, "High", limit=-1)


def test_ties_keep_catalogue_order():
    catalogue = [_fund(1, "Low", 7.0), _fund(2, "Low", 9.0), _fund(3, "Low", 7.0), _fund(4, "Low", 7.0)]
    assert [f.id for f in recommend(catalogue, "Low")] == ["2", "1", "3", "4"]


def test_empty_catalogue():
    assert recommend([], "Medium") == []


def test_recommend_does_not_mutate_input(funds):
    before = list(funds)
    recommend(funds, "High")
    assert funds == before


def test_tier_is_case_insensitive():
    assert normalize_tier("low") == "Low"
    assert normalize_tier(" HIGH ") == "High"


def test_unknown_tier_rejected(funds):
    with pytest.raises(InvalidInput):
        recommend(funds, "Extreme")


def test_category_tabs(funds):
    assert {f.id for f in filter_by_category(funds, "debt")} == {"2", "7", "9"}
    assert [f.id for f in filter_by_category(funds, "hybrid")] == ["4"]
    assert {f.id for f in filter_by_category(funds, "equity")} == {"1", "3", "6", "8"}
    assert len(filter_by_category(funds, "all")) == 9
    with pytest.raises(InvalidInput):
        filter_by_category(funds, "gold")


def test_allocation_guidance():
    assert "20-30% in equity" in allocation_guidance("Low")
    assert "balanced" in allocation_guidance("Medium")
    assert "growth-oriented" in allocation_guidance("high")
