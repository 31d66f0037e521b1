import pytest

from finplan.utils.quant_engine import InvalidInput
from finplan.utils.validators import parse_goal_form, parse_number, parse_projection_input


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("500000", 500000.0),
        ("₹5,00,000", 500000.0),
        ("Rs. 1,200", 1200.0),
        ("12%", 12.0),
        (" 7.5 ", 7.5),
        (2500, 2500.0),
    ],
)
def test_parse_number(raw, expected):
    assert parse_number(raw, "amount") == expected


@pytest.mark.parametrize("raw", ["", None, "abc", "1e5", "12..5", True])
def test_parse_number_rejects(raw):
    with pytest.raises(InvalidInput):
        parse_number(raw, "amount")


def test_parse_projection_input_years_to_months():
    inp = parse_projection_input("5,000", "12", "3")
    assert inp.monthly_contribution == 5000
    assert inp.annual_rate_pct == 12
    assert inp.horizon_months == 36


def test_parse_projection_input_rejects_fractional_years():
    with pytest.raises(InvalidInput):
        parse_projection_input(5000, 12, "2.5")


def test_parse_projection_input_rejects_zero_contribution():
    with pytest.raises(InvalidInput, match="monthly_contribution"):
        parse_projection_input(0, 12, 3)


def test_parse_goal_form():
    g = parse_goal_form(
        goal_name=" House ",
        goal_amount="₹50,00,000",
        target_year=2035,
        monthly_contribution="25000",
        annual_rate_pct=9,
        current_year=2025,
    )
    assert g.goal_name == "House"
    assert g.goal_amount == 5_000_000
    assert g.horizon_months == 120
    assert g.start_year == 2025


def test_parse_goal_form_past_year():
    with pytest.raises(InvalidInput, match="future"):
        parse_goal_form(
            goal_name="Car",
            goal_amount=500000,
            target_year=2025,
            monthly_contribution=10000,
            annual_rate_pct=8,
            current_year=2025,
        )


def test_parse_goal_form_requires_name():
    with pytest.raises(InvalidInput, match="goal_name"):
        parse_goal_form(
            goal_name="  ",
            goal_amount=500000,
            target_year=2030,
            monthly_contribution=10000,
            annual_rate_pct=8,
            current_year=2025,
        )
