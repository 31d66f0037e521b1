import pytest

from finplan.utils.quant_engine import InvalidInput
from finplan.utils.tax_engine import TaxProfile, calculate_tax, compare_regimes, optimize_tax


def test_old_regime_salaried_uses_standard_deduction():
    # taxable 9.5L: 12,500 + 90,000, plus 4% cess
    assert calculate_tax(1_000_000, "Old Regime") == 106600


def test_old_regime_deductions_lower_tax():
    assert calculate_tax(1_000_000, "Old Regime", deductions=150000) == 75400


def test_old_regime_self_employed_has_no_standard_deduction():
    # taxable 10L: 12,500 + 1,00,000, plus 4% cess
    assert calculate_tax(1_000_000, "Old Regime", employment_type="Self-employed") == 117000


def test_new_regime_ignores_deductions():
    assert calculate_tax(1_000_000, "New Regime") == 62400
    assert calculate_tax(1_000_000, "New Regime", deductions=150000) == 62400


def test_income_below_first_slab_is_untaxed():
    assert calculate_tax(250000, "Old Regime", employment_type="Business") == 0
    assert calculate_tax(300000, "New Regime") == 0


def test_cess_is_configurable():
    assert calculate_tax(1_000_000, "New Regime", cess_pct=0) == 60000


def test_invalid_profile_rejected():
    with pytest.raises(InvalidInput):
        calculate_tax(-1, "Old Regime")
    with pytest.raises(InvalidInput):
        calculate_tax(1_000_000, "Flat Regime")


def test_old_regime_suggestions_sorted_by_priority():
    report = optimize_tax(TaxProfile(annual_income=1_000_000, employment_type="Freelancer"))
    sections = [s.section for s in report.suggestions]
    assert sections == ["80C", "80D", "80CCD(1B)"]
    assert report.suggestions[0].saving_amount == 45000
    assert "₹1,50,000" in report.suggestions[0].description
    assert report.potential_savings == 45000 + 7500 + 15000
    assert report.tax_after == report.tax_before - report.potential_savings


def test_high_income_gets_home_loan_suggestion():
    report = optimize_tax(TaxProfile(annual_income=2_000_000, current_deductions=150000))
    sections = [s.section for s in report.suggestions]
    assert "80C" not in sections
    assert "24(b)" in sections


def test_new_regime_comparison_advice_does_not_count_as_savings():
    report = optimize_tax(TaxProfile(annual_income=1_000_000, regime="New Regime"))
    assert report.suggestions[0].section == "Tax Planning"
    assert report.suggestions[0].saving_amount == 20000
    assert report.potential_savings == 0
    assert report.tax_after == report.tax_before


def test_senior_citizen_medical_suggestion():
    report = optimize_tax(TaxProfile(annual_income=800000, age_group="60-80", regime="New Regime"))
    assert any(s.title == "Enhanced Medical Benefits for Seniors" for s in report.suggestions)
    assert report.potential_savings == 15000


def test_tax_after_never_negative():
    report = optimize_tax(TaxProfile(annual_income=400000, employment_type="Self-employed"))
    assert report.tax_after == 0


def test_compare_regimes():
    out = compare_regimes(TaxProfile(annual_income=1_000_000))
    assert out == {"Old Regime": 106600, "New Regime": 62400}
