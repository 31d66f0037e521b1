from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, ValidationError

from finplan.utils.answer_format import format_currency
from finplan.utils.logging import get_logger
from finplan.utils.quant_engine import InvalidInput

logger = get_logger("tax_engine")

Regime = Literal["Old Regime", "New Regime"]
EmploymentType = Literal["Salaried", "Self-employed", "Freelancer", "Business"]
AgeGroup = Literal["Below 60", "60-80", "80+"]
Priority = Literal["High", "Medium", "Low"]

STANDARD_DEDUCTION = Decimal(50000)
SECTION_80C_LIMIT = Decimal(150000)
DEFAULT_CESS_PCT = Decimal(4)

# (upper bound of slab, marginal rate); None = no upper bound
OLD_REGIME_SLABS: Sequence[Tuple[Optional[int], str]] = (
    (250000, "0"),
    (500000, "0.05"),
    (1000000, "0.20"),
    (None, "0.30"),
)

NEW_REGIME_SLABS: Sequence[Tuple[Optional[int], str]] = (
    (300000, "0"),
    (600000, "0.05"),
    (900000, "0.10"),
    (1200000, "0.15"),
    (1500000, "0.20"),
    (None, "0.30"),
)

_PRIORITY_ORDER: Dict[str, int] = {"High": 0, "Medium": 1, "Low": 2}


class TaxProfile(BaseModel):
    annual_income: float = Field(..., gt=0)
    current_deductions: float = Field(0.0, ge=0)
    employment_type: EmploymentType = "Salaried"
    age_group: AgeGroup = "Below 60"
    regime: Regime = "Old Regime"


class TaxSuggestion(BaseModel):
    section: str
    title: str
    description: str
    saving_amount: int
    priority: Priority
    risk_level: Optional[Literal["Low", "Medium", "High"]] = None
    lock_in_period: Optional[str] = None


class TaxReport(BaseModel):
    regime: Regime
    tax_before: int
    tax_after: int
    potential_savings: int
    suggestions: List[TaxSuggestion] = Field(default_factory=list)


def _slab_tax(taxable: Decimal, slabs: Sequence[Tuple[Optional[int], str]]) -> Decimal:
    tax = Decimal(0)
    lower = Decimal(0)
    for upper, rate in slabs:
        top = taxable if upper is None else min(taxable, Decimal(upper))
        if top > lower:
            tax += (top - lower) * Decimal(rate)
        if upper is None or taxable <= upper:
            break
        lower = Decimal(upper)
    return tax


def calculate_tax(
    annual_income,
    regime: str = "Old Regime",
    *,
    employment_type: str = "Salaried",
    deductions=0,
    cess_pct=DEFAULT_CESS_PCT,
) -> int:
    """Simplified income-tax estimate including health and education cess.

    Deductions and the salaried standard deduction only apply under the old regime.
    """
    try:
        profile = TaxProfile(
            annual_income=annual_income,
            current_deductions=deductions,
            employment_type=employment_type,
            regime=regime,
        )
    except ValidationError as e:
        raise InvalidInput(f"invalid tax profile: {e.errors()[0]['msg']}") from e

    taxable = Decimal(str(profile.annual_income))
    if profile.regime == "Old Regime":
        if profile.employment_type == "Salaried":
            taxable -= STANDARD_DEDUCTION
        taxable -= Decimal(str(profile.current_deductions))
        taxable = max(taxable, Decimal(0))
        tax = _slab_tax(taxable, OLD_REGIME_SLABS)
    else:
        tax = _slab_tax(taxable, NEW_REGIME_SLABS)

    tax = tax * (Decimal(1) + Decimal(str(cess_pct)) / Decimal(100))
    return int(tax.to_integral_value(rounding=ROUND_HALF_UP))


def _round(x: Decimal) -> int:
    return int(x.to_integral_value(rounding=ROUND_HALF_UP))


def _old_regime_suggestions(profile: TaxProfile) -> Tuple[List[TaxSuggestion], Decimal]:
    out: List[TaxSuggestion] = []
    savings = Decimal(0)
    deductions = Decimal(str(profile.current_deductions))

    if deductions < SECTION_80C_LIMIT:
        remaining = SECTION_80C_LIMIT - deductions
        # savings assume the 30% slab
        saving = remaining * Decimal("0.3")
        out.append(TaxSuggestion(
            section="80C",
            title="Maximize Section 80C Investments",
            description=f"Invest {format_currency(remaining)} more in ELSS, PPF, or other 80C instruments to reach the maximum limit.",
            saving_amount=_round(saving),
            priority="High",
            lock_in_period="Varies",
            risk_level="Low",
        ))
        savings += saving

    if deductions < Decimal(200000):
        out.append(TaxSuggestion(
            section="80CCD(1B)",
            title="Additional NPS Investment",
            description="Invest up to ₹50,000 in NPS to claim deduction under section 80CCD(1B), over and above the 80C limit.",
            saving_amount=15000,
            priority="Medium",
            lock_in_period="Until retirement",
            risk_level="Medium",
        ))
        savings += Decimal(15000)

    if profile.employment_type in ("Self-employed", "Freelancer"):
        out.append(TaxSuggestion(
            section="80D",
            title="Health Insurance Premium",
            description="Purchase health insurance for yourself and family members to claim deduction up to ₹25,000 (₹50,000 for senior citizens).",
            saving_amount=7500,
            priority="High",
            risk_level="Low",
        ))
        savings += Decimal(7500)

    if profile.annual_income > 1500000:
        out.append(TaxSuggestion(
            section="24(b)",
            title="Home Loan Interest Deduction",
            description="If you're planning to buy a house, you can claim up to ₹2,00,000 as deduction on home loan interest under section 24(b).",
            saving_amount=60000,
            priority="Medium",
            risk_level="Medium",
        ))
        savings += Decimal(60000)

    return out, savings


def _new_regime_suggestions(profile: TaxProfile) -> Tuple[List[TaxSuggestion], Decimal]:
    income = Decimal(str(profile.annual_income))
    out = [TaxSuggestion(
        section="Tax Planning",
        title="Compare Old vs New Regime",
        description="The new tax regime offers lower tax rates but fewer deductions. Calculate taxes under both regimes before deciding.",
        saving_amount=_round(income * Decimal("0.02")),
        priority="High",
        risk_level="Low",
    )]
    # regime comparison is advice only and does not count towards savings
    savings = Decimal(0)

    if profile.employment_type in ("Self-employed", "Freelancer"):
        saving = income * Decimal("0.05")
        out.append(TaxSuggestion(
            section="Business Expenses",
            title="Track Business Expenses",
            description="As a self-employed individual, maintain proper records of all business expenses which can be claimed as deductions.",
            saving_amount=_round(saving),
            priority="High",
            risk_level="Low",
        ))
        savings += saving

    return out, savings


def optimize_tax(profile: TaxProfile, *, cess_pct=DEFAULT_CESS_PCT) -> TaxReport:
    before = calculate_tax(
        profile.annual_income,
        profile.regime,
        employment_type=profile.employment_type,
        deductions=profile.current_deductions,
        cess_pct=cess_pct,
    )

    if profile.regime == "Old Regime":
        suggestions, savings = _old_regime_suggestions(profile)
    else:
        suggestions, savings = _new_regime_suggestions(profile)

    if profile.age_group in ("60-80", "80+"):
        suggestions.append(TaxSuggestion(
            section="80D",
            title="Enhanced Medical Benefits for Seniors",
            description="Senior citizens can claim higher deduction for health insurance premiums and medical expenses.",
            saving_amount=15000,
            priority="High",
            risk_level="Low",
        ))
        savings += Decimal(15000)

    suggestions.sort(key=lambda s: _PRIORITY_ORDER[s.priority])
    potential = _round(savings)
    after = max(0, before - potential)

    logger.debug(f"optimize_tax regime={profile.regime} before={before} after={after} suggestions={len(suggestions)}")
    return TaxReport(
        regime=profile.regime,
        tax_before=before,
        tax_after=after,
        potential_savings=potential,
        suggestions=suggestions,
    )


def compare_regimes(profile: TaxProfile, *, cess_pct=DEFAULT_CESS_PCT) -> Dict[str, int]:
    return {
        regime: calculate_tax(
            profile.annual_income,
            regime,
            employment_type=profile.employment_type,
            deductions=profile.current_deductions,
            cess_pct=cess_pct,
        )
        for regime in ("Old Regime", "New Regime")
    }
