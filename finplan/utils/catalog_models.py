from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

RiskTier = Literal["Low", "Medium", "High"]


class FundRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: str
    risk_tier: RiskTier
    three_year_return_pct: float
    five_year_return_pct: float
    aum_crore: float = Field(0.0, description="Assets under management, in crores.")
    expense_ratio_pct: float = 0.0
    note: str = ""


class ValidationIssue(BaseModel):
    level: str  # ERROR | WARN
    message: str
    location: Optional[str] = None


class ValidationReport(BaseModel):
    ok: bool
    errors: List[ValidationIssue] = Field(default_factory=list)
    warnings: List[ValidationIssue] = Field(default_factory=list)

    def add_error(self, msg: str, location: Optional[str] = None) -> None:
        self.errors.append(ValidationIssue(level="ERROR", message=msg, location=location))

    def add_warning(self, msg: str, location: Optional[str] = None) -> None:
        self.warnings.append(ValidationIssue(level="WARN", message=msg, location=location))

    def finalize(self) -> "ValidationReport":
        self.ok = len(self.errors) == 0
        return self
