from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field


class ProjectionInput(BaseModel):
    monthly_contribution: float = Field(..., gt=0, description="SIP amount paid at the start of each month.")
    annual_rate_pct: float = Field(..., ge=0, le=100, description="Expected annual return, in percent.")
    horizon_months: int = Field(..., gt=0)


class YearPoint(BaseModel):
    year: int
    accumulated_value: int = Field(..., ge=0, description="Rounded to the nearest rupee.")


class ProjectionResult(BaseModel):
    monthly_contribution: float
    annual_rate_pct: float
    horizon_months: int
    monthly_rate: float
    final_value: float
    total_invested: float
    returns_generated: float
    year_series: List[YearPoint] = Field(default_factory=list)


class GoalInput(BaseModel):
    goal_name: str = "My Goal"
    goal_amount: float = Field(..., gt=0)
    monthly_contribution: float = Field(..., gt=0)
    annual_rate_pct: float = Field(8.0, ge=0, le=100)
    horizon_months: int = Field(..., gt=0)
    start_year: Optional[int] = None


class GoalOutcome(BaseModel):
    goal_name: str = "My Goal"
    goal_amount: float
    reached: bool
    value_at_target_year: float
    target_year: int
    year_goal_is_reached: Optional[int] = None
    months_needed: Optional[int] = None
    progress_pct: float
    shortfall: float
    required_monthly_for_target: Optional[float] = None
    reason: Optional[str] = None
    projection: ProjectionResult


class MilestoneRow(BaseModel):
    years: int
    projected_value: int
    total_invested: int
    returns_generated: int
