from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from finplan.utils.quant_models import GoalInput, ProjectionInput
from finplan.utils.tax_engine import TaxProfile


# -------------------------
# Common / Core
# -------------------------

class ChatMessage(BaseModel):
    role: Literal["user", "assistant"] = "user"
    content: str
    ts: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class UserProfile(BaseModel):
    name: Optional[str] = None
    risk_tier: Literal["Low", "Medium", "High"] = "Medium"
    currency_symbol: str = "₹"


class ErrorEnvelope(BaseModel):
    code: str
    message: str
    details: Optional[Dict[str, Any]] = None
    retriable: bool = False


# -------------------------
# Agent contracts
# -------------------------

SourceTab = Literal["goals", "funds", "tax", "coach"]


class AgentRequest(BaseModel):
    request_id: str
    session_id: str
    turn_id: int = 0

    user_text: str = ""
    user_profile: UserProfile = Field(default_factory=UserProfile)

    # optional structured inputs, one per screen
    goal: Optional[GoalInput] = None
    projection: Optional[ProjectionInput] = None
    tax_profile: Optional[TaxProfile] = None
    payload: Dict[str, Any] = Field(default_factory=dict)

    messages: List[ChatMessage] = Field(default_factory=list)


class AgentResponse(BaseModel):
    """Standard agent output: markdown for display plus structured ``data`` for charts."""

    model_config = ConfigDict(extra="allow")

    agent_name: str
    answer_md: str
    data: Dict[str, Any] = Field(default_factory=dict)
    warnings: List[str] = Field(default_factory=list)
    confidence: Literal["high", "medium", "low"] = "medium"
    error: Optional[Dict[str, Any]] = None
