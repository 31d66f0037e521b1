from __future__ import annotations

from abc import ABC, abstractmethod

from finplan.core.schemas import AgentRequest, AgentResponse, ErrorEnvelope


class BaseAgent(ABC):
    """All screen agents implement this interface."""

    name: str

    @abstractmethod
    def run(self, req: AgentRequest) -> AgentResponse:
        raise NotImplementedError

    def invalid_input(self, message: str, *, hint: str = "") -> AgentResponse:
        return AgentResponse(
            agent_name=self.name,
            answer_md=f"**Please check your inputs.** {message}" + (f"\n\n{hint}" if hint else ""),
            data={},
            warnings=["INVALID_INPUT"],
            confidence="low",
            error=ErrorEnvelope(code="INVALID_INPUT", message=message).model_dump(),
        )
