"""
models/response.py
Incoming response envelope.
Built straight from the service JSON and never mutated afterwards.
"""

from dataclasses import dataclass
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field

from apiai.core.exceptions import AIServiceError
from apiai.models.request import AIContext


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class Status(_Frozen):
    code: Optional[int] = None
    error_type: Optional[str] = Field(None, alias="errorType")
    error_id: Optional[str] = Field(None, alias="errorId")
    error_details: Optional[str] = Field(None, alias="errorDetails")


class Fulfillment(_Frozen):
    speech: Optional[str] = None
    messages: Optional[list[dict[str, Any]]] = None


class Metadata(_Frozen):
    intent_id: Optional[str] = Field(None, alias="intentId")
    intent_name: Optional[str] = Field(None, alias="intentName")
    webhook_used: Optional[str] = Field(None, alias="webhookUsed")


class Result(_Frozen):
    source: Optional[str] = None
    resolved_query: Optional[str] = Field(None, alias="resolvedQuery")
    action: Optional[str] = None
    action_incomplete: Optional[bool] = Field(None, alias="actionIncomplete")
    parameters: Optional[dict[str, Any]] = None
    contexts: Optional[list[AIContext]] = None
    fulfillment: Optional[Fulfillment] = None
    metadata: Optional[Metadata] = None
    score: Optional[float] = None


class AIResponse(_Frozen):
    id: Optional[str] = None
    timestamp: Optional[str] = None
    result: Optional[Result] = None
    status: Optional[Status] = None
    session_id: Optional[str] = Field(None, alias="sessionId")

    @property
    def is_error(self) -> bool:
        return self.status is not None and self.status.code is not None and self.status.code >= 400

    @property
    def error_message(self) -> Optional[str]:
        if self.status is None:
            return None
        return self.status.error_details or self.status.error_type


@dataclass(frozen=True)
class ContextResetResult:
    """Outcome of a context reset; the swallowed error is kept for inspection."""

    success: bool
    error: Optional[AIServiceError] = None

    def __bool__(self) -> bool:
        return self.success
